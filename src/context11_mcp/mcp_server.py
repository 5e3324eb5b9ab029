"""FastMCP server definition (tools)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Annotated

import httpx
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from . import tools
from .context11_client import Context11Client, build_http_client
from .settings import Settings

SERVER_NAME = "context11"
SERVER_VERSION = "1.2.0"

API_KEY_HEADER = "x-api-key"

UPDATE_CONTENT_EXAMPLE = (
    '{"type":"doc","content":[{"type":"paragraph","content":'
    '[{"type":"text","text":"Your text here"}]}]}'
)


@dataclass(slots=True)
class AppContext:
    settings: Settings
    http: httpx.AsyncClient


def _client(ctx: Context) -> Context11Client:
    """Build the per-invocation API client.

    Over Streamable HTTP the credential is the caller's X-API-Key header;
    over stdio it comes from settings.
    """
    app: AppContext = ctx.request_context.lifespan_context
    request = ctx.request_context.request
    api_key = None
    if request is not None:
        api_key = request.headers.get(API_KEY_HEADER)
    return Context11Client(
        http=app.http,
        api_key=api_key or app.settings.context11_api_key or "",
        base_url=app.settings.context11_url,
    )


def create_mcp_server(
    settings: Settings,
    *,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    @asynccontextmanager
    async def lifespan(_: FastMCP) -> AsyncIterator[AppContext]:
        http = build_http_client(settings.http_timeout_seconds, transport=http_transport)
        try:
            yield AppContext(settings=settings, http=http)
        finally:
            await http.aclose()

    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            "Search and read the company knowledge base (Context11). "
            "Use search_context to find relevant documents, then read them by ID."
        ),
        lifespan=lifespan,
        stateless_http=True,
        json_response=True,
    )

    @mcp.tool(
        name="search_context",
        description="Search the company knowledge base for relevant context, guidelines, and rules",
    )
    async def search_context(
        query: Annotated[str, Field(description="What to search for in the knowledge base")],
        ctx: Context,
        limit: Annotated[
            int, Field(description="Maximum number of results to return (default: 10)")
        ] = 10,
    ) -> CallToolResult:
        result = await tools.search_context(_client(ctx), query, limit)
        return result.to_call_tool_result()

    @mcp.tool(
        name="get_document",
        description="Get the full content of a specific document by ID",
    )
    async def get_document(
        id: Annotated[str, Field(description="Document ID from search results")],
        ctx: Context,
    ) -> CallToolResult:
        result = await tools.get_document(_client(ctx), id)
        return result.to_call_tool_result()

    @mcp.tool(name="list_folders", description="List all folders in the workspace")
    async def list_folders(ctx: Context) -> CallToolResult:
        result = await tools.list_folders(_client(ctx))
        return result.to_call_tool_result()

    # Argument names below are the published camelCase tool schema.
    @mcp.tool(name="list_documents", description="List all documents in a specific folder")
    async def list_documents(
        folderId: Annotated[str, Field(description="The folder ID to list documents from")],  # noqa: N803
        ctx: Context,
    ) -> CallToolResult:
        result = await tools.list_documents(_client(ctx), folderId)
        return result.to_call_tool_result()

    @mcp.tool(name="read_document", description="Read a document's full content by ID")
    async def read_document(
        documentId: Annotated[str, Field(description="The document ID to read")],  # noqa: N803
        ctx: Context,
    ) -> CallToolResult:
        result = await tools.read_document(_client(ctx), documentId)
        return result.to_call_tool_result()

    @mcp.tool(
        name="update_document",
        description=(
            "Update a document's title and/or content. Content must be in Tiptap JSON format."
        ),
    )
    async def update_document(
        documentId: Annotated[str, Field(description="The document ID to update")],  # noqa: N803
        ctx: Context,
        title: Annotated[str | None, Field(description="New title for the document")] = None,
        content: Annotated[
            str | None,
            Field(description=f"New content in Tiptap JSON format. Example: {UPDATE_CONTENT_EXAMPLE}"),
        ] = None,
    ) -> CallToolResult:
        result = await tools.update_document(_client(ctx), documentId, title, content)
        return result.to_call_tool_result()

    return mcp
