"""Knowledge-base operations behind the MCP tools.

Each operation issues at most one API call and renders the response as
Markdown-flavoured text. Failures from the client (or local argument checks)
come back as an error-flagged ``ToolResult`` instead of being raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, TypeVar

import pydantic
from mcp.types import CallToolResult, TextContent

from .context11_client import Context11Client
from .errors import Context11Error, ErrorKind, ParseError, ValidationError
from .models import (
    Document,
    FolderDocumentsResponse,
    FoldersResponse,
    SearchResponse,
)
from .rich_text import extract_text

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


@dataclass(frozen=True, slots=True)
class ToolResult:
    text: str
    error: ErrorKind | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, text: str) -> ToolResult:
        return cls(text=text)

    @classmethod
    def failure(cls, action: str, exc: Context11Error) -> ToolResult:
        logger.info("Tool failed while %s: %s", action, exc)
        return cls(text=f"Error {action}: {exc}", error=exc.kind)

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


def _parse(model: type[ModelT], raw: Any) -> ModelT:
    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise ParseError(
            f"Unexpected response shape for {model.__name__}: {exc.error_count()} error(s)"
        ) from exc


def _document_block(doc: Document, *, created: bool, updated_label: str) -> str:
    lines = [f"Folder: {doc.folder_name}"]
    if created:
        lines.append(f"Created: {doc.created_at}")
    lines.append(f"{updated_label}: {doc.updated_at}")
    meta = "\n".join(lines)
    return f"# {doc.title}\n\n{meta}\n\n---\n\n{extract_text(doc.content)}"


async def search_context(client: Context11Client, query: str, limit: int = 10) -> ToolResult:
    try:
        raw = await client.request_json(
            "POST", "/api/mcp/search", json_body={"query": query, "limit": limit}
        )
        results = _parse(SearchResponse, raw).results
    except Context11Error as exc:
        return ToolResult.failure("searching knowledge base", exc)

    if not results:
        return ToolResult.ok("No results found for your search query.")

    formatted = "\n\n".join(
        f"{i}. **{r.title}** (score: {r.score:.2f})\n   ID: {r.document_id}\n   {r.preview}"
        for i, r in enumerate(results, 1)
    )
    return ToolResult.ok(f"Found {len(results)} result(s):\n\n{formatted}")


async def get_document(client: Context11Client, id: str) -> ToolResult:
    try:
        doc = _parse(Document, await client.request_json("GET", f"/api/mcp/documents/{id}"))
    except Context11Error as exc:
        return ToolResult.failure("retrieving document", exc)
    return ToolResult.ok(_document_block(doc, created=False, updated_label="Last updated"))


async def list_folders(client: Context11Client) -> ToolResult:
    try:
        folders = _parse(FoldersResponse, await client.request_json("GET", "/api/mcp/folders")).folders
    except Context11Error as exc:
        return ToolResult.failure("listing folders", exc)

    if not folders:
        return ToolResult.ok("No folders found in the workspace.")

    entries = []
    for f in folders:
        entry = (
            f"- **{f.name}** (ID: {f.id})\n"
            f"  Documents: {f.document_count}, Subfolders: {f.child_folder_count}"
        )
        if f.parent_id:
            entry += f"\n  Parent: {f.parent_id}"
        entries.append(entry)
    formatted = "\n\n".join(entries)
    return ToolResult.ok(f"Found {len(folders)} folder(s):\n\n{formatted}")


async def list_documents(client: Context11Client, folder_id: str) -> ToolResult:
    try:
        raw = await client.request_json("GET", f"/api/mcp/folders/{folder_id}/documents")
        listing = _parse(FolderDocumentsResponse, raw)
    except Context11Error as exc:
        return ToolResult.failure("listing documents", exc)

    name = listing.folder.name
    if not listing.documents:
        return ToolResult.ok(f'No documents found in folder "{name}".')

    formatted = "\n\n".join(
        f"- **{d.title}** (ID: {d.id})\n  Created: {d.created_at}\n  Updated: {d.updated_at}"
        for d in listing.documents
    )
    return ToolResult.ok(
        f"Folder: {name}\n\nFound {len(listing.documents)} document(s):\n\n{formatted}"
    )


async def read_document(client: Context11Client, document_id: str) -> ToolResult:
    try:
        raw = await client.request_json("GET", f"/api/mcp/documents/{document_id}")
        doc = _parse(Document, raw)
    except Context11Error as exc:
        return ToolResult.failure("reading document", exc)
    return ToolResult.ok(_document_block(doc, created=True, updated_label="Updated"))


async def update_document(
    client: Context11Client,
    document_id: str,
    title: str | None = None,
    content: str | None = None,
) -> ToolResult:
    try:
        # Empty strings count as "not provided".
        if not title and not content:
            raise ValidationError("At least one of 'title' or 'content' must be provided.")
        payload: dict[str, Any] = {}
        if title:
            payload["title"] = title
        if content:
            payload["content"] = content
        raw = await client.request_json(
            "PATCH", f"/api/mcp/documents/{document_id}", json_body=payload
        )
        doc = _parse(Document, raw)
    except Context11Error as exc:
        return ToolResult.failure("updating document", exc)
    block = _document_block(doc, created=False, updated_label="Updated")
    return ToolResult.ok(f"Document updated successfully!\n\n{block}")
