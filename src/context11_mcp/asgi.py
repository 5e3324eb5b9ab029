"""ASGI app hosting the MCP Streamable HTTP endpoint."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator, Awaitable, Callable

import httpx
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .mcp_server import API_KEY_HEADER, SERVER_VERSION, create_mcp_server
from .settings import Settings

logger = logging.getLogger(__name__)

# JSON-RPC server-defined error code for a request without a credential.
MISSING_CREDENTIAL_CODE = -32001


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests that carry no X-API-Key.

    The key is not checked here; it is forwarded to the Context11 API as the
    bearer credential, which decides whether it is valid.
    """

    @staticmethod
    def _bypass_auth(path: str) -> bool:
        # Allow unauthenticated health checks and OAuth discovery probes.
        # Some MCP clients probe these endpoints before sending custom headers.
        if path == "/health":
            return True
        if path.startswith("/.well-known/"):
            return True
        return False

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if self._bypass_auth(request.url.path):
            return await call_next(request)
        if not request.headers.get(API_KEY_HEADER):
            logger.info("Rejected %s %s: missing X-API-Key", request.method, request.url.path)
            return JSONResponse(
                {
                    "jsonrpc": "2.0",
                    "error": {"code": MISSING_CREDENTIAL_CODE, "message": "Missing credential"},
                    "id": None,
                },
                status_code=401,
            )
        return await call_next(request)


async def health(_: Request) -> Response:
    return JSONResponse({"status": "ok", "version": SERVER_VERSION})


def create_app(
    settings: Settings | None = None,
    *,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> Starlette:
    settings = settings or Settings()
    mcp = create_mcp_server(settings, http_transport=http_transport)

    @contextlib.asynccontextmanager
    async def lifespan(_: Starlette) -> AsyncIterator[None]:
        # Streamable HTTP transport uses a session manager.
        async with mcp.session_manager.run():
            yield

    app = Starlette(
        routes=[
            Route("/health", endpoint=health, methods=["GET"]),
        ],
        lifespan=lifespan,
    )

    # Mount MCP at /mcp (default for streamable-http when mounted at /).
    app.mount("/", mcp.streamable_http_app())
    app.add_middleware(ApiKeyMiddleware)
    return app
