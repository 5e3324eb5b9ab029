"""CLI entrypoints."""

from __future__ import annotations

import logging
import sys

import uvicorn

from .asgi import create_app
from .logging_config import setup_logging
from .mcp_server import create_mcp_server
from .settings import Settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Serve the MCP Streamable HTTP endpoint."""
    settings = Settings()
    setup_logging(settings.log_level)
    logger.info("Context11 MCP HTTP server on %s:%s", settings.mcp_host, settings.mcp_port)
    uvicorn.run(
        create_app(settings),
        host=settings.mcp_host,
        port=settings.mcp_port,
        log_level=settings.log_level.lower(),
    )


def stdio_main() -> None:
    """Serve MCP over stdin/stdout with the credential taken from the environment."""
    settings = Settings()
    setup_logging(settings.log_level)
    if not settings.context11_api_key:
        print("Error: CONTEXT11_API_KEY environment variable is required", file=sys.stderr)
        sys.exit(1)
    create_mcp_server(settings).run(transport="stdio")


if __name__ == "__main__":
    main()
