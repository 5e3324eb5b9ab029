"""Application settings (env/.env)."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://context11.com"


class Settings(BaseSettings):
    """Settings for the MCP server and the Context11 API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required by the stdio transport only; the HTTP transport takes the key
    # from each request's X-API-Key header.
    context11_api_key: str | None = Field(default=None, alias="CONTEXT11_API_KEY")
    # Endpoint paths are appended verbatim, so no trailing slash.
    context11_url: str = Field(default=DEFAULT_API_URL, alias="CONTEXT11_URL", min_length=1)

    mcp_host: str = Field(default="127.0.0.1", alias="MCP_HOST")
    mcp_port: int = Field(default=3000, alias="PORT", ge=1, le=65535)

    http_timeout_seconds: float | None = Field(
        default=None,
        alias="HTTP_TIMEOUT_SECONDS",
        gt=0,
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
