"""Async client for the Context11 MCP REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import ApiError, NetworkError, ParseError
from .settings import DEFAULT_API_URL

logger = logging.getLogger(__name__)


def build_http_client(
    timeout_seconds: float | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared connection pool used by every tool invocation.

    Without ``timeout_seconds`` requests never time out.
    """
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(timeout_seconds),
        transport=transport,
    )


@dataclass(frozen=True, slots=True)
class Context11Client:
    """Authenticated view of the Context11 API for a single credential.

    Cheap to build: the underlying ``httpx.AsyncClient`` is shared and owned
    by whoever created it.
    """

    http: httpx.AsyncClient
    api_key: str
    base_url: str = DEFAULT_API_URL

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        method = method.upper()
        # Endpoints start with "/" and are appended without normalization.
        url = f"{self.base_url}{endpoint}"
        merged = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            **(headers or {}),
        }

        logger.debug("%s %s", method, url)
        try:
            resp = await self.http.request(method, url, json=json_body, headers=merged)
        except httpx.TransportError as exc:
            raise NetworkError(str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            logger.warning("Context11 API returned %s for %s %s", resp.status_code, method, url)
            raise ApiError(
                status_code=resp.status_code,
                method=method,
                url=url,
                response_text=resp.text,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON in response from {method} {endpoint}: {exc}") from exc
