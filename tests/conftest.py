from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from context11_mcp.context11_client import Context11Client

BASE_URL = "https://kb.example.test"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class RecordingApi:
    """httpx transport stub that records requests and replies from a handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_client() -> Callable[..., tuple[Context11Client, RecordingApi]]:
    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        *,
        api_key: str = "secret-key",
        base_url: str = BASE_URL,
    ) -> tuple[Context11Client, RecordingApi]:
        api = RecordingApi(handler)
        http = httpx.AsyncClient(transport=httpx.MockTransport(api))
        return Context11Client(http=http, api_key=api_key, base_url=base_url), api

    return factory
