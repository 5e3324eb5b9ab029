from __future__ import annotations

import httpx
import pytest

from context11_mcp.context11_client import build_http_client
from context11_mcp.errors import ApiError, ErrorKind, NetworkError, ParseError

BASE_URL = "https://kb.example.test"

pytestmark = pytest.mark.anyio


async def test_sets_auth_and_content_type_headers(make_client) -> None:
    client, api = make_client(lambda _: httpx.Response(200, json={"ok": True}))

    data = await client.request_json("GET", "/api/mcp/folders")

    assert data == {"ok": True}
    sent = api.requests[0]
    assert sent.headers["authorization"] == "Bearer secret-key"
    assert sent.headers["content-type"] == "application/json"


async def test_caller_headers_override_defaults(make_client) -> None:
    client, api = make_client(lambda _: httpx.Response(200, json={}))

    await client.request_json(
        "GET", "/api/mcp/folders", headers={"Authorization": "Bearer other", "X-Trace": "1"}
    )

    sent = api.requests[0]
    assert sent.headers["authorization"] == "Bearer other"
    assert sent.headers["x-trace"] == "1"


async def test_url_is_base_plus_endpoint(make_client) -> None:
    client, api = make_client(lambda _: httpx.Response(200, json={}), base_url=f"{BASE_URL}/v2")

    await client.request_json("get", "/api/mcp/documents/doc-1")

    sent = api.requests[0]
    assert sent.method == "GET"
    assert str(sent.url) == f"{BASE_URL}/v2/api/mcp/documents/doc-1"


async def test_sends_json_body(make_client) -> None:
    client, api = make_client(lambda _: httpx.Response(200, json={"results": []}))

    await client.request_json("POST", "/api/mcp/search", json_body={"query": "q", "limit": 3})

    assert api.body() == {"query": "q", "limit": 3}


async def test_non_success_status_raises_api_error(make_client) -> None:
    client, api = make_client(lambda _: httpx.Response(404, text="not found"))

    with pytest.raises(ApiError) as excinfo:
        await client.request_json("GET", "/api/mcp/documents/missing")

    err = excinfo.value
    assert err.status_code == 404
    assert err.response_text == "not found"
    assert err.kind is ErrorKind.API
    assert "404" in str(err)
    assert "not found" in str(err)
    # No retry.
    assert len(api.requests) == 1


async def test_malformed_json_raises_parse_error(make_client) -> None:
    client, _ = make_client(lambda _: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(ParseError):
        await client.request_json("GET", "/api/mcp/folders")


async def test_transport_failure_raises_network_error(make_client) -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(boom)

    with pytest.raises(NetworkError, match="connection refused"):
        await client.request_json("GET", "/api/mcp/folders")


async def test_shared_http_client_has_no_timeout_by_default() -> None:
    http = build_http_client()
    try:
        assert http.timeout == httpx.Timeout(None)
        assert http.follow_redirects is True
    finally:
        await http.aclose()


async def test_shared_http_client_timeout_setting() -> None:
    http = build_http_client(2.5)
    try:
        assert http.timeout == httpx.Timeout(2.5)
    finally:
        await http.aclose()
