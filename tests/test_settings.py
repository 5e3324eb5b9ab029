from __future__ import annotations

import pytest
from pydantic import ValidationError

from context11_mcp.settings import DEFAULT_API_URL, Settings


def test_settings_load_from_env(monkeypatch) -> None:
    monkeypatch.setenv("CONTEXT11_API_KEY", "t")
    monkeypatch.setenv("CONTEXT11_URL", "http://localhost:3001")
    monkeypatch.setenv("PORT", "8080")
    s = Settings()
    assert s.context11_api_key == "t"
    assert s.context11_url == "http://localhost:3001"
    assert s.mcp_port == 8080


def test_settings_defaults(monkeypatch) -> None:
    for name in ("CONTEXT11_API_KEY", "CONTEXT11_URL", "PORT", "HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.context11_api_key is None
    assert s.context11_url == DEFAULT_API_URL
    assert s.mcp_port == 3000
    assert s.http_timeout_seconds is None


def test_rejects_bad_port(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
