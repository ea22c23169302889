"""Shared fixtures for callrelay tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterator
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketState

from callrelay.config import Settings
from callrelay.main import create_app

# Every environment name Settings reads; cleared so the host env cannot leak in.
_SETTINGS_ENV = (
    "PORT",
    "HOST",
    "ELEVEN_API_KEY",
    "ELEVENLABS_API_KEY",
    "ELEVENLABS_AGENT_ID",
    "AGENT_ID",
    "FAQ_URL",
    "WEBHOOK_URL",
    "WEBHOOK_KEY",
    "FROM_EMAIL",
    "STATIC_DIR",
    "HTTP_TIMEOUT",
    "SEND_TIMEOUT",
    "LOG_LEVEL",
)

AGENT_ID = "agent_7f3c"
API_KEY = "xi-test-key"
FAQ_URL = "https://faq.example.com/faq.json"
WEBHOOK_URL = "https://hook.example.com/email"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


class FakeViewer:
    """Stand-in for a starlette ``WebSocket`` held by the broadcaster."""

    def __init__(self, *, open: bool = True, fail: BaseException | None = None) -> None:
        state = WebSocketState.CONNECTED if open else WebSocketState.DISCONNECTED
        self.client_state = state
        self.application_state = state
        self.send_text = AsyncMock(side_effect=fail)

    @property
    def sent(self) -> list[str]:
        return [call.args[0] for call in self.send_text.await_args_list]


def http_response(
    method: str, url: str, status: int = 200, **kwargs: Any,
) -> httpx.Response:
    """Build an ``httpx.Response`` bound to a request (so raise_for_status works)."""
    return httpx.Response(status, request=httpx.Request(method, url), **kwargs)


@pytest.fixture()
def static_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "public"
    directory.mkdir()
    (directory / "index.html").write_text("<html><body>dashboard</body></html>")
    (directory / "app.js").write_text("console.log('viewer');")
    return directory


@pytest.fixture()
def make_settings(static_dir: Path) -> Callable[..., Settings]:
    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "eleven_api_key": "",
            "agent_id": "",
            "faq_url": "",
            "webhook_url": "",
            "webhook_key": "",
            "static_dir": str(static_dir),
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)  # type: ignore[call-arg]

    return _make


@pytest.fixture()
def settings(make_settings: Callable[..., Settings]) -> Settings:
    return make_settings()


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    # Run from a directory without its own index.html.
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    with TestClient(app) as test_client:
        yield test_client
