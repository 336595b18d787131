# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Shared fixtures: ASGI scopes, a capturing send and a recording inner app."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import pytest


class MockSend:
    """Capture ASGI send messages for testing."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def start_message(self) -> dict[str, Any]:
        """Get the http.response.start message."""
        return self.messages[0]

    @property
    def status(self) -> int:
        """Get response status code."""
        return self.start_message["status"]

    @property
    def headers(self) -> dict[bytes, bytes]:
        """Get headers as dict (lowercase names)."""
        return {bytes(k).lower(): bytes(v) for k, v in self.start_message["headers"]}

    def header_values(self, name: bytes) -> list[bytes]:
        """Get every value sent for ``name``."""
        return [bytes(v) for k, v in self.start_message["headers"] if bytes(k).lower() == name]

    @property
    def body(self) -> bytes:
        """Get complete body (concatenated from all body messages)."""
        return b"".join(
            m.get("body", b"") for m in self.messages if m["type"] == "http.response.body"
        )


class RecordingApp:
    """Inner ASGI app that records the scopes it receives and answers 200."""

    def __init__(
        self,
        status: int = 200,
        body: bytes = b"ok",
        headers: list[tuple[bytes, bytes]] | None = None,
    ) -> None:
        self.status = status
        self.body = body
        self.headers = headers if headers is not None else [(b"content-type", b"text/plain")]
        self.calls: list[dict[str, Any]] = []

    @property
    def called(self) -> bool:
        return bool(self.calls)

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        self.calls.append(dict(scope))
        if scope["type"] != "http":
            return
        await send({"type": "http.response.start", "status": self.status, "headers": self.headers})
        await send({"type": "http.response.body", "body": self.body})


async def mock_receive() -> dict[str, Any]:
    """Mock receive callable (gates never read the body)."""
    return {"type": "http.request", "body": b"", "more_body": False}


def make_http_scope(
    method: str = "GET",
    path: str = "/",
    headers: list[tuple[bytes, bytes]] | None = None,
    query_string: bytes = b"",
    client: tuple[str, int] | None = ("127.0.0.1", 51234),
    server: tuple[str, int] | None = ("127.0.0.1", 8080),
) -> dict[str, Any]:
    """Build a minimal HTTP scope."""
    return {
        "type": "http",
        "method": method,
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query_string,
        "headers": headers or [],
        "client": client,
        "server": server,
    }


@pytest.fixture
def send() -> MockSend:
    """Create a mock send callable."""
    return MockSend()


@pytest.fixture
def receive() -> Callable[[], Any]:
    return mock_receive


@pytest.fixture
def http_scope() -> Callable[..., dict[str, Any]]:
    """Factory for HTTP scopes."""
    return make_http_scope


@pytest.fixture
def make_app() -> Callable[..., RecordingApp]:
    """Factory for recording inner apps."""
    return RecordingApp


@pytest.fixture
def inner_app() -> RecordingApp:
    return RecordingApp()


@pytest.fixture
def call() -> Callable[..., Awaitable[MockSend]]:
    """Run an ASGI app on a scope and return the captured send."""

    async def _call(app: Any, scope: dict[str, Any]) -> MockSend:
        captured = MockSend()
        await app(scope, mock_receive, captured)
        return captured

    return _call
