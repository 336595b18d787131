# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for the Basic authentication gate."""

import base64

import pytest

from shell2http_asgi.middleware.authentication import BasicAuthGate, parse_basic_auth

WWW_AUTHENTICATE = b'Basic realm="Please enter user and password"'


def _basic(username: str, password: str) -> bytes:
    """Helper to build an Authorization header value."""
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return f"Basic {token}".encode()


class TestParseBasicAuth:
    """Tests for parse_basic_auth."""

    def test_valid_credentials(self) -> None:
        assert parse_basic_auth(_basic("alice", "secret").decode()) == ("alice", "secret")

    def test_scheme_case_insensitive(self) -> None:
        token = base64.b64encode(b"alice:secret").decode()
        assert parse_basic_auth(f"basic {token}") == ("alice", "secret")
        assert parse_basic_auth(f"BASIC {token}") == ("alice", "secret")

    def test_password_may_contain_colon(self) -> None:
        assert parse_basic_auth(_basic("alice", "a:b:c").decode()) == ("alice", "a:b:c")

    def test_empty_password(self) -> None:
        assert parse_basic_auth(_basic("alice", "").decode()) == ("alice", "")

    def test_utf8_credentials(self) -> None:
        assert parse_basic_auth(_basic("jörg", "pässwort").decode()) == ("jörg", "pässwort")

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "Basic",
            "Basic ",
            "Bearer tk_abc123",
            "Basic not-valid-base64!!!",
            "Basic " + base64.b64encode(b"nocolon").decode(),
            "Basic " + base64.b64encode(b"\xff\xfe:x").decode(),
        ],
    )
    def test_malformed_values(self, value) -> None:
        assert parse_basic_auth(value) is None

    def test_missing_padding_rejected(self) -> None:
        # "alice:secre" encodes to 16 chars with "=" padding
        token = base64.b64encode(b"alice:secre").decode().rstrip("=")
        assert parse_basic_auth(f"Basic {token}") is None


class TestBasicAuthGate:
    """Tests for BasicAuthGate."""

    @pytest.mark.asyncio
    async def test_empty_username_is_an_ordinary_pair(self, inner_app, http_scope, call) -> None:
        gate = BasicAuthGate(inner_app, username="", password="pw")

        sent = await call(gate, http_scope(headers=[(b"authorization", _basic("", "pw"))]))
        assert sent.status == 200
        assert len(inner_app.calls) == 1

        sent = await call(gate, http_scope(headers=[(b"authorization", _basic("alice", "pw"))]))
        assert sent.status == 401
        assert len(inner_app.calls) == 1

    def test_check(self, inner_app) -> None:
        gate = BasicAuthGate(inner_app, username="alice", password="secret")

        assert gate.check(_basic("alice", "secret").decode()) is True
        assert gate.check(_basic("alice", "wrong").decode()) is False
        assert gate.check(_basic("bob", "secret").decode()) is False
        assert gate.check(None) is False

    @pytest.mark.asyncio
    async def test_valid_credentials_delegate_unaltered(self, make_app, http_scope, call) -> None:
        inner = make_app(status=201, body=b"created", headers=[(b"x-custom", b"1")])
        gate = BasicAuthGate(inner, username="alice", password="secret")
        scope = http_scope(headers=[(b"authorization", _basic("alice", "secret"))])

        sent = await call(gate, scope)

        assert len(inner.calls) == 1
        assert sent.messages == [
            {"type": "http.response.start", "status": 201, "headers": [(b"x-custom", b"1")]},
            {"type": "http.response.body", "body": b"created"},
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "headers",
        [
            [(b"authorization", _basic("alice", "wrong"))],
            [(b"authorization", _basic("bob", "secret"))],
            [(b"authorization", _basic("Alice", "secret"))],
            [(b"authorization", _basic("alice", "secret "))],
            [(b"authorization", b"Bearer secret")],
            [(b"authorization", b"Basic %%%")],
            [],
        ],
    )
    async def test_rejected_requests(self, headers, inner_app, http_scope, call) -> None:
        gate = BasicAuthGate(inner_app, username="alice", password="secret")

        sent = await call(gate, http_scope(headers=headers))

        assert sent.status == 401
        assert sent.headers[b"www-authenticate"] == WWW_AUTHENTICATE
        assert sent.body == b"name/password is required\n"
        assert not inner_app.called

    @pytest.mark.asyncio
    async def test_custom_realm(self, inner_app, http_scope, call) -> None:
        gate = BasicAuthGate(inner_app, username="alice", password="secret", realm="shell")

        sent = await call(gate, http_scope())

        assert sent.headers[b"www-authenticate"] == b'Basic realm="shell"'

    @pytest.mark.asyncio
    async def test_header_name_case_insensitive(self, inner_app, http_scope, call) -> None:
        gate = BasicAuthGate(inner_app, username="alice", password="secret")
        scope = http_scope(headers=[(b"Authorization", _basic("alice", "secret"))])

        sent = await call(gate, scope)

        assert sent.status == 200

    @pytest.mark.asyncio
    async def test_websocket_rejected_with_close(self, inner_app, call) -> None:
        gate = BasicAuthGate(inner_app, username="alice", password="secret")

        sent = await call(gate, {"type": "websocket", "path": "/", "headers": []})

        assert sent.messages == [{"type": "websocket.close", "code": 1008}]
        assert not inner_app.called

    @pytest.mark.asyncio
    async def test_websocket_accepted_with_credentials(self, inner_app, call) -> None:
        gate = BasicAuthGate(inner_app, username="alice", password="secret")
        scope = {
            "type": "websocket",
            "path": "/",
            "headers": [(b"authorization", _basic("alice", "secret"))],
        }

        await call(gate, scope)

        assert len(inner_app.calls) == 1

    @pytest.mark.asyncio
    async def test_lifespan_passes_through(self, inner_app, call) -> None:
        gate = BasicAuthGate(inner_app, username="alice", password="secret")

        await call(gate, {"type": "lifespan"})

        assert inner_app.calls == [{"type": "lifespan"}]
