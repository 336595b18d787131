# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""HTTP Basic Authentication gate.

Requests must carry ``Authorization: Basic <base64(user:password)>``
matching the single configured username/password pair. Anything else is
answered with::

    401 Unauthorized
    WWW-Authenticate: Basic realm="Please enter user and password"

    name/password is required

and the wrapped application is not called. On success the request is
passed on untouched.

Credential parsing:
    - scheme name is case-insensitive ("Basic", "basic")
    - payload is standard base64 with padding, decoded as UTF-8
    - split at the first ":", so passwords may contain colons
    - missing header, other schemes and undecodable payloads all fail

Both fields are compared with ``hmac.compare_digest`` and both are always
compared, so the response time does not reveal which one was wrong.

WebSocket handshakes with bad credentials are refused with a
``websocket.close`` (code 1008, policy violation). Lifespan events pass
through.

Config:
    username (str): Expected user name. Default: "".
    password (str): Expected password. Default: "".
    realm (str): Realm advertised in WWW-Authenticate.

Example:
    Enable in config::

        middleware:
          auth: on

        auth_middleware:
          username: "alice"
          password: "secret"
"""

from __future__ import annotations

import base64
import binascii
import hmac
import logging
from typing import TYPE_CHECKING, Any

from . import BaseMiddleware
from ..datastructures import headers_from_scope
from ..response import close_websocket, error_response

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

__all__ = ["BasicAuthGate", "parse_basic_auth"]

logger = logging.getLogger("shell2http_asgi.auth")

DEFAULT_REALM = "Please enter user and password"
UNAUTHORIZED_DETAIL = "name/password is required"


def parse_basic_auth(header_value: str | None) -> tuple[str, str] | None:
    """Extract (username, password) from an Authorization header value.

    Args:
        header_value: Raw header value, e.g. ``"Basic YWxpY2U6c2VjcmV0"``.

    Returns:
        The credential pair, or None if the header is missing or malformed.
    """
    if not header_value:
        return None
    scheme, _, encoded = header_value.partition(" ")
    if scheme.lower() != "basic":
        return None
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def _same(received: str, expected: str) -> bool:
    return hmac.compare_digest(received.encode("utf-8"), expected.encode("utf-8"))


class BasicAuthGate(BaseMiddleware):
    """Require one fixed Basic credential pair before delegating.

    Attributes:
        username: Expected user name.
        realm: Realm advertised on 401 responses.

    Class Attributes:
        middleware_name: "auth" - identifier for config.
        middleware_order: 400 - innermost of the standard gates.
        middleware_default: False - disabled by default.
    """

    middleware_name = "auth"
    middleware_order = 400
    middleware_default = False

    __slots__ = ("username", "_password", "realm")

    def __init__(
        self,
        app: ASGIApp,
        username: str = "",
        password: str = "",
        realm: str = DEFAULT_REALM,
        **kwargs: Any,
    ) -> None:
        """Initialize the gate.

        An empty username is an ordinary value: only ``Basic base64(":pw")``
        style credentials match it.
        """
        super().__init__(app, **kwargs)
        self.username = username
        self._password = password
        self.realm = realm

    def check(self, header_value: str | None) -> bool:
        """Return True if ``header_value`` carries the expected credentials."""
        credentials = parse_basic_auth(header_value)
        if credentials is None:
            return False
        username, password = credentials
        user_ok = _same(username, self.username)
        pass_ok = _same(password, self._password)
        return user_ok and pass_ok

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        if self.check(headers_from_scope(scope).get("authorization")):
            await self.app(scope, receive, send)
            return

        logger.debug("Rejected credentials for %s %s", scope.get("method", "WS"), scope.get("path", ""))
        if scope["type"] == "websocket":
            await close_websocket(send)
            return
        response = error_response(
            401,
            UNAUTHORIZED_DETAIL,
            headers={"WWW-Authenticate": f'Basic realm="{self.realm}"'},
        )
        await response(scope, receive, send)
