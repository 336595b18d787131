# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""HTTP-method gating for ASGI handlers.

Two building blocks, both built once at setup time:

    method_only(app, "POST")                  # one handler, one method
    multi_method({"GET": a, "POST": b})       # several handlers by method

The empty method name ``""`` means "any method". It is only valid alone:
``multi_method({"": app})`` is the same as ``app``, while mixing it with
explicit methods is a ConfigurationError.

Requests whose method is not accepted get 405 with the reason phrase as
body and an ``Allow`` header; the wrapped handlers never run. Method names
are compared exactly (case-sensitive), as HTTP method tokens are.

Only ``http`` scopes are policed. MethodGate forwards other scope types to
its handler untouched. MethodRouter has no single handler to forward them
to: it refuses WebSocket handshakes with ``websocket.close`` (code 1008)
and ignores lifespan events.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .exceptions import ConfigurationError
from .response import close_websocket, error_response
from .types import ASGIApp, Receive, Scope, Send

__all__ = ["MethodGate", "MethodRouter", "method_only", "multi_method"]

logger = logging.getLogger("shell2http_asgi.router")

ANY_METHOD = ""


class MethodGate:
    """Accept a single HTTP method, answer 405 to the others.

    Attributes:
        app: Wrapped ASGI application.
        method: Required method token (non-empty).
    """

    __slots__ = ("app", "method")

    def __init__(self, app: ASGIApp, method: str) -> None:
        if not method:
            raise ConfigurationError("MethodGate requires a method, use method_only() for any")
        self.app = app
        self.method = method

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("method") == self.method:
            await self.app(scope, receive, send)
            return
        response = error_response(405, headers={"Allow": self.method})
        await response(scope, receive, send)

    def __repr__(self) -> str:
        return f"MethodGate(method={self.method!r})"


class MethodRouter:
    """Dispatch to one of several handlers by exact HTTP method.

    The handler mapping is copied at construction, so later changes to the
    caller's dict do not affect routing.
    """

    __slots__ = ("_handlers", "_allow")

    def __init__(self, handlers: Mapping[str, ASGIApp]) -> None:
        if len(handlers) < 2:
            raise ConfigurationError("MethodRouter requires at least two handlers")
        if ANY_METHOD in handlers:
            raise ConfigurationError(
                "mixing predetermined HTTP method with empty is not allowed"
            )
        self._handlers: dict[str, ASGIApp] = dict(handlers)
        self._allow = ", ".join(sorted(self._handlers))

    @property
    def methods(self) -> list[str]:
        """Accepted methods, sorted."""
        return sorted(self._handlers)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "websocket":
            await close_websocket(send)
            return
        if scope["type"] != "http":
            return
        handler = self._handlers.get(scope.get("method", ""))
        if handler is None:
            response = error_response(405, headers={"Allow": self._allow})
            await response(scope, receive, send)
            return
        await handler(scope, receive, send)

    def __repr__(self) -> str:
        return f"MethodRouter(methods={self.methods!r})"


def method_only(app: ASGIApp, method: str = ANY_METHOD) -> ASGIApp:
    """Restrict ``app`` to ``method``; an empty method returns ``app`` itself."""
    if method == ANY_METHOD:
        return app
    return MethodGate(app, method)


def multi_method(handlers: Mapping[str, ASGIApp]) -> ASGIApp:
    """Build one handler out of a ``{method: handler}`` mapping.

    Args:
        handlers: Method name to ASGI app. ``""`` accepts any method and is
            only allowed as the single entry.

    Returns:
        The single handler (possibly gated) or a MethodRouter.

    Raises:
        ConfigurationError: If ``handlers`` is empty, or has several entries
            one of which is ``""``.
    """
    if not handlers:
        raise ConfigurationError("requires at least one handler")
    if len(handlers) == 1:
        ((method, handler),) = handlers.items()
        return method_only(handler, method)
    router = MethodRouter(handlers)
    logger.debug("Method router built for %s", ", ".join(router.methods))
    return router
