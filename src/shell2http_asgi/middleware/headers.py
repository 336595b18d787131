# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Common response headers middleware.

Stamps every HTTP response passing through it with a ``Server`` header
naming the product and its version, e.g. ``Server: shell2http 1.17.0``.
Responses produced further down the chain (including 401/405 answers
from inner gates) are covered as well, since the header is set on the
``http.response.start`` message on its way out.

Config:
    version (str): Version reported after the product tag. Required.
    product (str): Product tag. Default: "shell2http".

Example:
    Enable in config::

        middleware:
          headers: on

        headers_middleware:
          version: "1.17.0"
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, MutableMapping

from . import BaseMiddleware
from ..datastructures import set_raw_header

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

__all__ = ["HeaderInjector"]

SERVER_PRODUCT = "shell2http"


class HeaderInjector(BaseMiddleware):
    """Set a fixed ``Server`` header on every HTTP response.

    Attributes:
        server_header: Full header value, built once at construction.

    Class Attributes:
        middleware_name: "headers" - identifier for config.
        middleware_order: 100 - outermost, so every response gets the header.
        middleware_default: False - disabled by default.
    """

    middleware_name = "headers"
    middleware_order = 100
    middleware_default = False

    __slots__ = ("server_header",)

    def __init__(
        self,
        app: ASGIApp,
        version: str,
        product: str = SERVER_PRODUCT,
        **kwargs: Any,
    ) -> None:
        super().__init__(app, **kwargs)
        self.server_header = f"{product} {version}"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_server(message: MutableMapping[str, Any]) -> None:
            if message["type"] == "http.response.start":
                headers = set_raw_header(message.get("headers", []), "server", self.server_header)
                message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_with_server)
