# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Logging Middleware - one access log line per HTTP request.

The line is written after the wrapped application returns (or raises),
with the elapsed wall-clock time rounded to the millisecond (``3ms``,
``1.5s``, ``2m3.5s``)::

    example.com 10.0.0.7, 127.0.0.1:51234 GET /date?tz=UTC "curl/8.5.0" 3ms

Fields: host, client address, method, request URI, user agent, duration.

Client address:
    The direct peer as ``host:port``. When a reverse proxy supplied
    ``X-Real-Ip``, its first value is put in front, separated by ", ",
    so both the original client and the proxy are recorded.

The middleware only observes: the response is neither inspected nor
altered, and exceptions from the wrapped app propagate unchanged after
the line is logged. Uses Python's standard logging module; handlers and
formatting are left to the host process.

Config:
    logger_name (str): Logger name. Default: "shell2http_asgi.access".
    level (str): Log level (DEBUG, INFO, WARNING, ERROR). Default: "INFO".

Example:
    Enable in config::

        middleware:
          logging: on

        logging_middleware:
          level: "DEBUG"
"""

from __future__ import annotations

import logging
import math
import time
from typing import TYPE_CHECKING, Any

from . import BaseMiddleware
from ..datastructures import Address, Headers, headers_from_scope

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

__all__ = [
    "RequestLogger",
    "format_duration",
    "request_host",
    "request_uri",
    "resolve_client_address",
]


def resolve_client_address(headers: Headers, client: Address | None) -> str:
    """Return the client address as logged.

    Args:
        headers: Request headers.
        client: Direct peer address, None if the server did not provide it.

    Returns:
        ``"<first X-Real-Ip>, <peer>"`` when the header is present,
        otherwise ``"<peer>"`` ("" for an unknown peer).
    """
    remote_addr = str(client) if client is not None else ""
    real_ips = headers.getlist("x-real-ip")
    if real_ips:
        return f"{real_ips[0]}, {remote_addr}"
    return remote_addr


def format_duration(seconds: float) -> str:
    """Render an elapsed time rounded to the millisecond.

    Halves round up. The shortest unit layout is used: ``0s``, ``150ms``,
    ``1.5s``, ``2m3.5s``, ``1h0m0s``.
    """
    total_ms = math.floor(seconds * 1000 + 0.5)
    if total_ms <= 0:
        return "0s"
    if total_ms < 1000:
        return f"{total_ms}ms"
    secs, frac_ms = divmod(total_ms, 1000)
    minutes, secs = divmod(secs, 60)
    hours, minutes = divmod(minutes, 60)
    text = f"{secs}.{frac_ms:03d}".rstrip("0") + "s" if frac_ms else f"{secs}s"
    if hours:
        return f"{hours}h{minutes}m{text}"
    if minutes:
        return f"{minutes}m{text}"
    return text


def request_uri(scope: Scope) -> str:
    """Return the request target as sent by the client (path plus query)."""
    raw_path = scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1")
    else:
        path = scope.get("path", "/")
    query = scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path


def request_host(scope: Scope, headers: Headers) -> str:
    """Return the Host header, falling back to the server address."""
    host = headers.get("host")
    if host:
        return host
    server = Address.from_scope_value(scope.get("server"))
    return str(server) if server is not None else ""


class RequestLogger(BaseMiddleware):
    """Access logging middleware for HTTP requests.

    Attributes:
        logger: Python Logger instance for access logs.
        level: Numeric log level (from logging module).

    Class Attributes:
        middleware_name: "logging" - identifier for config.
        middleware_order: 200 - inside headers, outside auth, so rejected
            requests are logged too.
        middleware_default: False - disabled by default.
    """

    middleware_name = "logging"
    middleware_order = 200
    middleware_default = False

    __slots__ = ("logger", "level")

    def __init__(
        self,
        app: ASGIApp,
        logger_name: str = "shell2http_asgi.access",
        level: str = "INFO",
        **kwargs: Any,
    ) -> None:
        """Initialize logging middleware.

        Args:
            app: Next ASGI application in the middleware chain.
            logger_name: Name for the Python logger.
            level: Log level string (DEBUG, INFO, etc.). Defaults to "INFO".
            **kwargs: Additional arguments passed to BaseMiddleware.
        """
        super().__init__(app, **kwargs)
        self.logger = logging.getLogger(logger_name)
        self.level = getattr(logging, level.upper(), logging.INFO)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Run the wrapped app, then log one line for the request.

        Note:
            Non-HTTP requests pass through without logging.
            Duration is measured with perf_counter.
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = headers_from_scope(scope)
        remote_addr = resolve_client_address(
            headers, Address.from_scope_value(scope.get("client"))
        )
        start_time = time.perf_counter()
        try:
            await self.app(scope, receive, send)
        finally:
            duration = format_duration(time.perf_counter() - start_time)
            user_agent = headers.get("user-agent", "")
            self.logger.log(
                self.level,
                f"{request_host(scope, headers)} {remote_addr} {scope.get('method', '')} "
                f'{request_uri(scope)} "{user_agent}" {duration}',
            )
