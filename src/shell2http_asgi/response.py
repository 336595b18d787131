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

"""
HTTP responses sent directly by gates.

Gates only ever answer on their own when a request fails a check (401, 405).
Everything else is produced by the wrapped application. This module holds
the small response type they use and the helper that renders an error in
the usual plain-text shape.

Classes
=======
Response
    Bytes or text body with headers, callable as an ASGI application.

Helper Functions
================
error_response(status_code, detail=None, headers=None)
    Plain-text error response. ``detail`` defaults to the standard reason
    phrase for the status code. Body is ``detail`` plus a trailing newline,
    with ``X-Content-Type-Options: nosniff``.

reason_phrase(status_code)
    Standard reason phrase, "" for unknown codes.

Example::

    response = error_response(405, headers={"Allow": "GET"})
    await response(scope, receive, send)
"""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus

from .types import Receive, Scope, Send

__all__ = [
    "Response",
    "error_response",
    "WS_POLICY_VIOLATION",
    "close_websocket",
    "reason_phrase",
]


# Type alias for headers input
HeadersInput = Mapping[str, str] | list[tuple[str, str]] | None

WS_POLICY_VIOLATION = 1008


def _normalize_headers(
    headers: HeadersInput,
) -> list[tuple[str, str]]:
    """
    Normalize headers input to list of tuples.

    Args:
        headers: Headers as dict, list of tuples, or None.

    Returns:
        List of (name, value) tuples. Empty list if headers is None.
    """
    if headers is None:
        return []
    if isinstance(headers, list):
        return list(headers)
    return list(headers.items())


def reason_phrase(status_code: int) -> str:
    """Return the standard reason phrase for ``status_code`` ("" if unknown)."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


class Response:
    """
    HTTP response sent through the ASGI interface.

    Attributes:
        body: Encoded response body as bytes.
        status_code: HTTP status code.
        media_type: Content-Type media type (charset added for text types).

    Example:
        >>> response = Response("Hello", media_type="text/plain")
        >>> await response(scope, receive, send)
    """

    __slots__ = ("body", "status_code", "_media_type", "_headers")

    media_type: str | None = None
    charset: str = "utf-8"

    def __init__(
        self,
        content: bytes | str | None = None,
        status_code: int = 200,
        headers: HeadersInput = None,
        media_type: str | None = None,
    ) -> None:
        """
        Initialize response.

        Args:
            content: Response body (bytes, string, or None).
            status_code: HTTP status code (default 200).
            headers: Response headers as dict or list of tuples.
            media_type: Content-Type media type (overrides class default).
        """
        self.status_code = status_code
        self._headers: list[tuple[str, str]] = _normalize_headers(headers)
        self._media_type = media_type
        self.body = self._encode_content(content)

        header_names = {name.lower() for name, _ in self._headers}
        if "content-type" not in header_names:
            content_type = self._get_content_type()
            if content_type:
                self._headers.append(("content-type", content_type))
        if "content-length" not in header_names:
            self._headers.append(("content-length", str(len(self.body))))

    def _encode_content(self, content: bytes | str | None) -> bytes:
        if content is None:
            return b""
        if isinstance(content, bytes):
            return content
        return content.encode(self.charset)

    def _get_content_type(self) -> str | None:
        """Get content-type header value with charset for text types."""
        effective_media_type = self._media_type if self._media_type is not None else self.media_type
        if effective_media_type is None:
            return None
        if effective_media_type.startswith("text/") and "charset" not in effective_media_type:
            return f"{effective_media_type}; charset={self.charset}"
        return effective_media_type

    @property
    def headers(self) -> list[tuple[str, str]]:
        """Response headers as (name, value) string tuples."""
        return list(self._headers)

    def _build_headers(self) -> list[tuple[bytes, bytes]]:
        """Build ASGI headers list (lowercase names, latin-1 encoded)."""
        return [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in self._headers
        ]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """
        ASGI application interface.

        Sends http.response.start and http.response.body messages.
        """
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self._build_headers(),
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": self.body,
            }
        )


def error_response(
    status_code: int,
    detail: str | None = None,
    headers: HeadersInput = None,
) -> Response:
    """
    Build a plain-text error response.

    Args:
        status_code: HTTP status code (4xx/5xx expected, not validated).
        detail: Body text. Defaults to the reason phrase of ``status_code``.
        headers: Extra response headers (e.g. WWW-Authenticate, Allow).

    Returns:
        Response with ``text/plain; charset=utf-8`` body ``detail + "\\n"``.
    """
    if detail is None:
        detail = reason_phrase(status_code)
    all_headers = _normalize_headers(headers)
    all_headers.append(("x-content-type-options", "nosniff"))
    return Response(
        content=f"{detail}\n",
        status_code=status_code,
        headers=all_headers,
        media_type="text/plain",
    )


async def close_websocket(send: Send, code: int = WS_POLICY_VIOLATION) -> None:
    """Refuse a WebSocket handshake (default code 1008, policy violation)."""
    await send({"type": "websocket.close", "code": code})
