# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Case-insensitive HTTP headers with multi-value support.

Purpose
=======
Gates read a handful of request headers (``Host``, ``User-Agent``,
``Authorization``, ``X-Real-Ip``) and write one or two response headers
(``Server``, ``WWW-Authenticate``, ``Allow``). ASGI carries both as
``list[tuple[bytes, bytes]]`` with Latin-1 encoding and case-preserving
names.

This module provides:
- ``Headers``: read-only, case-insensitive view over request headers
- ``headers_from_scope()``: build ``Headers`` from an ASGI scope
- ``set_raw_header()``: replace-or-append on a raw response header list

ASGI Mapping::

    scope["headers"] = [(b"X-Real-Ip", b"10.0.0.1")]
                        ↓
    Headers: [("x-real-ip", "10.0.0.1")]
                        ↓
    headers.getlist("X-Real-IP") → ["10.0.0.1"]

Design Notes
============
- Names normalized to lowercase, values preserved as-is
- ``getlist`` keeps order of appearance, so "first value" is well defined
- ``set_raw_header`` drops every existing entry with that name before
  appending, mirroring ``Header().Set`` semantics
"""

from collections.abc import Mapping
from typing import Any

__all__ = ["Headers", "headers_from_scope", "set_raw_header"]


class Headers:
    """
    Immutable, case-insensitive HTTP headers with multi-value support.

    Example:
        >>> headers = Headers([(b"X-Real-Ip", b"1.2.3.4"), (b"x-real-ip", b"5.6.7.8")])
        >>> headers.get("x-real-ip")
        '1.2.3.4'
        >>> headers.getlist("X-REAL-IP")
        ['1.2.3.4', '5.6.7.8']
    """

    __slots__ = ("_headers",)

    def __init__(self, raw_headers: list[tuple[bytes, bytes]]) -> None:
        """
        Initialize Headers from raw ASGI headers.

        Args:
            raw_headers: List of (name, value) byte tuples from ASGI scope.
                         Both name and value are decoded as Latin-1.
        """
        self._headers: list[tuple[str, str]] = [
            (name.decode("latin-1").lower(), value.decode("latin-1"))
            for name, value in raw_headers
        ]

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the first value for ``key`` (case-insensitive), else ``default``."""
        key_lower = key.lower()
        for name, value in self._headers:
            if name == key_lower:
                return value
        return default

    def getlist(self, key: str) -> list[str]:
        """Return every value for ``key`` in order of appearance."""
        key_lower = key.lower()
        return [value for name, value in self._headers if name == key_lower]

    def __repr__(self) -> str:
        return f"Headers({self._headers!r})"


def headers_from_scope(scope: Mapping[str, Any]) -> Headers:
    """
    Create Headers instance from ASGI scope.

    Returns empty Headers if "headers" is not in scope.

    Example:
        >>> headers = headers_from_scope({"type": "http", "headers": [(b"host", b"example.com")]})
        >>> headers.get("host")
        'example.com'
    """
    return Headers(scope.get("headers", []))


def set_raw_header(
    raw_headers: list[tuple[bytes, bytes]] | list[list[bytes]],
    name: str,
    value: str,
) -> list[tuple[bytes, bytes]]:
    """
    Return a new raw header list with ``name`` set to exactly ``value``.

    Existing entries for ``name`` (any case) are removed. The input list is
    not modified, since it may belong to a message another layer still holds.

    Args:
        raw_headers: ASGI response headers (tuples or 2-item lists).
        name: Header name, any case. Stored lowercase.
        value: Header value, Latin-1 encodable.

    Returns:
        New list of (name, value) byte tuples.
    """
    name_bytes = name.lower().encode("latin-1")
    result = [
        (bytes(key), bytes(val))
        for key, val in raw_headers
        if bytes(key).lower() != name_bytes
    ]
    result.append((name_bytes, value.encode("latin-1")))
    return result
