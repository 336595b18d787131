# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Address wrapper for ASGI client/server tuples.

Wraps the ``(host, port)`` tuple used in ASGI scope for ``client`` and
``server``. ``str(address)`` renders the ``host:port`` form written in
access logs; IPv6 hosts are bracketed the way they appear in URLs.

ASGI Mapping::

    scope["client"] = ("1.2.3.4", 5678)  →  Address("1.2.3.4", 5678)  →  "1.2.3.4:5678"
    scope["client"] = ("::1", 5678)      →  Address("::1", 5678)      →  "[::1]:5678"
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

__all__ = ["Address"]


class Address:
    """
    Client or server address wrapper.

    Attributes:
        host: The hostname or IP address.
        port: The port number, or None for unix sockets and test scopes.

    Example:
        >>> addr = Address("192.168.1.1", 8080)
        >>> str(addr)
        '192.168.1.1:8080'
        >>> addr == ("192.168.1.1", 8080)
        True
    """

    __slots__ = ("host", "port")

    def __init__(self, host: str, port: int | None = None) -> None:
        self.host = host
        self.port = port

    @classmethod
    def from_scope_value(cls, value: Sequence[Any] | None) -> Address | None:
        """Build from ``scope["client"]`` / ``scope["server"]``; None stays None."""
        if not value:
            return None
        host = str(value[0])
        port = value[1] if len(value) > 1 else None
        return cls(host, port)

    def __str__(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        if self.port is None:
            return host
        return f"{host}:{self.port}"

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Address(host={self.host!r}, port={self.port})"

    def __eq__(self, other: object) -> bool:
        """Compare with another Address or a ``(host, port)`` tuple."""
        if isinstance(other, Address):
            return self.host == other.host and self.port == other.port
        if isinstance(other, tuple) and len(other) == 2:
            return bool(self.host == other[0] and self.port == other[1])
        return False

    def __hash__(self) -> int:
        return hash((self.host, self.port))
