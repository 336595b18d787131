# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Data structures for shell2http-asgi gates.

Mapping from ASGI to shell2http-asgi classes::

    ASGI Raw Data                          Classes
    ─────────────────                      ───────
    scope["client"] = ("1.2.3.4", 80)      →  Address(host, port)
    scope["server"] = ("example.com", 443) →  Address(host, port)
    scope["headers"] = [(b"...", b"...")]  →  Headers (case-insensitive)
"""

from .address import Address
from .headers import Headers, headers_from_scope, set_raw_header

__all__ = [
    "Address",
    "Headers",
    "headers_from_scope",
    "set_raw_header",
]
