# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""ASGI type definitions for shell2http-asgi.

Every gate in this package is an ASGI application wrapping another ASGI
application, so these aliases are the whole "handler" contract::

    async def app(scope: Scope, receive: Receive, send: Send) -> None: ...

Scope and Message stay ``MutableMapping`` rather than ``TypedDict``:
servers add their own keys and validation happens where values are read.
"""

from typing import Any, Awaitable, Callable, MutableMapping

__all__ = ["Scope", "Message", "Receive", "Send", "ASGIApp"]

# ASGI Scope - connection metadata
Scope = MutableMapping[str, Any]

# ASGI Message - sent/received data
Message = MutableMapping[str, Any]

# ASGI Receive - callable to receive messages
Receive = Callable[[], Awaitable[Message]]

# ASGI Send - callable to send messages
Send = Callable[[Message], Awaitable[None]]

# ASGI Application - the main callable
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]
