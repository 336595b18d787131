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

"""shell2http-asgi - request gates for ASGI handlers.

Each gate wraps an ASGI application and adds one cross-cutting behavior:

Method gating:
    method_only / MethodGate: accept a single HTTP method
    multi_method / MethodRouter: dispatch by HTTP method

Middleware:
    HeaderInjector: ``Server: shell2http <version>`` on every response
    RequestLogger: one access log line per request
    BasicAuthGate: HTTP Basic Authentication with a fixed user/password

Usage:
    from shell2http_asgi import GatesConfig, multi_method

    app = GatesConfig(basic_auth="alice:secret").wrap(
        multi_method({"GET": show, "POST": update})
    )
"""

__version__ = "0.1.0"

from .datastructures import Address, Headers, headers_from_scope
from .exceptions import ConfigurationError
from .middleware import MIDDLEWARE_REGISTRY, BaseMiddleware, middleware_chain
from .middleware.authentication import BasicAuthGate, parse_basic_auth
from .middleware.headers import HeaderInjector
from .middleware.logging import RequestLogger
from .response import Response, error_response
from .router import MethodGate, MethodRouter, method_only, multi_method
from .types import ASGIApp, Message, Receive, Scope, Send
from .config import GatesConfig

__all__ = [
    # Method gating
    "MethodGate",
    "MethodRouter",
    "method_only",
    "multi_method",
    # Middleware
    "BaseMiddleware",
    "BasicAuthGate",
    "HeaderInjector",
    "RequestLogger",
    "MIDDLEWARE_REGISTRY",
    "middleware_chain",
    "parse_basic_auth",
    # Configuration
    "GatesConfig",
    "ConfigurationError",
    # Responses
    "Response",
    "error_response",
    # Data structures
    "Address",
    "Headers",
    "headers_from_scope",
    # ASGI types
    "ASGIApp",
    "Message",
    "Receive",
    "Scope",
    "Send",
]
