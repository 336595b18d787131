# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exception classes for shell2http-asgi.

Gates fail in two different ways and only one of them is an exception:

1. ConfigurationError - raised while a gate or a chain is being built,
   before any request is served (empty method set, "any method" mixed
   with explicit methods, missing username, unknown middleware name).
2. Request-time policy failures (wrong method, bad credentials) are never
   raised. They are sent as regular HTTP responses (401, 405) and the
   chain simply stops delegating.

ConfigurationError subclasses ValueError so callers that already guard
setup code with ``except ValueError`` keep working.

Example:
    >>> from shell2http_asgi.router import multi_method
    >>> multi_method({})
    Traceback (most recent call last):
        ...
    shell2http_asgi.exceptions.ConfigurationError: requires at least one handler
"""

__all__ = ["ConfigurationError"]


class ConfigurationError(ValueError):
    """
    Invalid gate configuration detected at construction time.

    Attributes:
        detail: Human-readable description of the problem.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"ConfigurationError(detail={self.detail!r})"
