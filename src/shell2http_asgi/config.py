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
Gate configuration.

Collects the few settings the gate chain needs and turns them into a
wrapped ASGI application. Settings come from several sources through
genro-toolbox SmartOptions, later sources overriding earlier ones:

    built-in DEFAULTS < environment (SHELL2HTTP_*) < argv < constructor args

Settings:
    version     Version reported in ``Server: shell2http <version>``.
    basic_auth  ``"user:password"``; enables the auth gate when set.
    log         Enable the access log gate. Default: True.
    log_level   Access log level. Default: "INFO".

Example::

    config = GatesConfig(basic_auth="alice:secret")
    app = config.wrap(multi_method({"GET": show, "POST": update}))
"""

from __future__ import annotations

from typing import Any

from genro_toolbox import SmartOptions  # type: ignore[import-untyped]

from . import __version__
from .exceptions import ConfigurationError
from .middleware import middleware_chain
from .types import ASGIApp

__all__ = ["GatesConfig", "parse_credentials"]

DEFAULTS = {"version": __version__, "log": True, "log_level": "INFO"}


def _gates_opts_spec(
    version: str,
    basic_auth: str,
    log: bool,
    log_level: str,
) -> None:
    """Reference function for SmartOptions type extraction (no defaults)."""


def parse_credentials(value: str | None) -> tuple[str, str] | None:
    """Split a ``"user:password"`` setting at the first colon.

    Either part may be empty, so ``":secret"`` means user "" and password
    "secret".

    Raises:
        ConfigurationError: If ``value`` has no colon.
    """
    if not value:
        return None
    username, sep, password = value.partition(":")
    if not sep:
        raise ConfigurationError("basic_auth must look like 'user:password'")
    return username, password


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in ("on", "true", "yes", "1")
    return bool(value)


class GatesConfig:
    """Resolved gate settings and the chain they describe."""

    __slots__ = ("_opts", "_credentials")

    def __init__(
        self,
        version: str | None = None,
        basic_auth: str | None = None,
        log: bool | None = None,
        log_level: str | None = None,
        argv: list[str] | None = None,
    ) -> None:
        self._opts = self._build_config(
            version=version,
            basic_auth=basic_auth,
            log=log,
            log_level=log_level,
            argv=argv or [],
        )
        self._credentials = parse_credentials(self._opts["basic_auth"])

    def _build_config(
        self,
        version: str | None,
        basic_auth: str | None,
        log: bool | None,
        log_level: str | None,
        argv: list[str],
    ) -> SmartOptions:
        """Merge DEFAULTS, SHELL2HTTP_* environment, argv and explicit values."""
        env_argv_opts = SmartOptions(_gates_opts_spec, env="SHELL2HTTP", argv=argv)

        caller_opts = SmartOptions(
            dict(version=version, basic_auth=basic_auth, log=log, log_level=log_level),
            ignore_none=True,
        )

        return SmartOptions(DEFAULTS) + env_argv_opts + caller_opts

    @property
    def version(self) -> str:
        return str(self._opts["version"])

    @property
    def credentials(self) -> tuple[str, str] | None:
        """(username, password) or None when auth is disabled."""
        return self._credentials

    @property
    def log_enabled(self) -> bool:
        return _as_bool(self._opts["log"])

    @property
    def log_level(self) -> str:
        return str(self._opts["log_level"] or "INFO").upper()

    @property
    def middleware(self) -> dict[str, bool]:
        """Gate on/off map in the format accepted by middleware_chain."""
        return {
            "headers": True,
            "logging": self.log_enabled,
            "auth": self._credentials is not None,
        }

    def middleware_options(self, name: str) -> dict[str, Any]:
        """Constructor kwargs for the gate registered as ``name``."""
        if name == "headers":
            return {"version": self.version}
        if name == "logging":
            return {"level": self.log_level}
        if name == "auth" and self._credentials is not None:
            username, password = self._credentials
            return {"username": username, "password": password}
        return {}

    def wrap(self, app: ASGIApp) -> ASGIApp:
        """Wrap ``app`` with every enabled gate."""
        middleware = self.middleware
        full_config = {
            f"{name}_middleware": self.middleware_options(name)
            for name, enabled in middleware.items()
            if enabled
        }
        return middleware_chain(middleware, app, full_config)
