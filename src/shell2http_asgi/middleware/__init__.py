# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Middleware package - request gates for shell2http-asgi."""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

MIDDLEWARE_REGISTRY: dict[str, type["BaseMiddleware"]] = {}


class BaseMiddleware(ABC):
    """Base class for all gates. Subclasses auto-register via __init_subclass__.

    Class attributes:
        middleware_name: Registry key (default: class name).
        middleware_order: Order in chain (lower = outer). Ranges:
            100: Response decoration (headers)
            200: Logging
            400: Authentication (auth)
            500-800: Custom
        middleware_default: Default on/off state. Default: False.
    """

    middleware_name: str = ""
    middleware_order: int = 500
    middleware_default: bool = False

    __slots__ = ("app",)

    def __init__(self, app: ASGIApp, **kwargs: Any) -> None:
        """Initialize middleware with wrapped app.

        Args:
            app: The ASGI app to wrap (next in chain).
            **kwargs: Unused extra configuration.
        """
        self.app = app

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        name = cls.middleware_name or cls.__name__
        if name in MIDDLEWARE_REGISTRY:
            raise ValueError(f"Middleware name '{name}' already registered")
        cls.middleware_name = name
        MIDDLEWARE_REGISTRY[name] = cls

    @abstractmethod
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None: ...


def _autodiscover() -> None:
    """Import all middleware modules in this package to trigger registration."""
    package_dir = Path(__file__).parent
    for py_file in package_dir.glob("*.py"):
        if py_file.name.startswith("_"):
            continue
        importlib.import_module(f".{py_file.stem}", __package__)


def middleware_chain(
    middleware_config: str | list[str] | Mapping[str, Any],
    app: ASGIApp,
    full_config: Mapping[str, Any] | None = None,
) -> ASGIApp:
    """Wrap ``app`` with the enabled gates, ordered by middleware_order.

    The gate with the lowest order becomes the outermost wrapper, so the
    default chain is headers -> logging -> auth -> app.

    Args:
        middleware_config: Dict {name: on/off}, comma-separated string, or list.
        app: The innermost ASGI app (usually a method router).
        full_config: Mapping holding ``{name}_middleware`` kwargs sections.

    Returns:
        Wrapped ASGI app.

    Raises:
        ConfigurationError: If a configured name is not a registered gate.
    """
    config_dict: dict[str, bool] = {}

    if isinstance(middleware_config, str):
        for name in middleware_config.split(","):
            name = name.strip()
            if name:
                config_dict[name] = True
    elif isinstance(middleware_config, Mapping):
        for name, value in middleware_config.items():
            config_dict[name] = _parse_enabled(value)
    elif middleware_config:
        for name in middleware_config:
            config_dict[name] = True

    unknown = sorted(set(config_dict) - set(MIDDLEWARE_REGISTRY))
    if unknown:
        raise ConfigurationError(f"Unknown middleware: {', '.join(unknown)}")

    enabled: list[tuple[int, str, type[BaseMiddleware]]] = []
    for name, cls in MIDDLEWARE_REGISTRY.items():
        is_enabled = config_dict.get(name, cls.middleware_default)
        if is_enabled:
            enabled.append((cls.middleware_order, name, cls))

    enabled.sort(key=lambda x: x[0])

    # Build chain (reversed: first in order = outermost wrapper)
    for _order, name, cls in reversed(enabled):
        options: Any = {}
        if full_config is not None:
            options = full_config.get(f"{name}_middleware") or {}
        app = cls(app, **options)

    return app


def _parse_enabled(value: Any) -> bool:
    """Parse on/off/true/false value to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("on", "true", "yes", "1")
    return bool(value)


_autodiscover()
globals().update({cls.__name__: cls for cls in MIDDLEWARE_REGISTRY.values()})

__all__ = [
    "BaseMiddleware",
    "MIDDLEWARE_REGISTRY",
    "middleware_chain",
    *(cls.__name__ for cls in MIDDLEWARE_REGISTRY.values()),
]
