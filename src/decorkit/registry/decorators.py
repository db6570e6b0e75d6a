"""Identifier-keyed registry of decorator implementations."""

from __future__ import annotations

import logging
from typing import Any

from asgiref.sync import sync_to_async

from .base import BaseRegistry

logger = logging.getLogger(__name__)


def coerce_identifier(value: Any) -> str:
    """Normalize a decorator identifier to its registry key.

    Strings are stripped. Classes and functions contribute their
    ``decorator_name`` attribute when set, else their ``__name__``.
    """
    if isinstance(value, str):
        key = value.strip()
    else:
        key = getattr(value, "decorator_name", None) or getattr(value, "__name__", None)
        if not isinstance(key, str):
            raise TypeError(f"Cannot derive a decorator identifier from {value!r}")
        key = key.strip()
    if not key:
        raise ValueError("decorator identifier must be a non-empty string")
    return key


class DecoratorRegistry(BaseRegistry[str, Any]):
    """Registry mapping decorator identifiers to implementations."""

    def __init__(self, label: str | None = None) -> None:
        super().__init__(coerce_key=coerce_identifier, label=label)

    def register(self, impl: Any, *, name: str | None = None, strict: bool = False) -> None:  # type: ignore[override]
        """Register ``impl`` under ``name`` (or the name derived from ``impl``)."""
        key = name if name is not None else impl
        super().register(key, impl, strict=strict)
        logger.debug("registered decorator %s in %s", coerce_identifier(key), self.label)

    async def aregister(self, impl: Any, *, name: str | None = None, strict: bool = False) -> None:  # type: ignore[override]
        return await sync_to_async(self.register)(impl, name=name, strict=strict)


# Process-wide fallback tier used by every CompositeDecorator lookup.
decorators = DecoratorRegistry(label="global")


__all__ = ["DecoratorRegistry", "coerce_identifier", "decorators"]
