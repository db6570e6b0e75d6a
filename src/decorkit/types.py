"""Structural types shared by the pipeline and decorator implementations."""

from __future__ import annotations

from typing import Any, MutableMapping, Protocol, runtime_checkable

Context = MutableMapping[str, Any]
Preloaded = MutableMapping[str, Any]


@runtime_checkable
class SupportsDecorate(Protocol):
    """Anything the pipeline can invoke as a stage's decorator."""

    def decorate(self, value: Any, context: Context, preloaded: Preloaded | None) -> Any: ...


__all__ = ["Context", "Preloaded", "SupportsDecorate"]
