"""Two-tier decorator lookup: the owning type's scope first, then global."""

from __future__ import annotations

import logging
from typing import Any

from decorkit.types import SupportsDecorate

from .decorators import DecoratorRegistry, coerce_identifier
from .exceptions import DecoratorLookupError

logger = logging.getLogger(__name__)


def is_implementation(obj: Any) -> bool:
    """True when ``obj`` can be invoked as a decorator without a lookup."""
    return callable(getattr(obj, "decorate", None))


class DecoratorLookup:
    """Resolve decorator identifiers against an ordered pair of registries.

    ``scoped`` is searched before ``fallback``; either may be omitted. An
    identifier that already is an implementation resolves to itself.
    """

    def __init__(
        self,
        scoped: DecoratorRegistry | None = None,
        fallback: DecoratorRegistry | None = None,
    ) -> None:
        self.scoped = scoped
        self.fallback = fallback

    @property
    def tiers(self) -> tuple[DecoratorRegistry, ...]:
        return tuple(r for r in (self.scoped, self.fallback) if r is not None)

    def resolve(self, identifier: Any) -> SupportsDecorate:
        if is_implementation(identifier):
            return identifier

        labels = tuple(r.label for r in self.tiers)
        try:
            key = coerce_identifier(identifier)
        except (TypeError, ValueError) as err:
            raise DecoratorLookupError(repr(identifier), labels) from err

        for registry in self.tiers:
            impl = registry.try_get(key)
            if impl is not None:
                logger.debug("decorator %s resolved in %s", key, registry.label)
                return impl

        logger.debug(
            "decorator %s not found; known: %s",
            key,
            "; ".join(f"{r.label}=[{r.keys(as_csv=True)}]" for r in self.tiers),
        )
        raise DecoratorLookupError(key, labels)

    def __repr__(self) -> str:
        return f"<DecoratorLookup tiers={[r.label for r in self.tiers]}>"


__all__ = ["DecoratorLookup", "is_implementation"]
