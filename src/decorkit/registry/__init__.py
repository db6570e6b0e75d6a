"""Decorator implementation registries."""

from .base import BaseRegistry
from .decorators import DecoratorRegistry, coerce_identifier, decorators
from .exceptions import (
    DecoratorLookupError,
    RegistryCollisionError,
    RegistryDuplicateError,
    RegistryError,
    RegistryFrozenError,
    RegistryLookupError,
)
from .lookup import DecoratorLookup, is_implementation

__all__ = [
    "BaseRegistry",
    "DecoratorRegistry",
    "DecoratorLookup",
    "coerce_identifier",
    "decorators",
    "is_implementation",
    "RegistryError",
    "RegistryDuplicateError",
    "RegistryCollisionError",
    "RegistryLookupError",
    "RegistryFrozenError",
    "DecoratorLookupError",
]
