# decorkit/registry/exceptions.py
"""Registry exceptions"""
from decorkit.exceptions import DecorkitError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(DecorkitError): ...


class RegistryDuplicateError(RegistryError): ...


class RegistryCollisionError(RegistryError): ...


class RegistryLookupError(LookupError, RegistryError): ...


class RegistryFrozenError(RuntimeError, RegistryError): ...


class DecoratorLookupError(RegistryLookupError):
    """Raised when no lookup tier knows a decorator identifier."""

    def __init__(self, identifier: str, tiers: tuple[str, ...] = ()) -> None:
        self.identifier = identifier
        self.tiers = tiers
        searched = ", ".join(tiers) if tiers else "<none>"
        super().__init__(f"Decorator {identifier!r} not found (searched: {searched})")
