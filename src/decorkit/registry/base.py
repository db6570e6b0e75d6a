# decorkit/registry/base.py


import logging
from threading import RLock
from typing import Callable, Generic, TypeVar, Any, overload, Literal

from asgiref.sync import sync_to_async

from .exceptions import RegistryDuplicateError, RegistryCollisionError, RegistryFrozenError, RegistryLookupError

logger = logging.getLogger(__name__)

K = TypeVar("K")
T = TypeVar("T")


class BaseRegistry(Generic[K, T]):
    """Ordered registry keyed by a coerced key K storing objects of T."""

    def __init__(self, *, coerce_key: Callable[[Any], K], label: str | None = None) -> None:
        self._coerce = coerce_key
        self._lock = RLock()
        self._store: dict[K, T] = {}
        self._frozen = False
        self.label = label or self.__class__.__name__

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.label!r} ({self.count()} entries)>"

    def _register(self, key: K, obj: T) -> None:
        """Internal: store ``obj`` under an already-coerced ``key``."""
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(f"Registry {self.label!r} is frozen")
            if key in self._store:
                if self._store[key] is obj:
                    raise RegistryDuplicateError(f"Already registered: {key}")
                raise RegistryCollisionError(
                    f"Key already registered to different object: {key}"
                )
            self._store[key] = obj

    # --- registration ---

    def register(self, key: Any, obj: T, *, strict: bool = False) -> None:
        """
        Registers an object under ``key``, handling duplicates based on the strict mode.

        Re-registering the very same object is a duplicate: it raises
        `RegistryDuplicateError` in strict mode and is otherwise ignored with a
        debug message. A different object under a taken key always raises
        `RegistryCollisionError`.

        :param key: The key to register under; coerced by the registry.
        :param obj: The object to be registered.
        :param strict: Whether duplicate registration should raise.
        :return: None
        """
        k = self._coerce(key)
        try:
            self._register(k, obj)
        except RegistryDuplicateError:
            if strict:
                raise
            logger.debug("Duplicate registration ignored: %s", k)

    async def aregister(self, key: Any, obj: T, *, strict: bool = False) -> None:
        """Async wrapper around `register`."""
        return await sync_to_async(self.register)(key, obj, strict=strict)

    # --- retrieval ---

    def get(self, key: Any) -> T:
        """
        Retrieve the object registered under ``key``.

        :param key: The key of the object to retrieve.
        :return: The registered object.
        :raises RegistryLookupError: If nothing is registered under the key.
        """
        k = self._coerce(key)
        with self._lock:
            try:
                return self._store[k]
            except KeyError as err:
                raise RegistryLookupError(
                    f"{k!r} not found or not registered in {self.label!r}"
                ) from err

    async def aget(self, key: Any) -> T:
        """Async wrapper around `get`."""
        return await sync_to_async(self.get)(key)

    def try_get(self, key: Any) -> T | None:
        """Like `get`, but return None when the key is not registered."""
        try:
            return self.get(key)
        except RegistryLookupError:
            return None

    async def atry_get(self, key: Any) -> T | None:
        """Async variant of `try_get`."""
        try:
            return await self.aget(key)
        except RegistryLookupError:
            return None

    def __contains__(self, key: Any) -> bool:
        try:
            k = self._coerce(key)
        except (TypeError, ValueError):
            return False
        with self._lock:
            return k in self._store

    # --- counting ---

    def count(self) -> int:
        """Counts the number of registered objects in the store."""
        with self._lock:
            return len(self._store)

    # --- enumerate all entries ---

    @overload
    def keys(self) -> tuple[K, ...]: ...
    @overload
    def keys(self, *, as_csv: Literal[True]) -> str: ...
    @overload
    def keys(self, *, as_csv: Literal[False]) -> tuple[K, ...]: ...

    def keys(self, *, as_csv: bool = False):
        """
        Return all registered keys in registration order.

        When `as_csv` is True, returns a comma-separated string of the keys for
        logging/debugging purposes.
        """
        with self._lock:
            keys_tuple: tuple[K, ...] = tuple(self._store.keys())

        if as_csv:
            return ",".join(str(k) for k in keys_tuple)

        return keys_tuple

    # --- mutation / control ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    def clear(self) -> None:
        """
        Clear the registry if not frozen.
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(f"Registry {self.label!r} is frozen")
            self._store.clear()

    def freeze(self) -> None:
        """
        Mark the registry as frozen (no further mutations).
        """
        with self._lock:
            self._frozen = True
