# decorkit/decorators/base.py


"""
Decorator implementations and their registration decorator.

A decorator implementation is anything exposing
``decorate(value, context, preloaded) -> new_value``. Two ready-made shapes
live here:

- `BaseDecorator`: subclass it and implement ``decorate`` as a classmethod;
  the class itself is the implementation.
- `FunctionDecorator`: wraps a plain ``fn(value, context, preloaded)``.

`DecoratorRegistration` is a callable class implementing the dual-form
decorator pattern and registering implementations into a
`DecoratorRegistry`:

    @decorator
    class NilDecorator(BaseDecorator): ...

    @decorator(name="upper", registry=my_registry)
    def upper(value, context, preloaded): ...
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, TypeVar, cast

from decorkit.registry.decorators import DecoratorRegistry, coerce_identifier, decorators
from decorkit.registry.lookup import is_implementation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseDecorator(ABC):
    """Class-level decorator implementation.

    ``decorator_name`` overrides the identifier derived from the class name.
    """

    decorator_name: str | None = None

    @classmethod
    @abstractmethod
    def decorate(cls, value: Any, context: Any, preloaded: Any) -> Any:
        raise NotImplementedError


class FunctionDecorator:
    """Adapter turning ``fn(value, context, preloaded)`` into an implementation."""

    def __init__(self, fn: Callable[[Any, Any, Any], Any], *, name: str | None = None) -> None:
        self.fn = fn
        self.decorator_name = name or getattr(fn, "__name__", None)
        self.__name__ = self.decorator_name
        self.__doc__ = getattr(fn, "__doc__", None)

    def decorate(self, value: Any, context: Any, preloaded: Any) -> Any:
        return self.fn(value, context, preloaded)

    def __call__(self, value: Any, context: Any = None, preloaded: Any = None) -> Any:
        return self.fn(value, context, preloaded)

    def __repr__(self) -> str:
        return f"<FunctionDecorator {self.decorator_name!r}>"


class DecoratorRegistration:
    """Class-based registration decorator (no factories).

    Subclasses may override ``get_registry()`` to route registrations to a
    different registry; the default is the one passed at construction, or the
    process-wide `decorators` registry.
    """

    def __init__(self, registry: DecoratorRegistry | None = None, *, strict: bool = False) -> None:
        self.registry = registry
        self.strict = strict

    # ---------------- public API: dual-form decorator ----------------
    def __call__(
        self,
        _obj: Optional[T] = None,
        *,
        name: Optional[str] = None,
        registry: Optional[DecoratorRegistry] = None,
    ) -> T | Callable[[T], T]:
        """Support both forms:

            @decorator
            class Foo(BaseDecorator): ...

            @decorator(name="foo")
            def foo(value, context, preloaded): ...
        """

        def _apply(obj: T) -> T:
            impl = self.adapt(obj, name=name)
            target = registry or self.get_registry()
            identifier = name or coerce_identifier(impl)
            target.register(impl, name=identifier, strict=self.strict)
            logger.debug("[DECORATOR] registered `%s` in %s", identifier, target.label)
            return cast(T, impl)

        # Return the applied object for @decorator, or the applier for @decorator(...)
        if _obj is not None:
            return _apply(_obj)
        return _apply

    # ---------------- hooks / extension points ----------------
    def get_registry(self) -> DecoratorRegistry:
        return self.registry if self.registry is not None else decorators

    def adapt(self, obj: Any, *, name: str | None = None) -> Any:
        """Return the implementation to register for ``obj``.

        Implementations pass through; bare functions are wrapped in
        `FunctionDecorator`.
        """
        if is_implementation(obj):
            return obj
        if callable(obj):
            return FunctionDecorator(obj, name=name)
        raise TypeError(f"{obj!r} is neither a decorator implementation nor a function")


# Registers into the process-wide registry.
decorator = DecoratorRegistration()


__all__ = ["BaseDecorator", "FunctionDecorator", "DecoratorRegistration", "decorator"]
