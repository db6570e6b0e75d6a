"""Rule records stored by a :class:`~decorkit.rules.book.RuleBook`.

Caller-supplied functions are wrapped in one of three shapes when a rule is
registered:

- :class:`Unary` is invoked as ``fn(record)``
- :class:`Binary` is invoked as ``fn(record, context)``
- :class:`Unsupported` never runs; any rule using it resolves to "skip"

Callers may pick ``Unary``/``Binary`` explicitly. Bare callables are
classified once by :func:`as_rule_callable` from their required positional
parameters.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Union

logger = logging.getLogger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True, slots=True)
class Unary:
    fn: Callable[[Any], Any]

    def __call__(self, record: Any, context: Any) -> Any:
        return self.fn(record)


@dataclass(frozen=True, slots=True)
class Binary:
    fn: Callable[[Any, Any], Any]

    def __call__(self, record: Any, context: Any) -> Any:
        return self.fn(record, context)


@dataclass(frozen=True, slots=True)
class Unsupported:
    """A callable whose shape is neither one nor two arguments."""

    fn: Callable[..., Any]
    arity: int | None = None


RuleCallable = Union[Unary, Binary, Unsupported]


def required_arity(fn: Callable[..., Any]) -> int | None:
    """Return the number of required positional parameters of ``fn``.

    Returns None when the signature cannot be inspected or when ``fn`` takes
    ``*args``.
    """
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return None

    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty:
            count += 1
    return count


def as_rule_callable(fn: Any) -> RuleCallable:
    """Classify ``fn`` once as `Unary`, `Binary` or `Unsupported`.

    Only required positional parameters count, so ``lambda r, c=None`` is
    `Unary` even though it does not take exactly one argument. Strict
    matching would treat it as unsupported; wrap it in `Binary` to get the
    context.
    """
    if isinstance(fn, (Unary, Binary, Unsupported)):
        return fn
    if not callable(fn):
        raise TypeError(f"Rule function must be callable, got {fn!r}")

    arity = required_arity(fn)
    if arity == 1:
        return Unary(fn)
    if arity == 2:
        return Binary(fn)
    logger.debug("rule function %r has unsupported arity %s; it will always skip", fn, arity)
    return Unsupported(fn, arity)


# ---------------------------------------------------------------------------
# Stage targets
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FixedTarget:
    """A literal decorator identifier (name or implementation)."""

    identifier: Any


@dataclass(frozen=True, slots=True)
class DynamicTarget:
    """A function whose return value is both the gate and the identifier."""

    resolver: RuleCallable

    @classmethod
    def of(cls, fn: Any) -> "DynamicTarget":
        return cls(as_rule_callable(fn))


StageTarget = Union[FixedTarget, DynamicTarget]


def as_target(target: Any) -> StageTarget:
    """Classify a registration-time target.

    Strings and objects exposing ``decorate`` are fixed identifiers; any
    other callable is a dynamic name resolver.
    """
    if isinstance(target, (FixedTarget, DynamicTarget)):
        return target
    if isinstance(target, str) or callable(getattr(target, "decorate", None)):
        return FixedTarget(target)
    if isinstance(target, (Unary, Binary, Unsupported)) or callable(target):
        return DynamicTarget.of(target)
    raise TypeError(f"Unsupported stage target: {target!r}")


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class StageRule:
    name: str
    target: StageTarget
    condition: RuleCallable | None = None

    @classmethod
    def build(cls, name: str, target: Any, condition: Any = None) -> "StageRule":
        return cls(
            name=name,
            target=as_target(target),
            condition=None if condition is None else as_rule_callable(condition),
        )


@dataclass(frozen=True, slots=True)
class ContextRule:
    """``compute(record, context)``; its result lands in ``context[name]``."""

    name: str
    compute: Callable[[Any, dict], Any]


@dataclass(frozen=True, slots=True)
class PreloadRule:
    """``compute(records, context, preloaded)``; result lands in ``preloaded[name]``."""

    name: str
    compute: Callable[[list, dict, dict], Any]


__all__ = [
    "Unary",
    "Binary",
    "Unsupported",
    "RuleCallable",
    "required_arity",
    "as_rule_callable",
    "FixedTarget",
    "DynamicTarget",
    "StageTarget",
    "as_target",
    "StageRule",
    "ContextRule",
    "PreloadRule",
]
