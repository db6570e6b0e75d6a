"""Per-stage resolver: does a stage apply, and with which decorator."""

from __future__ import annotations

from typing import Any

from decorkit.rules.records import DynamicTarget, FixedTarget, StageRule, Unsupported

from .result import (
    CONDITION,
    CONDITION_ARITY,
    CONDITION_FAILED,
    DYNAMIC,
    DYNAMIC_ARITY,
    DYNAMIC_EMPTY,
    FIXED,
    ResolutionResult,
)


def resolve_stage(rule: StageRule, record: Any, context: Any) -> ResolutionResult:
    """Resolve ``rule`` for ``record``.

    A dynamic target's return value is both the gate and the identifier; a
    falsy return skips. A fixed target applies unless its condition returns a
    falsy value. Functions of unsupported shape always skip.
    """
    target = rule.target

    if isinstance(target, DynamicTarget):
        if isinstance(target.resolver, Unsupported):
            return ResolutionResult(
                rule.name, DYNAMIC_ARITY, reason=f"resolver arity {target.resolver.arity} unsupported"
            )
        identifier = target.resolver(record, context)
        if not identifier:
            return ResolutionResult(rule.name, DYNAMIC_EMPTY, reason="resolver returned a falsy value")
        return ResolutionResult(rule.name, DYNAMIC, identifier, reason="resolver selected decorator")

    if isinstance(target, FixedTarget):
        condition = rule.condition
        if condition is None:
            return ResolutionResult(rule.name, FIXED, target.identifier, reason="unconditional")
        if isinstance(condition, Unsupported):
            return ResolutionResult(
                rule.name, CONDITION_ARITY, reason=f"condition arity {condition.arity} unsupported"
            )
        if condition(record, context):
            return ResolutionResult(rule.name, CONDITION, target.identifier, reason="condition passed")
        return ResolutionResult(rule.name, CONDITION_FAILED, reason="condition failed")

    raise TypeError(f"Unsupported stage target: {target!r}")


__all__ = ["resolve_stage"]
