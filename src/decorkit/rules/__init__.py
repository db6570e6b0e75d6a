"""Stage, context and preload rules."""

from .book import KINDS, RuleBook, RuleKind
from .records import (
    Binary,
    ContextRule,
    DynamicTarget,
    FixedTarget,
    PreloadRule,
    StageRule,
    Unary,
    Unsupported,
    as_rule_callable,
    as_target,
)

__all__ = [
    "RuleBook",
    "RuleKind",
    "KINDS",
    "StageRule",
    "ContextRule",
    "PreloadRule",
    "FixedTarget",
    "DynamicTarget",
    "Unary",
    "Binary",
    "Unsupported",
    "as_rule_callable",
    "as_target",
]
