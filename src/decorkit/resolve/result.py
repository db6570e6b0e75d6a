"""Stage resolution results with branch tracing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Branch names reported by resolve_stage.
FIXED = "fixed"
CONDITION = "condition"
CONDITION_FAILED = "condition-failed"
CONDITION_ARITY = "condition-arity"
DYNAMIC = "dynamic"
DYNAMIC_EMPTY = "dynamic-empty"
DYNAMIC_ARITY = "dynamic-arity"

APPLIED_BRANCHES = frozenset({FIXED, CONDITION, DYNAMIC})


@dataclass(slots=True)
class ResolutionResult:
    """Outcome of resolving one stage against a record.

    ``value`` is the decorator identifier to invoke, or None when the stage
    is skipped.
    """

    stage: str
    branch: str
    value: Any = None
    reason: str | None = None

    @property
    def applies(self) -> bool:
        return self.branch in APPLIED_BRANCHES

    @property
    def label(self) -> str:
        if self.value is None:
            return "<skip>"
        if isinstance(self.value, str):
            return self.value
        return getattr(self.value, "__name__", None) or type(self.value).__name__

    def context(self, prefix: str) -> dict[str, object]:
        """Return a flat mapping suitable for span attributes."""

        return {
            f"{prefix}.stage": self.stage,
            f"{prefix}.branch": self.branch,
            f"{prefix}.reason": self.reason or "",
            f"{prefix}.decorator": self.label,
        }


__all__ = [
    "ResolutionResult",
    "APPLIED_BRANCHES",
    "FIXED",
    "CONDITION",
    "CONDITION_FAILED",
    "CONDITION_ARITY",
    "DYNAMIC",
    "DYNAMIC_EMPTY",
    "DYNAMIC_ARITY",
]
