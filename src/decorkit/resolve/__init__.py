"""Stage resolution for the decoration pipeline."""

from .result import APPLIED_BRANCHES, ResolutionResult
from .stage import resolve_stage

__all__ = [
    "ResolutionResult",
    "APPLIED_BRANCHES",
    "resolve_stage",
]
