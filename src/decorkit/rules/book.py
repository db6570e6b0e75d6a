# decorkit/rules/book.py
"""Ordered rule storage for a decoratable type."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Literal

from decorkit.registry.exceptions import RegistryFrozenError

from .records import ContextRule, PreloadRule, StageRule

logger = logging.getLogger(__name__)

RuleKind = Literal["stage", "context", "preload"]
KINDS: tuple[str, ...] = ("stage", "context", "preload")

_RULE_TYPES = {"stage": StageRule, "context": ContextRule, "preload": PreloadRule}


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"rule name must be a non-empty string, got {name!r}")
    return name


class RuleBook:
    """Three independent ordered mappings: stages, context rules, preload rules.

    Registering an existing name overwrites the rule in place; its position in
    the sequence is the one it was first registered at. There is no removal.
    """

    def __init__(self, owner: str | None = None) -> None:
        self.owner = owner
        self._lock = RLock()
        self._frozen = False
        self._rules: dict[str, dict[str, Any]] = {kind: {} for kind in KINDS}

    def __repr__(self) -> str:
        sizes = ", ".join(f"{k}={len(v)}" for k, v in self._rules.items())
        return f"<RuleBook owner={self.owner!r} {sizes}>"

    def _table(self, kind: str) -> dict[str, Any]:
        try:
            return self._rules[kind]
        except KeyError:
            raise ValueError(f"unknown rule kind {kind!r}; expected one of {KINDS}") from None

    # --- registration ---

    def register(self, kind: RuleKind, name: str, rule: Any) -> None:
        table = self._table(kind)
        _check_name(name)
        expected = _RULE_TYPES[kind]
        if not isinstance(rule, expected):
            raise TypeError(f"{kind} rule must be {expected.__name__}, got {type(rule).__name__}")
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(f"Rule book for {self.owner!r} is frozen")
            if name in table:
                logger.debug("%s rule %r overwritten on %s", kind, name, self.owner)
            table[name] = rule

    def add_stage(self, name: str, target: Any, condition: Any = None) -> StageRule:
        rule = StageRule.build(_check_name(name), target, condition)
        self.register("stage", name, rule)
        return rule

    def add_context(self, name: str, compute: Callable[[Any, dict], Any]) -> ContextRule:
        if not callable(compute):
            raise TypeError(f"context rule {name!r} needs a callable, got {compute!r}")
        rule = ContextRule(_check_name(name), compute)
        self.register("context", name, rule)
        return rule

    def add_preload(self, name: str, compute: Callable[[list, dict, dict], Any]) -> PreloadRule:
        if not callable(compute):
            raise TypeError(f"preload rule {name!r} needs a callable, got {compute!r}")
        rule = PreloadRule(_check_name(name), compute)
        self.register("preload", name, rule)
        return rule

    # --- retrieval ---

    def list(self, kind: RuleKind) -> tuple[Any, ...]:
        table = self._table(kind)
        with self._lock:
            return tuple(table.values())

    def names(self, kind: RuleKind) -> tuple[str, ...]:
        table = self._table(kind)
        with self._lock:
            return tuple(table.keys())

    @property
    def stages(self) -> tuple[StageRule, ...]:
        return self.list("stage")

    @property
    def contexts(self) -> tuple[ContextRule, ...]:
        return self.list("context")

    @property
    def preloads(self) -> tuple[PreloadRule, ...]:
        return self.list("preload")

    # --- lifecycle ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    def copy(self, owner: str | None = None) -> "RuleBook":
        """Return an unfrozen book with the same rules in the same order."""
        clone = RuleBook(owner or self.owner)
        with self._lock:
            for kind, table in self._rules.items():
                clone._rules[kind].update(table)
        return clone


__all__ = ["RuleBook", "RuleKind", "KINDS"]
