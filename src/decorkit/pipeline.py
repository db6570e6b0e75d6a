# decorkit/pipeline.py
"""
Decoration pipeline: context augmentation, stage fold, and batch preload.

A `DecorationPipeline` reads a `RuleBook` and resolves decorator identifiers
through a `DecoratorLookup`. It owns no rules itself; `CompositeDecorator`
builds one per decoratable type.

Single record
-------------
1. Every context rule, in registration order, writes
   ``context[name] = compute(record, context)`` into the caller's dict.
2. Stages fold over the record in registration order. A stage that resolves
   to an identifier replaces the carried value with
   ``impl.decorate(carry, context, preloaded)``; a skipped stage leaves it.

Collection
----------
Preload rules run once, in registration order, each writing
``preloaded[name] = compute(records, context, preloaded)``. Every item is
then decorated with the same context and the same preloaded dict. Without
preload rules the items receive ``preloaded=None``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from asgiref.sync import sync_to_async

from decorkit.conf import PipelineConfig, get_config
from decorkit.registry.lookup import DecoratorLookup
from decorkit.resolve import ResolutionResult, resolve_stage
from decorkit.rules.book import RuleBook
from decorkit.tracing import add_span_event, set_span_attributes, span_sync

logger = logging.getLogger(__name__)

# Distinguishes an omitted ``preloaded`` (fresh dict) from an explicit None.
_MISSING: Any = object()


def normalize_records(records: Any) -> list:
    """Return ``records`` as a list.

    None becomes ``[]``; strings, bytes, mappings and other non-iterables are
    not collections and also yield ``[]``.
    """
    if records is None:
        return []
    if isinstance(records, list):
        return records
    if isinstance(records, (str, bytes, bytearray, Mapping)) or not isinstance(records, Iterable):
        logger.warning("decorate_collection expected an iterable of records, got %s; treating as empty",
                       type(records).__name__)
        return []
    return list(records)


class DecorationPipeline:
    def __init__(
        self,
        rules: RuleBook,
        lookup: DecoratorLookup | None = None,
        *,
        config: PipelineConfig | Mapping[str, Any] | None = None,
        owner: str | None = None,
    ) -> None:
        self.rules = rules
        self.lookup = lookup or DecoratorLookup()
        self._config = config
        self.owner = owner or rules.owner or "<anonymous>"

    def __repr__(self) -> str:
        return f"<DecorationPipeline owner={self.owner!r} rules={self.rules!r}>"

    # --- configuration ---

    @property
    def config(self) -> PipelineConfig:
        """Effective config: explicit model, or global settings with overrides."""
        if isinstance(self._config, PipelineConfig):
            return self._config
        base = get_config()
        if self._config:
            return base.merged(self._config)
        return base

    def _on_use(self, cfg: PipelineConfig) -> None:
        if not cfg.freeze_on_first_use or self.rules.frozen:
            return
        self.rules.freeze()
        if self.lookup.scoped is not None:
            self.lookup.scoped.freeze()
        logger.debug("froze rules for %s on first use", self.owner)

    def _span(self, name: str, cfg: PipelineConfig, attributes: dict[str, Any]):
        return span_sync(
            name,
            attributes={"decorkit.owner": self.owner, **attributes},
            enabled=cfg.trace_enabled,
            level=cfg.trace_level,
        )

    # --- phases ---

    def augment_context(self, record: Any, context: dict) -> dict:
        """Write every context rule's value into ``context`` and return it."""
        for rule in self.rules.contexts:
            context[rule.name] = rule.compute(record, context)
        return context

    def run_preloads(self, records: list, context: dict) -> dict | None:
        """Run all preload rules once; None when there are none."""
        preloads = self.rules.preloads
        if not preloads:
            return None

        cfg = self.config
        preloaded: dict = {}
        attrs = {"decorkit.preloads": len(preloads), "decorkit.preload.names": [r.name for r in preloads]}
        with self._span("decorkit.preload", cfg, attrs):
            for rule in preloads:
                preloaded[rule.name] = rule.compute(records, context, preloaded)
        return preloaded

    def resolve(self, record: Any, context: dict) -> list[ResolutionResult]:
        return [resolve_stage(rule, record, context) for rule in self.rules.stages]

    def _fold(
        self, record: Any, context: dict, preloaded: Any, cfg: PipelineConfig, span: Any = None
    ) -> tuple[Any, int]:
        carry = record
        applied = 0
        for rule in self.rules.stages:
            result = resolve_stage(rule, record, context)
            if cfg.log_resolution:
                logger.debug("%s stage %s -> %s (%s)", self.owner, rule.name, result.branch, result.label)
            add_span_event(span, "decorkit.stage", result.context("decorkit.stage"), cfg.trace_level)
            if not result.applies:
                continue
            impl = self.lookup.resolve(result.value)
            carry = impl.decorate(carry, context, preloaded)
            applied += 1
        return carry, applied

    # --- entry points ---

    def decorate(self, record: Any, context: dict | None = None, preloaded: Any = _MISSING) -> Any:
        """Decorate a single record.

        ``context`` is mutated in place by context rules. An omitted
        ``preloaded`` becomes a fresh dict; an explicit None is passed on.
        """
        if context is None:
            context = {}
        if preloaded is _MISSING:
            preloaded = {}

        cfg = self.config
        self._on_use(cfg)
        with self._span("decorkit.decorate", cfg, {"decorkit.stages": len(self.rules.stages)}) as span:
            self.augment_context(record, context)
            result, applied = self._fold(record, context, preloaded, cfg, span)
            set_span_attributes(span, {"decorkit.applied": applied}, cfg.trace_level)
        return result

    def decorate_collection(self, records: Any, context: dict | None = None) -> list:
        """Preload once for the batch, then decorate every record in order."""
        if context is None:
            context = {}
        items = normalize_records(records)

        cfg = self.config
        self._on_use(cfg)
        attrs = {"decorkit.records": len(items), "decorkit.preloads": len(self.rules.preloads)}
        with self._span("decorkit.decorate_collection", cfg, attrs) as span:
            preloaded = self.run_preloads(items, context)

            out = []
            for record in items:
                item_context = dict(context) if cfg.isolate_context else context
                self.augment_context(record, item_context)
                value, _ = self._fold(record, item_context, preloaded, cfg, span)
                out.append(value)
            return out

    def explain(self, record: Any, context: dict | None = None) -> list[ResolutionResult]:
        """Resolve every stage for ``record`` without running context rules or decorators."""
        return self.resolve(record, {} if context is None else context)

    async def adecorate(self, record: Any, context: dict | None = None, preloaded: Any = _MISSING) -> Any:
        """Async wrapper around `decorate`."""
        return await sync_to_async(self.decorate)(record, context, preloaded)

    async def adecorate_collection(self, records: Any, context: dict | None = None) -> list:
        """Async wrapper around `decorate_collection`."""
        return await sync_to_async(self.decorate_collection)(records, context)


__all__ = ["DecorationPipeline", "normalize_records"]
