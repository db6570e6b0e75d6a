# decorkit/composite.py
"""
`CompositeDecorator`: a central, per-type manager answering which decorator
is used under which condition.

Subclasses declare their rules once, at class-definition time:

    class UserPresenter(CompositeDecorator):
        pass

    UserPresenter.decorated_by("default", lambda user: "NilDecorator" if user is None else "UserDecorator")
    UserPresenter.decorated_by("admin", "AdminBadge", lambda user, ctx: ctx.get("is_admin"))
    UserPresenter.set_context("viewer", lambda user, ctx: ctx.get("viewer_id"))
    UserPresenter.preload("teams", lambda users, ctx, preloaded: load_teams(users))

    UserPresenter.decorate(user, {"is_admin": True})
    UserPresenter.decorate_collection(users)

Each subclass owns a `RuleBook` (copied from its parent) and a scoped
`DecoratorRegistry` that is searched before the global one.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Mapping, Optional

from decorkit.conf import PipelineConfig
from decorkit.decorators.base import DecoratorRegistration
from decorkit.pipeline import _MISSING, DecorationPipeline
from decorkit.registry.decorators import DecoratorRegistry, decorators
from decorkit.registry.lookup import DecoratorLookup
from decorkit.resolve import ResolutionResult
from decorkit.rules.book import RuleBook

logger = logging.getLogger(__name__)


class CompositeDecorator:
    rules: ClassVar[RuleBook] = RuleBook("CompositeDecorator")
    local_decorators: ClassVar[DecoratorRegistry] = DecoratorRegistry(label="CompositeDecorator")
    # PipelineConfig, a mapping of overrides, or None for the global settings.
    config: ClassVar[PipelineConfig | Mapping[str, Any] | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        owner = f"{cls.__module__}.{cls.__qualname__}"
        cls.rules = cls.rules.copy(owner=owner)
        cls.local_decorators = DecoratorRegistry(label=owner)

    # ---------------- registration ----------------
    @classmethod
    def decorated_by(cls, name: str, target: Any, condition: Optional[Callable[..., Any]] = None) -> None:
        """Register stage ``name``.

        ``target`` is a decorator identifier (name or implementation) or a
        function returning one; ``condition`` gates a fixed identifier.
        """
        cls.rules.add_stage(name, target, condition)

    @classmethod
    def set_context(cls, name: str, compute: Callable[[Any, dict], Any]) -> None:
        cls.rules.add_context(name, compute)

    @classmethod
    def preload(cls, name: str, compute: Callable[[list, dict, dict], Any]) -> None:
        """Register a batch computation run once per `decorate_collection` call."""
        cls.rules.add_preload(name, compute)

    @classmethod
    def register_decorator(cls, impl: Any = None, *, name: str | None = None):
        """Register an implementation in this type's scope (dual form)."""
        return DecoratorRegistration(cls.local_decorators)(impl, name=name)

    @classmethod
    def finalize(cls) -> None:
        """Freeze this type's rules and scoped decorators."""
        cls.rules.freeze()
        cls.local_decorators.freeze()
        logger.debug("finalized %s", cls.rules.owner)

    # ---------------- pipeline ----------------
    @classmethod
    def pipeline(cls) -> DecorationPipeline:
        return DecorationPipeline(
            cls.rules,
            DecoratorLookup(scoped=cls.local_decorators, fallback=decorators),
            config=cls.config,
            owner=cls.rules.owner,
        )

    @classmethod
    def decorate(cls, record: Any, context: dict | None = None, preloaded: Any = _MISSING) -> Any:
        return cls.pipeline().decorate(record, context, preloaded)

    @classmethod
    def decorate_collection(cls, records: Any, context: dict | None = None) -> list:
        return cls.pipeline().decorate_collection(records, context)

    @classmethod
    async def adecorate(cls, record: Any, context: dict | None = None, preloaded: Any = _MISSING) -> Any:
        return await cls.pipeline().adecorate(record, context, preloaded)

    @classmethod
    async def adecorate_collection(cls, records: Any, context: dict | None = None) -> list:
        return await cls.pipeline().adecorate_collection(records, context)

    @classmethod
    def explain(cls, record: Any, context: dict | None = None) -> list[ResolutionResult]:
        return cls.pipeline().explain(record, context)


__all__ = ["CompositeDecorator"]
