"""
decorkit — conditional decoration pipelines.

Declare, per decoratable type, an ordered chain of named stages, each picking
a decorator under a condition; then decorate single records or whole
collections. Collections run batch "preload" computations once and share the
result with every item, so per-record lookups are not repeated.

Import Guidelines:
------------------
- Subclass `CompositeDecorator` and register rules with `decorated_by`,
  `set_context` and `preload`.
- Implement decorators by subclassing `BaseDecorator` (or with plain
  functions) and register them with `@decorator` or
  `@YourType.register_decorator`.
- Use `DecorationPipeline` with a standalone `RuleBook` when a class-level
  owner is not wanted.
- Configure runtime behaviour through `decorkit.conf.settings`.
"""

from importlib.metadata import PackageNotFoundError, version

from .composite import CompositeDecorator
from .conf import PipelineConfig, get_config, settings
from .decorators import BaseDecorator, DecoratorRegistration, FunctionDecorator, decorator
from .exceptions import ConfigurationError, DecorkitError
from .pipeline import DecorationPipeline
from .registry import (
    DecoratorLookup,
    DecoratorLookupError,
    DecoratorRegistry,
    RegistryCollisionError,
    RegistryDuplicateError,
    RegistryError,
    RegistryFrozenError,
    RegistryLookupError,
    decorators,
)
from .resolve import ResolutionResult
from .types import SupportsDecorate
from .rules import (
    Binary,
    ContextRule,
    DynamicTarget,
    FixedTarget,
    PreloadRule,
    RuleBook,
    StageRule,
    Unary,
)

try:
    __version__ = version("decorkit")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "CompositeDecorator",
    "DecorationPipeline",
    "RuleBook",
    "StageRule",
    "ContextRule",
    "PreloadRule",
    "FixedTarget",
    "DynamicTarget",
    "Unary",
    "Binary",
    "ResolutionResult",
    "SupportsDecorate",
    "BaseDecorator",
    "FunctionDecorator",
    "DecoratorRegistration",
    "decorator",
    "DecoratorRegistry",
    "DecoratorLookup",
    "decorators",
    "settings",
    "get_config",
    "PipelineConfig",
    "DecorkitError",
    "ConfigurationError",
    "RegistryError",
    "RegistryDuplicateError",
    "RegistryCollisionError",
    "RegistryLookupError",
    "RegistryFrozenError",
    "DecoratorLookupError",
]
