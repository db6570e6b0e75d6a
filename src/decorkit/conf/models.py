# decorkit/conf/models.py
from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from decorkit.exceptions import ConfigurationError

__all__ = ("PipelineConfig",)


class PipelineConfig(BaseModel):
    """
    Validated runtime options for a decoration pipeline.

    Built from the upper-case settings mapping; field names are the
    lower-cased setting keys.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    isolate_context: bool = False
    freeze_on_first_use: bool = False
    trace_enabled: bool = True
    trace_level: Literal["debug", "info", "minimal"] = "info"
    log_resolution: bool = False

    @classmethod
    def from_settings(cls, mapping: Mapping[str, Any]) -> "PipelineConfig":
        """Validate an upper-case settings mapping, ignoring unknown keys."""
        known = cls.model_fields
        data = {k.lower(): v for k, v in mapping.items() if k.lower() in known}
        return cls.build(data)

    @classmethod
    def build(cls, data: Mapping[str, Any]) -> "PipelineConfig":
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc

    def merged(self, overrides: Mapping[str, Any]) -> "PipelineConfig":
        """Return a copy with lower-case ``overrides`` applied and validated."""
        return self.build({**self.model_dump(), **{k.lower(): v for k, v in overrides.items()}})
