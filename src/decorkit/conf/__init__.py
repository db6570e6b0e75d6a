"""Process-wide decorkit configuration."""

from .defaults import DEFAULTS
from .models import PipelineConfig
from .settings import CONFIG_ENVVAR, Settings, validate_setting

settings = Settings()


def get_config() -> PipelineConfig:
    """Validate the current global settings into a :class:`PipelineConfig`."""
    return settings.to_config()


__all__ = ["DEFAULTS", "CONFIG_ENVVAR", "Settings", "PipelineConfig", "settings", "get_config", "validate_setting"]
