"""Layered decorkit settings.

Every key must name a `PipelineConfig` field in upper case. Values are
validated and coerced through that model as they are written, so a bad
setting fails where it is set instead of at the next decoration.
"""


import importlib
import logging
import os
from collections import ChainMap
from typing import Any, Iterator, Mapping, MutableMapping

from decorkit.exceptions import ConfigurationError

from .defaults import DEFAULTS
from .models import PipelineConfig

logger = logging.getLogger(__name__)

CONFIG_ENVVAR = "DECORKIT_CONFIG_MODULE"


def validate_setting(key: str, value: Any) -> Any:
    """Return ``value`` coerced for setting ``key``.

    :raises ConfigurationError: for a key that is not upper case, a key
        decorkit does not know, or a value its field rejects.
    """
    if not isinstance(key, str) or not key.isupper():
        raise ConfigurationError(f"Setting names are upper case, got {key!r}")
    field = key.lower()
    if field not in PipelineConfig.model_fields:
        raise ConfigurationError(f"Unknown decorkit setting {key!r}; known: {', '.join(DEFAULTS)}")
    return getattr(PipelineConfig.build({field: value}), field)


class Settings(MutableMapping[str, Any]):
    """Validated overrides layered over optional base layers and `DEFAULTS`."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        validated = ({k: validate_setting(k, v) for k, v in layer.items()} for layer in layers)
        self._storage = ChainMap({}, *validated, dict(DEFAULTS))

    # Mapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> Any:
        return self._storage[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._storage.maps[0][key] = validate_setting(key, value)

    def __delitem__(self, key: str) -> None:
        del self._storage.maps[0][key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    # Loading ----------------------------------------------------------
    def update_from_object(self, obj: str, *, namespace: str | None = None) -> None:
        """Load settings from the module named ``obj``."""
        module = importlib.import_module(obj)
        self.update_from_mapping(vars(module), namespace=namespace)

    def update_from_envvar(self, envvar: str = CONFIG_ENVVAR, *, namespace: str | None = None) -> None:
        module_name = os.environ.get(envvar)
        if not module_name:
            return
        self.update_from_object(module_name, namespace=namespace)

    def update_from_mapping(self, mapping: Mapping[str, Any], *, namespace: str | None = None) -> None:
        """Apply ``mapping`` as overrides, all or nothing.

        Without a namespace only known upper-case keys are taken and anything
        else is left alone, so a shared settings module can be passed as is.
        With a namespace every ``<namespace>_`` key is decorkit's and must be
        valid.
        """
        if namespace is None:
            candidates = {k: v for k, v in mapping.items() if isinstance(k, str) and k in DEFAULTS}
        else:
            candidates = _filter_by_namespace(mapping, namespace)
        updates = {k: validate_setting(k, v) for k, v in candidates.items()}
        self._storage.maps[0].update(updates)
        if updates:
            logger.debug("settings updated: %s", ", ".join(updates))

    def reset(self) -> None:
        """Drop every override, leaving the defaults."""
        self._storage.maps[0].clear()

    def to_config(self) -> PipelineConfig:
        return PipelineConfig.from_settings(self)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._storage)


def _filter_by_namespace(mapping: Mapping[str, Any], namespace: str) -> dict[str, Any]:
    prefix = f"{namespace}_"
    return {key[len(prefix):]: value for key, value in mapping.items()
            if isinstance(key, str) and key.startswith(prefix)}
