from __future__ import annotations

import logging
from dataclasses import dataclass

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from fallible.exceptions import FallibleException

logger = logging.getLogger(__name__)


class SettingsError(FallibleException):
    """Raised when failure settings are invalid."""


@dataclass(frozen=True)
class FailureSettings:
    """Settings applied when failure descriptors are created.

    Attributes:
        capture_stacktrace: Store a snapshot of the call stack on each new descriptor.
        stack_limit: Maximum number of frames kept in a snapshot.
    """

    capture_stacktrace: bool = False
    stack_limit: int = 32


_DEFAULTS: dict[str, object] = {
    "failure": {
        "capture_stacktrace": False,
        "stack_limit": 32,
    },
}

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})

_settings: FailureSettings | None = None


def create_config(
    yaml_path: str = "fallible.yaml",
    env_prefix: str = "FALLIBLE",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables.
        defaults: Default configuration values.
        overrides: Values that take precedence over every other layer.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def _parse_bool(key: str, raw: object) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise SettingsError(f"'{key}' must be a boolean, got {raw!r}")


def _parse_positive_int(key: str, raw: object) -> int:
    try:
        value = int(str(raw))
    except ValueError as e:
        raise SettingsError(f"'{key}' must be an integer, got {raw!r}") from e
    if value <= 0:
        raise SettingsError(f"'{key}' must be > 0, got {value}")
    return value


def load_failure_settings(cfg: ConfigurationSet | None = None) -> FailureSettings:
    if cfg is None:
        cfg = create_config()
    settings = FailureSettings(
        capture_stacktrace=_parse_bool("failure.capture_stacktrace", cfg["failure.capture_stacktrace"]),
        stack_limit=_parse_positive_int("failure.stack_limit", cfg["failure.stack_limit"]),
    )
    logger.debug("Loaded failure settings: %s", settings)
    return settings


def get_failure_settings() -> FailureSettings:
    """Return the process-wide failure settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_failure_settings()
    return _settings


def set_failure_settings(settings: FailureSettings | None) -> None:
    """Install process-wide failure settings. Passing None forces a reload on next use."""
    global _settings
    _settings = settings
