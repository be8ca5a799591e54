"""Configuration loading and validation for uptimed."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

STATSD_PORT = 8125
INTERVAL_SECONDS = 60.0


@dataclass(frozen=True)
class TargetConfig:
    """What to sample and where to send it. Built once at startup."""

    destination: str
    namespace: str
    filesystem: str
    interface: str
    hostname: str

    def __post_init__(self) -> None:
        if not self.prefix.isascii():
            raise ConfigError(f"Metric prefix {self.prefix!r} must be ASCII")

    @property
    def prefix(self) -> str:
        return f"{self.namespace}.{self.hostname}"


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    file: str = ""


@dataclass
class UptimedSettings:
    """Top-level runtime settings read from ``uptimed.yaml``."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides using UPTIMED_ prefix."""
    env_map = {
        "UPTIMED_LOG_LEVEL": ("logging", "level"),
        "UPTIMED_LOG_FILE": ("logging", "file"),
    }
    for env_key, path in env_map.items():
        value = os.environ.get(env_key)
        if value is not None:
            obj = data
            for part in path[:-1]:
                obj = obj.setdefault(part, {})
            obj[path[-1]] = value
    return data


def _dict_to_settings(data: dict[str, Any]) -> UptimedSettings:
    """Convert a raw dictionary to an UptimedSettings dataclass."""
    logging_data = data.get("logging") or {}
    if not isinstance(logging_data, dict):
        raise ConfigError("'logging' section must be a mapping")

    return UptimedSettings(
        logging=LoggingConfig(**{
            k: str(v) for k, v in logging_data.items()
            if k in LoggingConfig.__dataclass_fields__
        }),
    )


def load_settings(path: str | Path | None = None) -> UptimedSettings:
    """Load settings from a YAML file with environment overrides.

    Looks for ``uptimed.yaml`` in the current directory if *path* is None.
    An explicitly named file must exist.
    """
    data: dict[str, Any] = {}
    explicit = path is not None
    path = Path(path) if explicit else Path("uptimed.yaml")

    if explicit and not path.exists():
        raise ConfigError(f"Settings file not found: {path}")

    if path.exists():
        try:
            with open(path, encoding="utf-8") as fh:
                loaded = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot load settings from {path}: {exc}") from exc
        if isinstance(loaded, dict):
            data = loaded
        elif loaded is not None:
            raise ConfigError(f"Settings file {path} must contain a mapping")

    data = _apply_env_overrides(data)
    return _dict_to_settings(data)
