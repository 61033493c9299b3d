"""JSON-backed user configuration."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from diskard.models.clean_result import DeleteMode
from diskard.models.finding import RiskLevel
from diskard.utils import xdg_config_home

log = logging.getLogger(__name__)

_CONFIG_DIR = "diskard"
_CONFIG_FILE = "config.json"


class ConfigError(Exception):
    """The configuration file could not be read, parsed or written."""


@dataclass(slots=True)
class Defaults:
    risk_tolerance: str = "moderate"
    """Highest risk level shown by default: 'safe', 'moderate' or 'risky'."""
    delete_mode: str = "trash"
    """'trash' or 'permanent'."""
    min_size: int = 0
    """Findings smaller than this many bytes are not reported."""


@dataclass(slots=True)
class IgnoreConfig:
    paths: list[str] = field(default_factory=list)
    """Absolute paths that are never reported or deleted."""


@dataclass(slots=True)
class RecognizerConfig:
    disabled: list[str] = field(default_factory=list)
    """Recognizer IDs that are skipped during scans."""


@dataclass(slots=True)
class Config:
    """User configuration, stored at ``$XDG_CONFIG_HOME/diskard/config.json``.

    Example file::

        {
          "defaults": {"risk_tolerance": "safe", "min_size": 1048576},
          "ignore": {"paths": ["~/Projects/keep-me"]},
          "recognizers": {"disabled": ["docker-data"]}
        }

    Missing sections and keys fall back to their defaults.
    """

    defaults: Defaults = field(default_factory=Defaults)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    recognizers: RecognizerConfig = field(default_factory=RecognizerConfig)

    @staticmethod
    def path() -> Path | None:
        """Standard config file path, or None if it cannot be determined."""
        try:
            return xdg_config_home() / _CONFIG_DIR / _CONFIG_FILE
        except RuntimeError:
            return None

    @classmethod
    def load(cls) -> Config:
        """Load from the standard path, falling back to defaults if absent."""
        path = cls.path()
        if path is None or not path.exists():
            return cls()
        return cls.load_from(path)

    @classmethod
    def load_from(cls, path: Path) -> Config:
        """Load config from a specific file.

        Raises:
            ConfigError: if the file cannot be read or has the wrong shape.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e
        config = cls.from_dict(data)
        log.debug("Loaded config from %s", path)
        return config

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build a config from parsed JSON, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a JSON object")

        defaults = _section(data, "defaults")
        ignore = _section(data, "ignore")
        recognizers = _section(data, "recognizers")

        config = cls()
        config.defaults.risk_tolerance = _typed(defaults, "risk_tolerance", str, config.defaults.risk_tolerance)
        config.defaults.delete_mode = _typed(defaults, "delete_mode", str, config.defaults.delete_mode)
        config.defaults.min_size = _typed(defaults, "min_size", int, config.defaults.min_size)
        if config.defaults.min_size < 0:
            raise ConfigError("defaults.min_size must not be negative")
        config.ignore.paths = _str_list(ignore, "paths")
        config.recognizers.disabled = _str_list(recognizers, "disabled")
        return config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def init(cls) -> Path:
        """Write the default config to the standard path and return it.

        Raises:
            ConfigError: if the config directory cannot be determined or written.
        """
        path = cls.path()
        if path is None:
            raise ConfigError("Cannot determine config directory")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(cls().to_dict(), indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot write config file {path}: {e}") from e
        log.info("Wrote default config to %s", path)
        return path

    def max_risk(self) -> RiskLevel:
        """Risk tolerance as a RiskLevel; unknown values mean MODERATE."""
        try:
            return RiskLevel.from_str(self.defaults.risk_tolerance)
        except ValueError:
            log.warning("Unknown risk_tolerance %r, using 'moderate'", self.defaults.risk_tolerance)
            return RiskLevel.MODERATE

    def delete_mode(self) -> DeleteMode:
        """Configured delete mode; anything but 'permanent' means TRASH."""
        if self.defaults.delete_mode.strip().lower() == DeleteMode.PERMANENT.value:
            return DeleteMode.PERMANENT
        return DeleteMode.TRASH

    def is_recognizer_enabled(self, recognizer_id: str) -> bool:
        return recognizer_id not in self.recognizers.disabled

    def is_path_ignored(self, path: Path | str) -> bool:
        """True if *path* equals or lies under one of the ignored paths."""
        target = _normalize(path)
        return any(target.is_relative_to(_normalize(ignored)) for ignored in self.ignore.paths)


def _normalize(path: Path | str) -> Path:
    return Path(os.path.abspath(os.path.expanduser(str(path))))


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a JSON object")
    return value


def _typed(section: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = section.get(key, default)
    # bool is an int subclass; reject it for numeric fields
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"'{key}' must be of type {kind.__name__}")
    return value


def _str_list(section: dict[str, Any], key: str) -> list[str]:
    value = section.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return list(value)
