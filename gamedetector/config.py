"""Detector configuration.

All environment lookups happen in ``DetectorConfig.from_environment``; the
scanners only ever see the resulting directories, which lets tests point
every launcher at a synthetic home directory.

The entry point accepts a JSON file overlaying these defaults:
    {
        "home_dir": "/home/me",
        "sources": ["steam", "heroic_epic"],
        "max_workers": 4,
        "log_level": "INFO",
        "output_file": "~/games.yaml"
    }
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from .errors import ConfigError
from .utils.constants import (
    BASE_DIR_NAMES,
    DEFAULT_CACHE_DIR,
    DEFAULT_CONFIG_DIR,
    DEFAULT_DATA_DIR,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
)

_PATH_FIELDS = ("home_dir", "config_dir", "cache_dir", "data_dir", "hints_path", "output_file", "log_file")


def _xdg_dir(environ: Mapping[str, str], name: str, home: Path, default: str) -> Path:
    value = environ.get(name)
    if not value:
        return home / default
    return Path(value).expanduser()


@dataclass
class DetectorConfig:
    """Directories and options for one detection run.

    Attributes:
        home_dir: User home directory
        config_dir: $XDG_CONFIG_HOME
        cache_dir: $XDG_CACHE_HOME
        data_dir: $XDG_DATA_HOME
        hints_path: Alternative source hints YAML (bundled file if None)
        sources: Source keys to detect (all if None)
        max_workers: Adapters run in parallel threads when above 1
        log_level: Console log level name
        log_file: Optional log file path
        output_file: Optional YAML report path
    """
    home_dir: Path
    config_dir: Path
    cache_dir: Path
    data_dir: Path
    hints_path: Optional[Path] = None
    sources: Optional[list[str]] = None
    max_workers: int = 1
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None
    output_file: Optional[Path] = None

    @classmethod
    def for_home(cls, home: Path, **overrides: Any) -> "DetectorConfig":
        """Config with XDG defaults below ``home``."""
        home = Path(home)
        return cls(
            home_dir=home,
            config_dir=home / DEFAULT_CONFIG_DIR,
            cache_dir=home / DEFAULT_CACHE_DIR,
            data_dir=home / DEFAULT_DATA_DIR,
            **overrides,
        )

    @classmethod
    def from_environment(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        home: Optional[Path] = None,
    ) -> "DetectorConfig":
        """Build a config from HOME and the XDG base directory variables.

        Args:
            environ: Environment mapping (os.environ if None)
            home: Home directory overriding $HOME

        Returns:
            Config with unset XDG variables defaulted below the home directory
        """
        environ = os.environ if environ is None else environ
        if home is None:
            home = Path(environ["HOME"]) if environ.get("HOME") else Path.home()
        home = Path(home).expanduser()

        log_file = environ.get(ENV_LOG_FILE)
        return cls(
            home_dir=home,
            config_dir=_xdg_dir(environ, "XDG_CONFIG_HOME", home, DEFAULT_CONFIG_DIR),
            cache_dir=_xdg_dir(environ, "XDG_CACHE_HOME", home, DEFAULT_CACHE_DIR),
            data_dir=_xdg_dir(environ, "XDG_DATA_HOME", home, DEFAULT_DATA_DIR),
            log_level=environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL,
            log_file=Path(log_file).expanduser() if log_file else None,
        )

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        environ: Optional[Mapping[str, str]] = None,
    ) -> "DetectorConfig":
        """Overlay a JSON-style mapping on the environment defaults.

        A ``home_dir`` key re-derives the XDG defaults below it unless the
        mapping sets them too.

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        home = Path(data["home_dir"]).expanduser() if data.get("home_dir") else None
        if home is not None and environ is None:
            environ = {}
        config = cls.from_environment(environ, home=home)

        for name, value in data.items():
            if value is None:
                continue
            if name in _PATH_FIELDS:
                value = Path(value).expanduser()
            setattr(config, name, value)

        config.validate()
        return config

    def validate(self) -> None:
        if not isinstance(self.max_workers, int) or self.max_workers < 1:
            raise ConfigError(f"max_workers must be a positive integer: {self.max_workers!r}")
        if self.sources is not None and not isinstance(self.sources, list):
            raise ConfigError("sources must be a list of source keys")

    def base_dir(self, name: str) -> Path:
        """Directory a hints root is relative to (home/config/cache/data).

        Raises:
            ConfigError: For an unknown base name
        """
        if name not in BASE_DIR_NAMES:
            raise ConfigError(f"Unknown base directory: {name!r}")
        return getattr(self, f"{name}_dir")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = str(value) if isinstance(value, Path) else value
        return result
