"""Configuration loading and saving (TOML)."""

from __future__ import annotations

import logging
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from bootmate.constants import APPLICATIONS_DIR, SYSTEM_AUTOSTART_DIRS, config_file

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


@dataclass
class DirectoriesConfig:
    """Where autostart entries are read from and written to."""

    user_autostart: str = ""  # "" = $XDG_CONFIG_HOME/autostart
    system_autostart: list[str] = field(
        default_factory=lambda: [str(d) for d in SYSTEM_AUTOSTART_DIRS]
    )
    applications: str = str(APPLICATIONS_DIR)


@dataclass
class DisplayConfig:
    """What the entry listing shows by default."""

    show_disabled: bool = True
    show_system: bool = True


@dataclass
class AppConfig:
    """Root application configuration."""

    directories: DirectoriesConfig = field(default_factory=DirectoriesConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> AppConfig:
        """Load config from TOML file, falling back to defaults."""
        config_path = path or config_file()
        config = cls()

        if not config_path.exists():
            logger.info("No config file found at %s, using defaults", config_path)
            return config

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            config = _merge_config(config, data)
            logger.info("Loaded config from %s", config_path)
        except Exception:
            logger.exception("Failed to load config from %s, using defaults", config_path)
            config = cls()

        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to TOML file."""
        config_path = path or config_file()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(asdict(self), f)
        logger.info("Saved config to %s", config_path)


def _merge_config(config: AppConfig, data: dict[str, Any]) -> AppConfig:
    """Merge a TOML dict into an AppConfig, preserving defaults for missing keys."""
    for section in ("directories", "display"):
        if section not in data:
            continue
        target = getattr(config, section)
        for key, val in data[section].items():
            if not hasattr(target, key):
                logger.debug("Ignoring unknown config key %s.%s", section, key)
            elif not isinstance(val, type(getattr(target, key))):
                logger.warning(
                    "Ignoring config key %s.%s: expected %s, got %s",
                    section,
                    key,
                    type(getattr(target, key)).__name__,
                    type(val).__name__,
                )
            else:
                setattr(target, key, val)

    return config
