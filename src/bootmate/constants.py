"""Default values, paths, and version constants."""

from __future__ import annotations

import os
from pathlib import Path

# Version
VERSION = "0.1.0"
APP_NAME = "bootmate"
APP_ID = "ch.srueegger.bootmate"


# XDG directories (resolved per call so environment changes are observed)
def user_config_dir() -> Path:
    """Return $XDG_CONFIG_HOME, or ~/.config when unset or empty."""
    value = os.environ.get("XDG_CONFIG_HOME")
    if value:
        return Path(value)
    return Path.home() / ".config"


def user_autostart_dir() -> Path:
    """Per-user autostart directory; the only location we ever write to."""
    return user_config_dir() / "autostart"


def config_file() -> Path:
    return user_config_dir() / APP_NAME / "config.toml"


# System autostart directories, highest precedence first
ETC_XDG_AUTOSTART = Path("/etc/xdg/autostart")
USR_SHARE_GNOME_AUTOSTART = Path("/usr/share/gnome/autostart")
SYSTEM_AUTOSTART_DIRS = (ETC_XDG_AUTOSTART, USR_SHARE_GNOME_AUTOSTART)

# Catalog of installed programs, not part of the autostart merge
APPLICATIONS_DIR = Path("/usr/share/applications")

# Desktop entry format
DESKTOP_SUFFIX = ".desktop"
DESKTOP_ENTRY_GROUP = "[Desktop Entry]"
KEY_NAME = "Name"
KEY_EXEC = "Exec"
KEY_ICON = "Icon"
KEY_COMMENT = "Comment"
KEY_AUTOSTART_ENABLED = "X-GNOME-Autostart-enabled"
KEY_HIDDEN = "Hidden"

# Sandbox environment markers (presence only)
SNAP_ENV_VARS = ("SNAP", "SNAP_NAME")
FLATPAK_ENV_VAR = "FLATPAK_ID"

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
