"""Autostart entry model and the .desktop file reader/writer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from bootmate.constants import (
    DESKTOP_ENTRY_GROUP,
    DESKTOP_SUFFIX,
    KEY_AUTOSTART_ENABLED,
    KEY_COMMENT,
    KEY_EXEC,
    KEY_HIDDEN,
    KEY_ICON,
    KEY_NAME,
    user_autostart_dir,
)
from bootmate.autostart.errors import AutostartIOError, MissingFieldError

logger = logging.getLogger(__name__)


@dataclass
class AutostartEntry:
    """One parsed .desktop file.

    Entries are plain values rebuilt from disk on every load; ``name`` is the
    identity used when user files override system ones.
    """

    name: str
    exec: str
    file_path: Path
    icon: str | None = None
    comment: str | None = None
    enabled: bool = True
    is_user_entry: bool = False

    @property
    def filename(self) -> str:
        return self.file_path.name


def is_under(path: Path, directory: Path) -> bool:
    """Check whether ``path`` lies inside ``directory`` after canonicalisation."""
    try:
        resolved = Path(os.path.realpath(path))
        base = Path(os.path.realpath(directory))
    except (OSError, ValueError):
        return False
    return resolved == base or base in resolved.parents


def parse_desktop_file(path: Path, user_dir: Path | None = None) -> AutostartEntry:
    """Parse the [Desktop Entry] group of a .desktop file.

    Only Name, Exec, Icon, Comment, X-GNOME-Autostart-enabled and Hidden are
    read; every other key is ignored. ``Hidden=true`` disables the entry no
    matter where it appears relative to X-GNOME-Autostart-enabled.

    Args:
        path: File to read.
        user_dir: Per-user autostart directory, used to compute
            ``is_user_entry``. Defaults to the XDG location.

    Raises:
        AutostartIOError: The file could not be read as text.
        MissingFieldError: Name or Exec never appeared in the group.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise AutostartIOError(f"Failed to read file: {e}", path) from e

    name: str | None = None
    exec_: str | None = None
    icon: str | None = None
    comment: str | None = None
    enabled = True
    hidden = False
    in_desktop_entry = False

    for raw_line in content.split("\n"):
        line = raw_line.strip()

        if line.startswith("["):
            in_desktop_entry = line == DESKTOP_ENTRY_GROUP
            continue

        if not in_desktop_entry or not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()

        if key == KEY_NAME:
            name = value
        elif key == KEY_EXEC:
            exec_ = value
        elif key == KEY_ICON:
            icon = value
        elif key == KEY_COMMENT:
            comment = value
        elif key == KEY_AUTOSTART_ENABLED:
            enabled = value.lower() != "false"
        elif key == KEY_HIDDEN:
            if value.lower() == "true":
                hidden = True

    if name is None:
        raise MissingFieldError(KEY_NAME, path)
    if exec_ is None:
        raise MissingFieldError(KEY_EXEC, path)

    return AutostartEntry(
        name=name,
        exec=exec_,
        icon=icon,
        comment=comment,
        enabled=enabled and not hidden,
        file_path=path,
        is_user_entry=is_under(path, user_dir or user_autostart_dir()),
    )


def render_desktop_file(entry: AutostartEntry, exec_: str) -> str:
    """Serialize an entry for the user directory, with ``exec_`` as its command."""
    lines = [
        DESKTOP_ENTRY_GROUP,
        "Type=Application",
        f"{KEY_NAME}={entry.name}",
        f"{KEY_EXEC}={exec_}",
        "Terminal=false",
    ]
    if entry.icon is not None:
        lines.append(f"{KEY_ICON}={entry.icon}")
    if entry.comment is not None:
        lines.append(f"{KEY_COMMENT}={entry.comment}")
    lines.append(f"{KEY_AUTOSTART_ENABLED}={'true' if entry.enabled else 'false'}")
    return "\n".join(lines) + "\n"


def render_hidden_override(entry: AutostartEntry) -> str:
    """Serialize the user file that hides a system entry."""
    return (
        f"{DESKTOP_ENTRY_GROUP}\n"
        "Type=Application\n"
        f"{KEY_NAME}={entry.name}\n"
        f"{KEY_EXEC}={entry.exec}\n"
        f"{KEY_HIDDEN}=true\n"
    )


def filename_for_name(name: str) -> str:
    """Derive a .desktop filename from a display name.

    "My App (beta)" -> "my-app-beta.desktop"
    """
    stem = "".join(
        c for c in name.lower().replace(" ", "-") if c.isalnum() or c == "-"
    )
    return stem + DESKTOP_SUFFIX
