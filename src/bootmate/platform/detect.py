"""Detect the sandbox we run in and which autostart directories are reachable."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from bootmate.constants import (
    APPLICATIONS_DIR,
    FLATPAK_ENV_VAR,
    SNAP_ENV_VARS,
    SYSTEM_AUTOSTART_DIRS,
    user_autostart_dir,
)

logger = logging.getLogger(__name__)


class SandboxType(Enum):
    """Confinement environment."""

    SNAP = "snap"
    FLATPAK = "flatpak"
    NONE = "none"


@dataclass(frozen=True)
class DirectoryAccess:
    """Snapshot of which well-known directories could be read."""

    user_autostart: bool
    etc_xdg_autostart: bool
    usr_share_gnome_autostart: bool
    usr_share_applications: bool
    sandbox_type: SandboxType
    # Every directory actually probed, in probe order
    probed: tuple[tuple[Path, bool], ...] = ()

    @property
    def is_sandboxed(self) -> bool:
        return self.sandbox_type != SandboxType.NONE

    def inaccessible(self) -> list[str]:
        """Return the paths of the probed directories that could not be read."""
        return [str(path) for path, ok in self.probed if not ok]


def detect_sandbox() -> SandboxType:
    """Detect Snap or Flatpak confinement from environment variables."""
    if any(var in os.environ for var in SNAP_ENV_VARS):
        return SandboxType.SNAP
    if FLATPAK_ENV_VAR in os.environ:
        return SandboxType.FLATPAK
    return SandboxType.NONE


def _is_readable(path: Path) -> bool:
    """Check if a directory can be listed."""
    try:
        with os.scandir(path):
            return True
    except OSError:
        return False


def _ensure_readable(path: Path) -> bool:
    """Like _is_readable, but create the directory first when it is missing."""
    if _is_readable(path):
        return True
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.debug("Could not create %s", path, exc_info=True)
        return False
    return True


def check_directory_access(
    user_dir: Path | None = None,
    system_dirs: Sequence[Path] = SYSTEM_AUTOSTART_DIRS,
    applications_dir: Path = APPLICATIONS_DIR,
) -> DirectoryAccess:
    """Probe each directory independently. May create the user directory.

    Only the given directories are probed. The first two system directories
    fill ``etc_xdg_autostart`` and ``usr_share_gnome_autostart``; a missing
    slot reads as not accessible. ``probed`` lists every result.
    """
    user_path = user_dir or user_autostart_dir()
    probed = [(user_path, _ensure_readable(user_path))]
    probed += [(Path(d), _is_readable(Path(d))) for d in system_dirs]
    probed.append((applications_dir, _is_readable(applications_dir)))

    system_ok = [ok for _, ok in probed[1:-1]] + [False, False]
    access = DirectoryAccess(
        user_autostart=probed[0][1],
        etc_xdg_autostart=system_ok[0],
        usr_share_gnome_autostart=system_ok[1],
        usr_share_applications=probed[-1][1],
        sandbox_type=detect_sandbox(),
        probed=tuple(probed),
    )

    logger.info(
        "Directory access: sandbox=%s, unreadable=%s",
        access.sandbox_type.value,
        ", ".join(access.inaccessible()) or "none",
    )
    return access
