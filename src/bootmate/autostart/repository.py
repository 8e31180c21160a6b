"""Discover, merge and persist autostart entries across XDG directories."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from bootmate.autostart.entry import (
    AutostartEntry,
    filename_for_name,
    parse_desktop_file,
    render_desktop_file,
    render_hidden_override,
)
from bootmate.autostart.errors import (
    AutostartError,
    AutostartIOError,
    EntryExistsError,
    InvalidPathError,
)
from bootmate.constants import (
    APPLICATIONS_DIR,
    DESKTOP_SUFFIX,
    SYSTEM_AUTOSTART_DIRS,
    user_autostart_dir,
)
from bootmate.platform.detect import DirectoryAccess, check_directory_access

if TYPE_CHECKING:
    from bootmate.config import AppConfig

logger = logging.getLogger(__name__)


class AutostartRepository:
    """Reads and writes autostart entries.

    Holds directory locations only. Every query re-reads the disk, so callers
    reload after each mutation instead of patching a list they hold.
    """

    def __init__(
        self,
        user_dir: Path | None = None,
        system_dirs: Sequence[Path] | None = None,
        applications_dir: Path | None = None,
    ) -> None:
        self._user_dir = user_dir
        self._system_dirs = tuple(system_dirs) if system_dirs is not None else SYSTEM_AUTOSTART_DIRS
        self._applications_dir = applications_dir or APPLICATIONS_DIR

    @classmethod
    def from_config(cls, config: AppConfig) -> AutostartRepository:
        dirs = config.directories
        return cls(
            user_dir=Path(dirs.user_autostart).expanduser() if dirs.user_autostart else None,
            system_dirs=[Path(d).expanduser() for d in dirs.system_autostart],
            applications_dir=Path(dirs.applications).expanduser(),
        )

    @property
    def user_dir(self) -> Path:
        return self._user_dir or user_autostart_dir()

    @property
    def system_dirs(self) -> tuple[Path, ...]:
        return self._system_dirs

    @property
    def applications_dir(self) -> Path:
        return self._applications_dir

    # -- discovery ---------------------------------------------------------

    def _scan(self, directory: Path) -> Iterator[AutostartEntry]:
        """Yield every parseable .desktop file in a directory, skipping failures."""
        try:
            paths = sorted(
                p for p in directory.iterdir()
                if p.suffix == DESKTOP_SUFFIX and not p.is_dir()
            )
        except OSError:
            logger.debug("Skipping unreadable directory %s", directory)
            return

        user_dir = self.user_dir
        for path in paths:
            try:
                yield parse_desktop_file(path, user_dir=user_dir)
            except AutostartError as e:
                logger.debug("Skipping %s: %s", path, e)

    def load_all(self) -> list[AutostartEntry]:
        """Return the merged entries, sorted by name.

        User entries come first and shadow system entries with the same
        name; among system directories the earlier one wins.
        """
        entries: list[AutostartEntry] = []
        seen: set[str] = set()

        for directory in (self.user_dir, *self._system_dirs):
            for entry in self._scan(directory):
                if entry.name in seen:
                    continue
                seen.add(entry.name)
                entries.append(entry)

        entries.sort(key=lambda e: e.name)
        logger.debug("Loaded %d autostart entries", len(entries))
        return entries

    def get(self, name: str) -> AutostartEntry | None:
        """Find one entry by exact name."""
        for entry in self.load_all():
            if entry.name == name:
                return entry
        return None

    def user_entries(self) -> list[AutostartEntry]:
        return [e for e in self.load_all() if e.is_user_entry]

    def system_entries(self) -> list[AutostartEntry]:
        return [e for e in self.load_all() if not e.is_user_entry]

    def list_installed_applications(self) -> list[AutostartEntry]:
        """Installed programs that can be picked when creating an entry."""
        apps = list(self._scan(self._applications_dir))
        apps.sort(key=lambda e: e.name)
        return apps

    def directory_access(self) -> DirectoryAccess:
        """Probe the directories this repository reads."""
        return check_directory_access(
            user_dir=self.user_dir,
            system_dirs=self._system_dirs,
            applications_dir=self._applications_dir,
        )

    # -- mutation ----------------------------------------------------------

    def _user_target(self, entry: AutostartEntry) -> Path:
        """Create the user directory and return the file that shadows ``entry``."""
        filename = entry.file_path.name
        if not filename:
            raise InvalidPathError(entry.file_path)

        user_dir = self.user_dir
        try:
            user_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AutostartIOError(f"Failed to create autostart directory: {e}", user_dir) from e
        return user_dir / filename

    def save(self, entry: AutostartEntry, new_exec: str) -> Path:
        """Write ``entry`` into the user directory with ``new_exec`` as its command.

        System entries are never modified in place: the write lands in the
        user directory under the same filename and overrides them.
        """
        target = self._user_target(entry)
        try:
            target.write_text(render_desktop_file(entry, new_exec), encoding="utf-8")
        except OSError as e:
            raise AutostartIOError(f"Failed to save file: {e}", target) from e

        logger.info("Saved autostart entry %r to %s", entry.name, target)
        return target

    def set_enabled(self, entry: AutostartEntry, enabled: bool) -> Path:
        """Toggle an entry, keeping its command."""
        return self.save(replace(entry, enabled=enabled), entry.exec)

    def delete(self, entry: AutostartEntry) -> Path | None:
        """Remove a user entry, or hide a system entry behind a user override.

        Returns the override path for system entries. A hidden system entry
        still shows up in load_all(), disabled.
        """
        if entry.is_user_entry:
            try:
                os.remove(entry.file_path)
            except OSError as e:
                raise AutostartIOError(f"Failed to delete file: {e}", entry.file_path) from e
            logger.info("Deleted autostart entry %r (%s)", entry.name, entry.file_path)
            return None

        target = self._user_target(entry)
        try:
            target.write_text(render_hidden_override(entry), encoding="utf-8")
        except OSError as e:
            raise AutostartIOError(f"Failed to write override file: {e}", target) from e

        logger.info("Hid system autostart entry %r via %s", entry.name, target)
        return target

    # -- creation ----------------------------------------------------------

    def new_entry(
        self,
        name: str,
        exec_: str,
        icon: str | None = None,
        comment: str | None = None,
    ) -> AutostartEntry:
        """Build an unsaved user entry whose filename is derived from ``name``."""
        if not name or not exec_:
            raise ValueError("name and command must not be empty")

        filename = filename_for_name(name)
        if filename == DESKTOP_SUFFIX:
            raise ValueError(f"cannot derive a file name from {name!r}")

        return AutostartEntry(
            name=name,
            exec=exec_,
            icon=icon,
            comment=comment,
            enabled=True,
            file_path=self.user_dir / filename,
            is_user_entry=True,
        )

    def create(
        self,
        name: str,
        exec_: str,
        icon: str | None = None,
        comment: str | None = None,
    ) -> AutostartEntry:
        """Build a new user entry and save it.

        Refuses to overwrite a file that already holds another entry, e.g.
        "My App" and "my app" map to the same filename.
        """
        entry = self.new_entry(name, exec_, icon=icon, comment=comment)
        if entry.file_path.exists():
            raise EntryExistsError(entry.file_path)
        self.save(entry, entry.exec)
        return entry
