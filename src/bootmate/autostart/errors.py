"""Errors raised by the autostart repository."""

from __future__ import annotations

from pathlib import Path


class AutostartError(Exception):
    """Base class for autostart failures."""


class AutostartIOError(AutostartError):
    """Reading, writing, creating or removing a file failed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class MissingFieldError(AutostartError):
    """A desktop file lacks a required key."""

    def __init__(self, field: str, path: Path | None = None) -> None:
        super().__init__(f"Missing {field} field" + (f" in {path}" if path else ""))
        self.field = field
        self.path = path


class InvalidPathError(AutostartError):
    """A path has no filename component."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Invalid file name: {path}")
        self.path = path


class EntryExistsError(AutostartError):
    """A new entry would overwrite an existing user file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"An autostart file already exists: {path}")
        self.path = path
