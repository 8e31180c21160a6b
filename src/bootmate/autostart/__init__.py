"""Autostart entry discovery, parsing and persistence."""

from bootmate.autostart.entry import AutostartEntry, filename_for_name, parse_desktop_file
from bootmate.autostart.errors import (
    AutostartError,
    AutostartIOError,
    EntryExistsError,
    InvalidPathError,
    MissingFieldError,
)
from bootmate.autostart.repository import AutostartRepository

__all__ = [
    "AutostartEntry",
    "AutostartError",
    "AutostartIOError",
    "AutostartRepository",
    "EntryExistsError",
    "InvalidPathError",
    "MissingFieldError",
    "filename_for_name",
    "parse_desktop_file",
]
