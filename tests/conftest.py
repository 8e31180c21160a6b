"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from bootmate.autostart import AutostartRepository


def write_desktop(directory: Path, filename: str, body: str) -> Path:
    """Write a .desktop file, creating the directory if needed."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(body)
    return path


def desktop_body(name: str, exec_: str, *extra: str) -> str:
    """Minimal [Desktop Entry] group with optional extra lines."""
    lines = ["[Desktop Entry]", "Type=Application", f"Name={name}", f"Exec={exec_}", *extra]
    return "\n".join(lines) + "\n"


@pytest.fixture
def user_dir(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".config" / "autostart"


@pytest.fixture
def etc_dir(tmp_path: Path) -> Path:
    d = tmp_path / "etc" / "xdg" / "autostart"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def gnome_dir(tmp_path: Path) -> Path:
    d = tmp_path / "usr" / "share" / "gnome" / "autostart"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def apps_dir(tmp_path: Path) -> Path:
    d = tmp_path / "usr" / "share" / "applications"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def repo(user_dir: Path, etc_dir: Path, gnome_dir: Path, apps_dir: Path) -> AutostartRepository:
    """Repository over temporary directories; the user dir starts absent."""
    return AutostartRepository(
        user_dir=user_dir,
        system_dirs=[etc_dir, gnome_dir],
        applications_dir=apps_dir,
    )
