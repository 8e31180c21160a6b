"""Tests for sandbox and directory access detection."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from bootmate.platform.detect import (
    DirectoryAccess,
    SandboxType,
    check_directory_access,
    detect_sandbox,
)

SANDBOX_VARS = ("SNAP", "SNAP_NAME", "FLATPAK_ID")


def _clean_env(**extra: str) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in SANDBOX_VARS}
    env.update(extra)
    return env


class TestSandboxDetection:
    def test_none(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert detect_sandbox() == SandboxType.NONE

    def test_snap(self) -> None:
        with patch.dict(os.environ, _clean_env(SNAP="/snap/bootmate/1"), clear=True):
            assert detect_sandbox() == SandboxType.SNAP

    def test_snap_name_only(self) -> None:
        with patch.dict(os.environ, _clean_env(SNAP_NAME="bootmate"), clear=True):
            assert detect_sandbox() == SandboxType.SNAP

    def test_flatpak(self) -> None:
        with patch.dict(os.environ, _clean_env(FLATPAK_ID="ch.srueegger.bootmate"), clear=True):
            assert detect_sandbox() == SandboxType.FLATPAK

    def test_snap_takes_precedence(self) -> None:
        env = _clean_env(SNAP="x", FLATPAK_ID="y")
        with patch.dict(os.environ, env, clear=True):
            assert detect_sandbox() == SandboxType.SNAP

    def test_empty_value_counts_as_present(self) -> None:
        with patch.dict(os.environ, _clean_env(FLATPAK_ID=""), clear=True):
            assert detect_sandbox() == SandboxType.FLATPAK


class TestDirectoryAccess:
    def test_creates_missing_user_dir(self, tmp_path: Path) -> None:
        user_dir = tmp_path / "config" / "autostart"
        access = check_directory_access(
            user_dir=user_dir,
            system_dirs=[tmp_path, tmp_path],
            applications_dir=tmp_path,
        )
        assert user_dir.is_dir()
        assert access.user_autostart is True

    def test_probes_are_independent(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing"
        also_missing = tmp_path / "also-missing"
        with patch.dict(os.environ, _clean_env(), clear=True):
            access = check_directory_access(
                user_dir=tmp_path,
                system_dirs=[missing, tmp_path],
                applications_dir=also_missing,
            )
        assert access == DirectoryAccess(
            user_autostart=True,
            etc_xdg_autostart=False,
            usr_share_gnome_autostart=True,
            usr_share_applications=False,
            sandbox_type=SandboxType.NONE,
            probed=(
                (tmp_path, True),
                (missing, False),
                (tmp_path, True),
                (also_missing, False),
            ),
        )
        assert access.is_sandboxed is False
        assert access.inaccessible() == [str(missing), str(also_missing)]

    def test_user_dir_blocked_by_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        access = check_directory_access(
            user_dir=blocker / "autostart",
            system_dirs=[tmp_path, tmp_path],
            applications_dir=tmp_path,
        )
        assert access.user_autostart is False
        assert access.inaccessible() == [str(blocker / "autostart")]

    def test_only_configured_system_dirs_are_probed(self, tmp_path: Path) -> None:
        only = tmp_path / "missing-only"
        access = check_directory_access(
            user_dir=tmp_path, system_dirs=[only], applications_dir=tmp_path
        )
        assert [path for path, _ in access.probed] == [tmp_path, only, tmp_path]
        assert access.etc_xdg_autostart is False
        assert access.usr_share_gnome_autostart is False
        assert access.inaccessible() == [str(only)]

    def test_extra_system_dirs_are_probed(self, tmp_path: Path) -> None:
        third = tmp_path / "third"
        access = check_directory_access(
            user_dir=tmp_path,
            system_dirs=[tmp_path, tmp_path, third],
            applications_dir=tmp_path,
        )
        assert access.etc_xdg_autostart is True
        assert access.usr_share_gnome_autostart is True
        assert access.inaccessible() == [str(third)]
