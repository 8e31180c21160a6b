"""BootMate: view and edit XDG autostart entries."""

from bootmate.constants import VERSION

__version__ = VERSION
