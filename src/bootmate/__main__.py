"""Entry point: python -m bootmate"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bootmate import __version__
from bootmate.autostart import AutostartEntry, AutostartError, AutostartRepository
from bootmate.config import AppConfig
from bootmate.constants import LOG_FORMAT

logger = logging.getLogger("bootmate")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler if available."""
    level = logging.DEBUG if verbose else logging.INFO

    try:
        from rich.logging import RichHandler

        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True)],
        )
    except ImportError:
        logging.basicConfig(level=level, format=LOG_FORMAT)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="bootmate",
        description="View and edit applications that start automatically on login",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"bootmate {__version__}"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path to config file"
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p_list = sub.add_parser("list", help="List autostart entries")
    p_list.add_argument(
        "--all", action="store_true", help="Include disabled and system entries"
    )

    p_show = sub.add_parser("show", help="Show one entry")
    p_show.add_argument("name")

    for verb in ("enable", "disable", "delete"):
        p = sub.add_parser(verb, help=f"{verb.capitalize()} an entry")
        p.add_argument("name")

    p_edit = sub.add_parser("edit", help="Change the command of an entry")
    p_edit.add_argument("name")
    p_edit.add_argument("exec", metavar="COMMAND")

    p_add = sub.add_parser("add", help="Create a new autostart entry")
    p_add.add_argument("name")
    source = p_add.add_mutually_exclusive_group(required=True)
    source.add_argument("--command", dest="command_line", help="Custom command line")
    source.add_argument("--app", help="Name of an installed application")
    p_add.add_argument("--icon", default=None)
    p_add.add_argument("--comment", default=None)

    sub.add_parser("apps", help="List installed applications")
    sub.add_parser("doctor", help="Report sandbox and directory access")

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "list"
        args.all = False
    return args


def _print_table(entries: list[AutostartEntry], title: str) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=title)
    table.add_column("Name", style="bold")
    table.add_column("State")
    table.add_column("Origin")
    table.add_column("Command", overflow="fold")

    for entry in entries:
        table.add_row(
            entry.name,
            "[green]enabled[/green]" if entry.enabled else "[dim]disabled[/dim]",
            "user" if entry.is_user_entry else "system",
            entry.exec,
        )
    Console().print(table)


def cmd_list(repo: AutostartRepository, config: AppConfig, show_all: bool) -> int:
    entries = repo.load_all()
    if not show_all:
        if not config.display.show_disabled:
            entries = [e for e in entries if e.enabled]
        if not config.display.show_system:
            entries = [e for e in entries if e.is_user_entry]

    if not entries:
        print("No applications are configured to start automatically.")
        return 0
    _print_table(entries, "Autostart Entries")
    return 0


def cmd_show(entry: AutostartEntry) -> int:
    print(f"Name:    {entry.name}")
    print(f"Command: {entry.exec}")
    print(f"Enabled: {'yes' if entry.enabled else 'no'}")
    print(f"Origin:  {'user' if entry.is_user_entry else 'system'}")
    print(f"File:    {entry.file_path}")
    if entry.icon:
        print(f"Icon:    {entry.icon}")
    if entry.comment:
        print(f"Comment: {entry.comment}")
    return 0


def cmd_add(repo: AutostartRepository, args: argparse.Namespace) -> int:
    command = args.command_line
    if args.app is not None:
        app = next(
            (a for a in repo.list_installed_applications() if a.name == args.app), None
        )
        if app is None:
            print(f"Error: no installed application named {args.app!r}", file=sys.stderr)
            return 1
        command = app.exec

    try:
        entry = repo.create(args.name, command, icon=args.icon, comment=args.comment)
    except (ValueError, AutostartError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Created {entry.file_path}")
    return 0


def cmd_apps(repo: AutostartRepository) -> int:
    apps = repo.list_installed_applications()
    if not apps:
        print(f"No applications found in {repo.applications_dir}.")
        return 0
    for app in apps:
        print(f"  {app.name:<40} {app.exec}")
    return 0


def cmd_doctor(repo: AutostartRepository) -> int:
    access = repo.directory_access()
    print(f"Sandbox:          {access.sandbox_type.value}")
    print(f"User autostart:   {_yes_no(access.user_autostart)} ({repo.user_dir})")
    for directory, ok in access.probed[1:-1]:
        print(f"System autostart: {_yes_no(ok)} ({directory})")
    print(f"Applications:     {_yes_no(access.usr_share_applications)} ({repo.applications_dir})")
    if access.is_sandboxed and access.inaccessible():
        print(
            "Some directories are not visible from inside the sandbox; "
            "grant filesystem access to manage system entries."
        )
    return 0


def _yes_no(ok: bool) -> str:
    return "readable" if ok else "not accessible"


def run(args: argparse.Namespace) -> int:
    """Dispatch a parsed command. Returns the process exit status."""
    config = AppConfig.load(Path(args.config) if args.config else None)
    repo = AutostartRepository.from_config(config)
    logger.debug("Running command %s", args.command)

    if args.command == "list":
        return cmd_list(repo, config, args.all)
    if args.command == "apps":
        return cmd_apps(repo)
    if args.command == "doctor":
        return cmd_doctor(repo)
    if args.command == "add":
        return cmd_add(repo, args)

    entry = repo.get(args.name)
    if entry is None:
        print(f"Error: no autostart entry named {args.name!r}", file=sys.stderr)
        return 1

    if args.command == "show":
        return cmd_show(entry)

    try:
        if args.command == "enable":
            repo.set_enabled(entry, True)
        elif args.command == "disable":
            repo.set_enabled(entry, False)
        elif args.command == "edit":
            repo.save(entry, args.exec)
        elif args.command == "delete":
            repo.delete(entry)
    except AutostartError as e:
        print(f"Error: failed to {args.command} {entry.name!r}: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
