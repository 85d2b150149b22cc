"""
tether CLI entry point.

Parses arguments, resolves settings and logging, then routes to the
command modules under tether.cli.commands.
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from tether import __version__
from tether.config import ConfigError, load_settings
from tether.log import setup_logging
from tether.project import GitError, GitRunner, ProjectError, ProjectManager


class TetherCLIError(Exception):
    """Base exception for CLI errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="tether",
        description="Download plugin sources from git and print shell snippets",
    )
    parser.add_argument("--version", action="version", version=f"tether {__version__}")
    parser.add_argument("--home", type=Path, help="Override the checkout home")
    parser.add_argument("--config", type=Path, help="Config file to read")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Verbose output (-vv for debug)"
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    bundle = commands.add_parser("bundle", help="Download lines and print shell snippets")
    bundle.add_argument("lines", nargs="*", help="Specification lines (default: stdin)")

    commands.add_parser("update", help="Update every downloaded project")

    path = commands.add_parser("path", help="Print a line's local path")
    path.add_argument("line", help="Specification line")

    commands.add_parser("list", help="List downloaded projects")
    commands.add_parser("home", help="Print the checkout home")

    init = commands.add_parser("init-config", help="Write a default config file")
    init.add_argument("--force", action="store_true", help="Overwrite an existing file")

    return parser


def build_manager(args: Any) -> ProjectManager:
    """Project manager for the resolved settings."""
    settings = args.settings
    return ProjectManager(settings.home, runner=GitRunner(settings.git_binary))


def _log_level(settings_level: str, verbose: int) -> str:
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return settings_level


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tether CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "init-config":
            from tether.cli.commands.config import init_config_command

            return init_config_command(args)

        settings = load_settings(args.config)
        if args.home:
            settings = replace(settings, home=args.home.expanduser().resolve())
        args.settings = settings
        setup_logging(_log_level(settings.log_level, args.verbose), settings.log_format)

        if args.command == "bundle":
            from tether.cli.commands.bundle import bundle_command

            return bundle_command(args)

        elif args.command == "update":
            from tether.cli.commands.update import update_command

            return update_command(args)

        elif args.command == "path":
            from tether.cli.commands.query import path_command

            return path_command(args)

        elif args.command == "list":
            from tether.cli.commands.query import list_command

            return list_command(args)

        elif args.command == "home":
            from tether.cli.commands.query import home_command

            return home_command(args)

        raise TetherCLIError(f"Unknown command: {args.command}")

    except (TetherCLIError, ConfigError, ProjectError, GitError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
