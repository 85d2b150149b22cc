"""
tether path, list and home commands.

Read-only queries that never touch the network.
"""

from typing import Any

from tether.cli.main import build_manager


def path_command(args: Any) -> int:
    """Print the local path of a line's project."""
    print(build_manager(args).project(args.line).path())
    return 0


def list_command(args: Any) -> int:
    """Print folder name and URL of every downloaded project."""
    for project in build_manager(args).discover():
        print(f"{project.folder.name}\t{project.url}")
    return 0


def home_command(args: Any) -> int:
    """Print the checkout home."""
    print(args.settings.home)
    return 0
