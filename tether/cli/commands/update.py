"""
tether update command.

Update every project downloaded under the home directory.
"""

import sys
from typing import Any

from tether.cli.main import build_manager
from tether.project import Revision


def update_command(args: Any) -> int:
    """
    Execute update command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when every update succeeded, 1 otherwise)
    """
    manager = build_manager(args)
    fail_count = 0

    for project, outcome in manager.update_all(parallelism=args.settings.parallelism):
        if isinstance(outcome, Revision):
            if outcome.changed:
                print(f"{project.url}: {outcome.old} -> {outcome.new}")
            elif args.verbose:
                print(f"{project.url}: up to date ({outcome.new})")
        else:
            print(f"Failed to update {project.url}: {outcome}", file=sys.stderr)
            fail_count += 1

    return 0 if fail_count == 0 else 1
