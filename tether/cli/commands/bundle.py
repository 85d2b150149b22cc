"""
tether bundle command.

Download projects for the given lines (or stdin) and print their shell
snippets in input order.
"""

import sys
from typing import Any

from tether.bundle import bundle_lines, render
from tether.cli.main import build_manager


def bundle_command(args: Any) -> int:
    """
    Execute bundle command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when every line succeeded, 1 otherwise)
    """
    lines = args.lines if args.lines else sys.stdin.read().splitlines()
    manager = build_manager(args)

    results = bundle_lines(manager, lines, parallelism=args.settings.parallelism)

    for result in results:
        if result.error is not None:
            print(f"Failed to bundle {result.line}: {result.error}", file=sys.stderr)
            if args.verbose and getattr(result.error, "output", ""):
                print(result.error.output, file=sys.stderr)

    output = render(results)
    if output:
        print(output)

    return 0 if all(r.error is None for r in results) else 1
