"""
tether init-config command.

Write a commented default config file.
"""

from typing import Any

from tether.config import default_config_path, init_config


def init_config_command(args: Any) -> int:
    """
    Execute init-config command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code

    Raises:
        ConfigError: If the file exists and --force was not given
    """
    path = init_config(args.config or default_config_path(), force=args.force)
    print(f"Wrote {path}")
    return 0
