"""
Tether Configuration - TOML-based settings.

This module provides:
- Settings resolution: defaults < config file < environment
- Default locations for the config file and the checkout home
- Generation of a commented default config file

Example usage:
    from tether.config import load_settings

    settings = load_settings()
    print(settings.home, settings.parallelism)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from tether.config.schema import (
    SCHEMA,
    SchemaError,
    ValidationError,
    generate_default_config,
    validate_config,
)
from tether.config.toml_handler import (
    TOMLError,
    generate_toml_from_schema,
    read_toml,
    write_toml,
)

SECTION = "tether"

CONFIG_ENV = "TETHER_CONFIG"
HOME_ENV = "TETHER_HOME"


class ConfigError(Exception):
    """Base exception for config API errors."""

    pass


@dataclass(frozen=True)
class Settings:
    """
    Resolved settings for a run.

    Attributes:
        home: Directory holding the checkouts
        parallelism: Maximum number of concurrent git operations
        git_binary: git executable
        log_level: Log level name
        log_format: "console" or "json"
    """

    home: Path
    parallelism: int = 8
    git_binary: str = "git"
    log_level: str = "WARNING"
    log_format: str = "console"


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """$TETHER_CONFIG, else $XDG_CONFIG_HOME/tether/tether.toml."""
    env = os.environ if env is None else env
    if env.get(CONFIG_ENV):
        return Path(env[CONFIG_ENV]).expanduser()
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base).expanduser() / "tether" / "tether.toml"


def default_home(env: Mapping[str, str] | None = None) -> Path:
    """$XDG_CACHE_HOME/tether, else ~/.cache/tether."""
    env = os.environ if env is None else env
    base = env.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base).expanduser() / "tether"


def load_settings(
    config_file: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """
    Resolve settings from defaults, the config file and the environment.

    A missing config file is not an error.

    Args:
        config_file: Config file path (default: default_config_path())
        env: Environment mapping (default: os.environ)

    Returns:
        Settings instance

    Raises:
        ConfigError: If the config file cannot be parsed or is invalid
    """
    env = os.environ if env is None else env
    config_file = config_file or default_config_path(env)

    values = generate_default_config(SCHEMA)
    if config_file.exists():
        try:
            data = read_toml(config_file)
            section = data.get(SECTION, {})
            if not isinstance(section, dict):
                raise ValidationError(f"[{SECTION}] must be a table")
            values = validate_config(section, SCHEMA)
        except (TOMLError, ValidationError) as e:
            raise ConfigError(f"Invalid config file {config_file}: {e}") from e

    home = env.get(HOME_ENV) or values["home"]
    return Settings(
        home=Path(home).expanduser() if home else default_home(env),
        parallelism=values["parallelism"],
        git_binary=values["git_binary"],
        log_level=values["log_level"],
        log_format=values["log_format"],
    )


def init_config(config_file: Path, force: bool = False) -> Path:
    """
    Write a commented default config file.

    Args:
        config_file: Destination path
        force: Overwrite an existing file

    Returns:
        The written path

    Raises:
        ConfigError: If the file exists and force is False, or on write errors
    """
    if config_file.exists() and not force:
        raise ConfigError(f"Config file already exists: {config_file}")

    content = generate_toml_from_schema(SECTION, SCHEMA, generate_default_config(SCHEMA))
    try:
        write_toml(config_file, content)
    except TOMLError as e:
        raise ConfigError(str(e)) from e
    return config_file


__all__ = [
    "ConfigError",
    "SchemaError",
    "Settings",
    "ValidationError",
    "default_config_path",
    "default_home",
    "init_config",
    "load_settings",
]
