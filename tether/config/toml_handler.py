"""
TOML File I/O Handler.

Key features:
- Parse TOML files using tomllib
- Write TOML files using tomlkit (keeps comments and formatting)
- Generate a commented config file from the schema
"""

import tomllib
from pathlib import Path
from typing import Any

import tomlkit

from tether.config.schema import ConfigField


class TOMLError(Exception):
    """Base exception for TOML-related errors."""

    pass


def read_toml(file_path: Path) -> dict[str, Any]:
    """
    Read and parse a TOML file.

    Args:
        file_path: Path to the TOML file

    Returns:
        Parsed TOML data as dictionary

    Raises:
        TOMLError: If file cannot be read or parsed
    """
    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise TOMLError(f"TOML file not found: {file_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise TOMLError(f"Failed to parse TOML file {file_path}: {e}") from e
    except OSError as e:
        raise TOMLError(f"Failed to read TOML file {file_path}: {e}") from e


def write_toml(file_path: Path, content: str | dict[str, Any]) -> None:
    """
    Write a TOML document or a dictionary to a file.

    Args:
        file_path: Path to the TOML file
        content: Rendered TOML text, or data to serialize with tomlkit

    Raises:
        TOMLError: If file cannot be written
    """
    # Serialize dictionaries with tomlkit
    text = content if isinstance(content, str) else tomlkit.dumps(content)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise TOMLError(f"Failed to write TOML file {file_path}: {e}") from e


def generate_toml_from_schema(
    section: str, schema: dict[str, ConfigField], config_data: dict[str, Any]
) -> str:
    """
    Render a configuration section with one comment per field.

    Args:
        section: Table name
        schema: Schema dictionary (field_name -> ConfigField)
        config_data: Values to write (defaults fill the gaps)

    Returns:
        TOML text
    """
    # Header
    doc = tomlkit.document()
    doc.add(tomlkit.comment("tether configuration"))
    doc.add(tomlkit.nl())

    # One commented entry per field
    table = tomlkit.table()
    for name, field in schema.items():
        if field.description:
            table.add(tomlkit.comment(field.description))
        if field.choices is not None:
            table.add(tomlkit.comment(f"Choices: {', '.join(map(str, field.choices))}"))
        elif field.min is not None or field.max is not None:
            table.add(tomlkit.comment(f"Range: {field.min}..{field.max}"))
        table.add(name, config_data.get(name, field.default))
        table.add(tomlkit.nl())

    doc.add(section, table)
    return tomlkit.dumps(doc)
