"""
Configuration Schema.

This module declares the settings tether understands and validates
values read from the configuration file.

Key features:
- Typed fields with defaults and descriptions
- Range constraints for numbers, choice constraints for strings
- Partial files: absent fields fall back to their defaults
"""

from dataclasses import dataclass
from typing import Any


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    pass


class ValidationError(SchemaError):
    """Raised when a configuration value is invalid."""

    pass


@dataclass
class ConfigField:
    """
    A configuration field.

    Attributes:
        type_: Expected value type
        default: Value used when the field is absent
        description: Human-readable description (written as a comment)
        min: Minimum value for numbers
        max: Maximum value for numbers
        choices: Allowed values (optional)
    """

    type_: type
    default: Any
    description: str = ""
    min: Any = None
    max: Any = None
    choices: list[Any] | None = None

    def __post_init__(self):
        if not isinstance(self.default, self.type_):
            raise SchemaError(
                f"Default value {self.default!r} does not match type {self.type_.__name__}"
            )
        if (self.min is not None or self.max is not None) and self.type_ not in (int, float):
            raise SchemaError(
                f"min/max constraints only supported for int and float. Got {self.type_.__name__}"
            )
        if self.choices is not None and self.default not in self.choices:
            raise SchemaError(f"Default value {self.default!r} not in choices {self.choices}")

    def validate(self, value: Any) -> None:
        """
        Validate a value against this field.

        Raises:
            ValidationError: If validation fails
        """
        # bool is an int subclass; reject it for numeric fields
        if not isinstance(value, self.type_) or (
            isinstance(value, bool) and self.type_ is not bool
        ):
            raise ValidationError(
                f"Expected type {self.type_.__name__}, got {type(value).__name__}"
            )

        if self.choices is not None and value not in self.choices:
            raise ValidationError(f"Value {value!r} not in allowed choices {self.choices}")

        if self.min is not None and value < self.min:
            raise ValidationError(f"Value {value} is less than minimum {self.min}")
        if self.max is not None and value > self.max:
            raise ValidationError(f"Value {value} is greater than maximum {self.max}")


SCHEMA: dict[str, ConfigField] = {
    "home": ConfigField(
        str, "", "Directory holding the checkouts (empty: user cache directory)"
    ),
    "parallelism": ConfigField(
        int, 8, "Maximum number of concurrent git operations", min=1, max=256
    ),
    "git_binary": ConfigField(str, "git", "git executable to run"),
    "log_level": ConfigField(
        str,
        "WARNING",
        "Log level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    ),
    "log_format": ConfigField(
        str, "console", "Log output format", choices=["console", "json"]
    ),
}


def validate_config(
    config: dict[str, Any], schema: dict[str, ConfigField] = SCHEMA
) -> dict[str, Any]:
    """
    Validate a configuration table and fill in defaults.

    Args:
        config: Values read from the file
        schema: Schema to validate against

    Returns:
        A complete configuration dictionary

    Raises:
        ValidationError: On unknown fields or invalid values
    """
    for key in config:
        if key not in schema:
            raise ValidationError(f"Unknown configuration field: {key}")

    result = generate_default_config(schema)
    for name, value in config.items():
        try:
            schema[name].validate(value)
        except ValidationError as e:
            raise ValidationError(f"Field '{name}': {e}") from e
        result[name] = value
    return result


def generate_default_config(schema: dict[str, ConfigField] = SCHEMA) -> dict[str, Any]:
    """Default values for every field of a schema."""
    return {name: field.default for name, field in schema.items()}
