"""
Tests for the configuration system.

This test suite covers:
1. Field validation
2. Schema validation with defaults
3. TOML reading, writing and generation
4. Settings resolution order
"""

from pathlib import Path

import pytest

from tether.config import (
    ConfigError,
    Settings,
    default_config_path,
    default_home,
    init_config,
    load_settings,
)
from tether.config.schema import (
    SCHEMA,
    ConfigField,
    SchemaError,
    ValidationError,
    generate_default_config,
    validate_config,
)
from tether.config.toml_handler import TOMLError, read_toml, write_toml


class TestConfigField:
    """Test field definitions and validation."""

    def test_default_type_mismatch(self):
        """A default of the wrong type should be rejected."""
        with pytest.raises(SchemaError, match="does not match type"):
            ConfigField(int, "eight")

    def test_min_max_only_for_numbers(self):
        """Range constraints should be rejected on strings."""
        with pytest.raises(SchemaError, match="min/max"):
            ConfigField(str, "x", min=1)

    def test_default_must_be_a_choice(self):
        """The default should be one of the choices."""
        with pytest.raises(SchemaError, match="not in choices"):
            ConfigField(str, "x", choices=["a", "b"])

    def test_range(self):
        """Numbers outside the range should fail."""
        field = ConfigField(int, 8, min=1, max=256)
        field.validate(1)
        field.validate(256)

        with pytest.raises(ValidationError, match="less than minimum"):
            field.validate(0)
        with pytest.raises(ValidationError, match="greater than maximum"):
            field.validate(257)

    def test_bool_is_not_int(self):
        """Booleans should not pass as integers."""
        with pytest.raises(ValidationError, match="Expected type int"):
            ConfigField(int, 8).validate(True)

    def test_choices(self):
        """Values outside the choices should fail."""
        with pytest.raises(ValidationError, match="not in allowed choices"):
            SCHEMA["log_format"].validate("xml")


class TestValidateConfig:
    """Test whole-table validation."""

    def test_empty_table_gives_defaults(self):
        """An empty table should give every default."""
        assert validate_config({}) == generate_default_config()

    def test_partial_table(self):
        """Given fields should override defaults."""
        config = validate_config({"parallelism": 2})
        assert config["parallelism"] == 2
        assert config["git_binary"] == "git"

    def test_unknown_field(self):
        """Unknown fields should be rejected."""
        with pytest.raises(ValidationError, match="Unknown configuration field"):
            validate_config({"colour": "blue"})

    def test_invalid_field_named(self):
        """Errors should name the offending field."""
        with pytest.raises(ValidationError, match="Field 'parallelism'"):
            validate_config({"parallelism": "many"})


class TestTOML:
    """Test TOML I/O."""

    def test_write_and_read(self, tmp_path):
        """Written data should read back."""
        path = tmp_path / "nested" / "file.toml"
        write_toml(path, {"tether": {"parallelism": 3}})

        assert read_toml(path) == {"tether": {"parallelism": 3}}

    def test_read_missing(self, tmp_path):
        """Missing files should raise TOMLError."""
        with pytest.raises(TOMLError, match="not found"):
            read_toml(tmp_path / "missing.toml")

    def test_read_invalid(self, tmp_path):
        """Invalid TOML should raise TOMLError."""
        path = tmp_path / "bad.toml"
        path.write_text("[tether\nhome = ")

        with pytest.raises(TOMLError, match="Failed to parse"):
            read_toml(path)


class TestSettings:
    """Test settings resolution."""

    def test_default_paths(self, tmp_path):
        """XDG variables should drive the default locations."""
        env = {
            "XDG_CONFIG_HOME": str(tmp_path / "cfg"),
            "XDG_CACHE_HOME": str(tmp_path / "cache"),
        }

        assert default_config_path(env) == tmp_path / "cfg" / "tether" / "tether.toml"
        assert default_home(env) == tmp_path / "cache" / "tether"

    def test_config_env_override(self, tmp_path):
        """TETHER_CONFIG should point at the config file."""
        env = {"TETHER_CONFIG": str(tmp_path / "x.toml")}
        assert default_config_path(env) == tmp_path / "x.toml"

    def test_no_file_gives_defaults(self, tmp_path):
        """A missing config file should not be an error."""
        env = {"XDG_CACHE_HOME": str(tmp_path / "cache")}

        settings = load_settings(tmp_path / "missing.toml", env=env)

        assert settings == Settings(home=tmp_path / "cache" / "tether")

    def test_file_values(self, tmp_path):
        """Config file values should override defaults."""
        path = tmp_path / "tether.toml"
        path.write_text(
            '[tether]\nhome = "/srv/plugins"\nparallelism = 2\nlog_format = "json"\n'
        )

        settings = load_settings(path, env={})

        assert settings.home == Path("/srv/plugins")
        assert settings.parallelism == 2
        assert settings.log_format == "json"

    def test_env_home_wins(self, tmp_path):
        """TETHER_HOME should override the file."""
        path = tmp_path / "tether.toml"
        path.write_text('[tether]\nhome = "/srv/plugins"\n')

        settings = load_settings(path, env={"TETHER_HOME": str(tmp_path / "h")})

        assert settings.home == tmp_path / "h"

    def test_invalid_file(self, tmp_path):
        """Invalid values should raise ConfigError."""
        path = tmp_path / "tether.toml"
        path.write_text("[tether]\nparallelism = 0\n")

        with pytest.raises(ConfigError, match="less than minimum"):
            load_settings(path, env={})

    def test_section_must_be_table(self, tmp_path):
        """A non-table [tether] value should raise ConfigError."""
        path = tmp_path / "tether.toml"
        path.write_text('tether = "oops"\n')

        with pytest.raises(ConfigError, match="must be a table"):
            load_settings(path, env={})


class TestInitConfig:
    """Test default config generation."""

    def test_init_config_round_trip(self, tmp_path):
        """The generated file should load back to the defaults."""
        path = init_config(tmp_path / "conf" / "tether.toml")
        text = path.read_text()

        assert "# Maximum number of concurrent git operations" in text
        assert "# Choices: console, json" in text
        assert read_toml(path)["tether"] == generate_default_config()

    def test_init_config_refuses_overwrite(self, tmp_path):
        """An existing file should not be overwritten without force."""
        path = tmp_path / "tether.toml"
        path.write_text("# mine\n")

        with pytest.raises(ConfigError, match="already exists"):
            init_config(path)

        init_config(path, force=True)
        assert "[tether]" in path.read_text()
