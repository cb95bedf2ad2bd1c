"""
Unit tests for configuration loading.
"""

import pytest

from strops.config import (
    EmptySeparatorPolicy,
    StrOpsConfig,
    default_config,
    load_config,
)
from strops.units import CharWidth
from strops.utils.errors import ConfigError, UnsupportedWidthError


class TestEmptySeparatorPolicy:
    """Tests for parsing the empty-separator policy."""

    def test_parse(self):
        """Test accepted spellings."""
        assert EmptySeparatorPolicy.parse("literal") is EmptySeparatorPolicy.LITERAL
        assert EmptySeparatorPolicy.parse("per-character") is EmptySeparatorPolicy.PER_CHARACTER
        assert EmptySeparatorPolicy.parse("PER_CHARACTER") is EmptySeparatorPolicy.PER_CHARACTER
        assert EmptySeparatorPolicy.parse(EmptySeparatorPolicy.LITERAL) is EmptySeparatorPolicy.LITERAL

    def test_parse_unknown(self):
        """Test unknown policies."""
        with pytest.raises(ConfigError) as exc_info:
            EmptySeparatorPolicy.parse("never")
        assert exc_info.value.key == "empty_separator"


class TestStrOpsConfig:
    """Tests for the configuration object."""

    def test_defaults(self):
        """Test default values."""
        config = StrOpsConfig()
        assert config.empty_separator is EmptySeparatorPolicy.PER_CHARACTER
        assert config.escape_non_ascii is False
        assert config.text_width is CharWidth.NARROW

    def test_replace(self):
        """Test copying with changes leaves the original alone."""
        config = StrOpsConfig()
        changed = config.replace(escape_non_ascii=True)
        assert changed.escape_non_ascii is True
        assert config.escape_non_ascii is False

    def test_to_dict(self):
        """Test the plain representation."""
        assert StrOpsConfig(text_width=CharWidth.UTF16).to_dict() == {
            "empty_separator": "per-character",
            "escape_non_ascii": False,
            "text_width": 2,
        }

    def test_from_mapping(self):
        """Test raw values are parsed."""
        config = StrOpsConfig.from_mapping(
            {"empty_separator": "literal", "escape_non_ascii": "yes", "text_width": 4}
        )
        assert config.empty_separator is EmptySeparatorPolicy.LITERAL
        assert config.escape_non_ascii is True
        assert config.text_width is CharWidth.UTF32

    def test_from_mapping_unknown_key(self):
        """Test unknown keys are reported."""
        with pytest.raises(ConfigError) as exc_info:
            StrOpsConfig.from_mapping({"colour": "blue"})
        assert exc_info.value.key == "colour"

    def test_from_mapping_bad_bool(self):
        """Test non-boolean strings."""
        with pytest.raises(ConfigError):
            StrOpsConfig.from_mapping({"escape_non_ascii": "maybe"})

    def test_from_mapping_bad_width(self):
        """Test an unsupported width is a configuration error naming its key."""
        with pytest.raises(ConfigError) as excinfo:
            StrOpsConfig.from_mapping({"text_width": "3"})
        assert excinfo.value.key == "text_width"
        assert isinstance(excinfo.value.__cause__, UnsupportedWidthError)

    def test_from_env_bad_width(self):
        """Test a bad STROPS_TEXT_WIDTH is a configuration error."""
        with pytest.raises(ConfigError) as excinfo:
            StrOpsConfig.from_env({"STROPS_TEXT_WIDTH": "utf7"})
        assert excinfo.value.key == "text_width"

    def test_from_env(self):
        """Test reading the environment."""
        config = StrOpsConfig.from_env(
            {
                "STROPS_EMPTY_SEPARATOR": "literal",
                "STROPS_ESCAPE_NON_ASCII": "1",
                "STROPS_TEXT_WIDTH": "utf16",
            }
        )
        assert config.empty_separator is EmptySeparatorPolicy.LITERAL
        assert config.escape_non_ascii is True
        assert config.text_width is CharWidth.UTF16

    def test_from_env_empty(self):
        """Test an empty environment gives the defaults."""
        assert StrOpsConfig.from_env({}) == StrOpsConfig()


class TestDefaultConfig:
    """Tests for the cached default configuration."""

    def test_cached(self):
        """Test the same object is returned."""
        assert default_config() is default_config()

    def test_reads_environment(self, monkeypatch):
        """Test environment variables are picked up."""
        monkeypatch.setenv("STROPS_ESCAPE_NON_ASCII", "true")
        default_config.cache_clear()
        assert default_config().escape_non_ascii is True


class TestLoadConfig:
    """Tests for loading strops.toml."""

    def test_no_file(self, tmp_path, monkeypatch):
        """Test defaults when no file is present."""
        monkeypatch.chdir(tmp_path)
        assert load_config(environ={}) == StrOpsConfig()

    def test_file_in_working_directory(self, tmp_path, monkeypatch):
        """Test ./strops.toml is found automatically."""
        (tmp_path / "strops.toml").write_text('[strops]\nempty_separator = "literal"\n')
        monkeypatch.chdir(tmp_path)
        assert load_config(environ={}).empty_separator is EmptySeparatorPolicy.LITERAL

    def test_explicit_path(self, tmp_path):
        """Test an explicit file."""
        path = tmp_path / "custom.toml"
        path.write_text("[strops]\nescape_non_ascii = true\ntext_width = 2\n")
        config = load_config(path, environ={})
        assert config.escape_non_ascii is True
        assert config.text_width is CharWidth.UTF16

    def test_environment_overrides_file(self, tmp_path):
        """Test the environment wins over the file."""
        path = tmp_path / "strops.toml"
        path.write_text('[strops]\nempty_separator = "literal"\n')
        config = load_config(path, environ={"STROPS_EMPTY_SEPARATOR": "per-character"})
        assert config.empty_separator is EmptySeparatorPolicy.PER_CHARACTER

    def test_missing_explicit_path(self, tmp_path):
        """Test a missing explicit file is an error."""
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.toml", environ={})

    def test_invalid_toml(self, tmp_path):
        """Test a malformed file is an error."""
        path = tmp_path / "strops.toml"
        path.write_text("[strops\n")
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_section_not_a_table(self, tmp_path):
        """Test [strops] must be a table."""
        path = tmp_path / "strops.toml"
        path.write_text('strops = "literal"\n')
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_file_without_section(self, tmp_path):
        """Test a file without [strops] gives the defaults."""
        path = tmp_path / "strops.toml"
        path.write_text("[other]\nkey = 1\n")
        assert load_config(path, environ={}) == StrOpsConfig()
