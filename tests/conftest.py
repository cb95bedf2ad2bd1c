"""
Pytest configuration and shared fixtures for strops tests.
"""

import pytest

from strops.config import (
    ENV_VARS,
    EmptySeparatorPolicy,
    StrOpsConfig,
    default_config,
)
from strops.units import CharWidth, UnitString


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test without STROPS_* variables and with a fresh default config."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    default_config.cache_clear()
    yield
    default_config.cache_clear()


@pytest.fixture
def units_factory():
    """Factory fixture for building UnitStrings from text."""

    def _create_units(text: str, width: CharWidth = CharWidth.NARROW) -> UnitString:
        return UnitString.from_text(text, width)

    return _create_units


@pytest.fixture
def per_character_config() -> StrOpsConfig:
    return StrOpsConfig(empty_separator=EmptySeparatorPolicy.PER_CHARACTER)


@pytest.fixture
def literal_config() -> StrOpsConfig:
    return StrOpsConfig(empty_separator=EmptySeparatorPolicy.LITERAL)


@pytest.fixture
def non_ascii_config() -> StrOpsConfig:
    return StrOpsConfig(escape_non_ascii=True)
