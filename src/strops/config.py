"""
Configuration for strops.

Two behaviours are selectable: how ``split`` treats an empty separator and
whether ``escape`` turns characters >= 0x7F into numeric escapes. A third
setting picks the code-unit width ``str`` text is escaped in.

Settings are resolved before a call, from (lowest to highest precedence)
the built-in defaults, a ``[strops]`` table in ``strops.toml`` and the
``STROPS_*`` environment variables. Every transform also accepts per-call
overrides, so both behaviours stay testable in one process.

Example ``strops.toml``:

    [strops]
    empty_separator = "literal"
    escape_non_ascii = true
    text_width = "utf16"
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import replace as _replace
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

from strops.units import CharWidth
from strops.utils.errors import ConfigError, UnsupportedWidthError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "strops.toml"

ENV_VARS = {
    "empty_separator": "STROPS_EMPTY_SEPARATOR",
    "escape_non_ascii": "STROPS_ESCAPE_NON_ASCII",
    "text_width": "STROPS_TEXT_WIDTH",
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class EmptySeparatorPolicy(Enum):
    """What ``split`` does when the separator is empty."""

    PER_CHARACTER = "per-character"  # one fragment per unit
    LITERAL = "literal"  # the empty separator never matches

    @classmethod
    def parse(cls, value: Union[EmptySeparatorPolicy, str]) -> EmptySeparatorPolicy:
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace("_", "-")
        try:
            return cls(text)
        except ValueError:
            raise ConfigError(
                f"unknown empty-separator policy: {value!r}",
                key="empty_separator",
                detail="expected 'per-character' or 'literal'",
            ) from None


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"expected a boolean, got {value!r}", key=key)


@dataclass(frozen=True, slots=True)
class StrOpsConfig:
    """
    Resolved settings.

    Attributes:
        empty_separator: Policy for splitting on an empty separator
        escape_non_ascii: Escape units >= 0x7F numerically
        text_width: Width ``str`` input is encoded into before escaping
    """

    empty_separator: EmptySeparatorPolicy = EmptySeparatorPolicy.PER_CHARACTER
    escape_non_ascii: bool = False
    text_width: CharWidth = CharWidth.NARROW

    def replace(self, **changes: Any) -> StrOpsConfig:
        """Return a copy with ``changes`` applied."""
        return _replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "empty_separator": self.empty_separator.value,
            "escape_non_ascii": self.escape_non_ascii,
            "text_width": self.text_width.value,
        }

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Any], base: Optional[StrOpsConfig] = None
    ) -> StrOpsConfig:
        """
        Layer raw settings over ``base`` (the defaults when omitted).

        Raises:
            ConfigError: For unknown keys or unparseable values, including a
                ``text_width`` other than 1, 2 or 4
        """
        base = base or cls()
        unknown = sorted(set(mapping) - set(ENV_VARS))
        if unknown:
            raise ConfigError(
                f"unknown configuration key: {unknown[0]!r}",
                key=unknown[0],
                detail=f"known keys: {', '.join(ENV_VARS)}",
            )

        changes: dict[str, Any] = {}
        if "empty_separator" in mapping:
            changes["empty_separator"] = EmptySeparatorPolicy.parse(
                mapping["empty_separator"]
            )
        if "escape_non_ascii" in mapping:
            changes["escape_non_ascii"] = _parse_bool(
                mapping["escape_non_ascii"], "escape_non_ascii"
            )
        if "text_width" in mapping:
            try:
                changes["text_width"] = CharWidth.parse(mapping["text_width"])
            except UnsupportedWidthError as e:
                raise ConfigError(e.message, key="text_width") from e
        return base.replace(**changes)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional[StrOpsConfig] = None,
    ) -> StrOpsConfig:
        """Layer the ``STROPS_*`` environment variables over ``base``."""
        environ = os.environ if environ is None else environ
        mapping = {key: environ[var] for key, var in ENV_VARS.items() if var in environ}
        if mapping:
            logger.debug("configuration from environment: %s", mapping)
        return cls.from_mapping(mapping, base)


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> StrOpsConfig:
    """
    Resolve configuration from a TOML file and the environment.

    When ``path`` is None, ``./strops.toml`` is used if it exists. An explicit
    ``path`` that does not exist is an error.
    """
    config = StrOpsConfig()

    if path is None:
        candidate = Path(CONFIG_FILENAME)
        path = candidate if candidate.is_file() else None
    elif not path.is_file():
        raise ConfigError(f"configuration file not found: {path}")

    if path is not None:
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"invalid TOML in {path}", detail=str(e)) from e
        section = data.get("strops", {})
        if not isinstance(section, dict):
            raise ConfigError(f"[strops] in {path} must be a table", key="strops")
        logger.debug("configuration from %s: %s", path, section)
        config = StrOpsConfig.from_mapping(section, config)

    return StrOpsConfig.from_env(environ, config)


@lru_cache(maxsize=None)
def default_config() -> StrOpsConfig:
    """Configuration used when a call passes none: defaults plus environment."""
    return StrOpsConfig.from_env()


def resolve_config(config: Optional[StrOpsConfig]) -> StrOpsConfig:
    return config if config is not None else default_config()
