"""
strops - generic string-manipulation primitives.

Split/join, substring replace, trim against a caller-supplied cut-set, and
escape/quote for printable representations. Every transform accepts ``str``,
``bytes`` or a fixed-width ``UnitString`` (8, 16 or 32-bit code units) and
returns the same type.
"""

from strops.config import (
    EmptySeparatorPolicy,
    StrOpsConfig,
    default_config,
    load_config,
)
from strops.escape import escape, quote
from strops.primitives import bounded_copy, find_last, terminated_length
from strops.replace import replace, replacen
from strops.selftest import run_self_test
from strops.split import join, split, split_into
from strops.trim import trim, trim_left, trim_right
from strops.units import CharWidth, UnitString
from strops.utils.errors import (
    ConfigError,
    SequenceTypeError,
    StrOpsError,
    UnsupportedWidthError,
    WidthMismatchError,
)

__version__ = "0.1.0"
__all__ = [
    # Transforms
    "split",
    "split_into",
    "join",
    "replace",
    "replacen",
    "trim",
    "trim_left",
    "trim_right",
    "escape",
    "quote",
    # Helpers
    "terminated_length",
    "bounded_copy",
    "find_last",
    "run_self_test",
    # Types
    "CharWidth",
    "UnitString",
    "EmptySeparatorPolicy",
    "StrOpsConfig",
    "default_config",
    "load_config",
    # Errors
    "StrOpsError",
    "UnsupportedWidthError",
    "WidthMismatchError",
    "SequenceTypeError",
    "ConfigError",
]
