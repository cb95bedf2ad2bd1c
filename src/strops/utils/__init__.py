"""
strops utilities package.

Error types shared by every module.
"""

from strops.utils.errors import (
    ConfigError,
    SequenceTypeError,
    StrOpsError,
    UnsupportedWidthError,
    WidthMismatchError,
)

__all__ = [
    "StrOpsError",
    "UnsupportedWidthError",
    "WidthMismatchError",
    "SequenceTypeError",
    "ConfigError",
]
