"""
Error types for strops.

The transforms are total over their documented inputs, so these are raised
only for configuration problems (an unsupported code-unit width, a bad
setting) and for values that are not character sequences at all.
"""

from typing import Optional


class StrOpsError(Exception):
    """Base exception for all strops errors."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.detail:
            return f"{self.message}\n  {self.detail}"
        return self.message


class UnsupportedWidthError(StrOpsError):
    """Raised when a code-unit width other than 1, 2 or 4 bytes is requested."""

    def __init__(self, size: object, detail: Optional[str] = None) -> None:
        self.size = size
        super().__init__(
            f"unsupported code-unit width: {size!r} (expected 1, 2 or 4 bytes)",
            detail,
        )


class WidthMismatchError(StrOpsError):
    """Raised when sequences of different code-unit widths are combined."""

    pass


class SequenceTypeError(StrOpsError, TypeError):
    """
    Raised when a value is not a supported character sequence.

    Supported sequences are ``str``, ``bytes``, ``bytearray`` and
    ``UnitString``. Input, separator and pattern must all share one type.
    """

    pass


class ConfigError(StrOpsError):
    """Raised when a configuration value or file cannot be used."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        self.key = key
        super().__init__(message, detail)

    def _format_message(self) -> str:
        parts = []

        if self.key:
            parts.append(f"[{self.key}]")

        parts.append(self.message)

        text = " ".join(parts)
        if self.detail:
            text += f"\n  {self.detail}"
        return text
