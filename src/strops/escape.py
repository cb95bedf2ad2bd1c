"""
Printable representations of character sequences.

``escape`` maps each unit to itself or to a backslash escape:

    "                        ->  ""   (self-doubled, never \\")
    \\                        ->  \\\\
    NUL BEL BS FF LF CR TAB VT  ->  \\0 \\a \\b \\f \\n \\r \\t \\v
    other units < 0x20       ->  numeric escape
    units >= 0x7F            ->  numeric escape, when non-ASCII escaping is on
    anything else            ->  copied

The numeric escape depends on the code-unit width: ``\\ooo`` (three octal
digits of the low 8 bits) for narrow units, ``\\uXXXX`` for 16-bit units and
``\\UXXXXXXXX`` for 32-bit units, hex digits uppercase.

Because ``"`` becomes ``""``, escaped text has no simple inverse.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional, Union

from strops.config import StrOpsConfig, resolve_config
from strops.primitives import S, concat, from_ascii
from strops.units import CharWidth, UnitString
from strops.utils.errors import SequenceTypeError, UnsupportedWidthError, WidthMismatchError

_SIMPLE_ESCAPES = {
    0x22: '""',
    0x5C: "\\\\",
    0x00: "\\0",
    0x07: "\\a",
    0x08: "\\b",
    0x0C: "\\f",
    0x0A: "\\n",
    0x0D: "\\r",
    0x09: "\\t",
    0x0B: "\\v",
}


# =============================================================================
# Numeric escapes
# =============================================================================


def octal_digits(value: int, places: int = 3) -> str:
    """Exactly ``places`` octal digits of the low ``3 * places`` bits."""
    return format(value & ((1 << (3 * places)) - 1), f"0{places}o")


def hex_digits(value: int, places: int) -> str:
    """Exactly ``places`` uppercase hex digits of the low ``4 * places`` bits."""
    return format(value & ((1 << (4 * places)) - 1), f"0{places}X")


def _narrow_escape(unit: int) -> str:
    return "\\" + octal_digits(unit & 0xFF)


def _utf16_escape(unit: int) -> str:
    return "\\u" + hex_digits(unit, 4)


def _utf32_escape(unit: int) -> str:
    return "\\U" + hex_digits(unit, 8)


_NUMERIC_ESCAPES: dict[CharWidth, Callable[[int], str]] = {
    CharWidth.NARROW: _narrow_escape,
    CharWidth.UTF16: _utf16_escape,
    CharWidth.UTF32: _utf32_escape,
}


def numeric_escape_for(width: Union[CharWidth, int, str]) -> Callable[[int], str]:
    """
    Return the numeric escape renderer for ``width``.

    Raises:
        UnsupportedWidthError: For any width other than 1, 2 or 4 bytes
    """
    width = CharWidth.parse(width)
    try:
        return _NUMERIC_ESCAPES[width]
    except KeyError:
        raise UnsupportedWidthError(width.value) from None


# =============================================================================
# Escape and quote
# =============================================================================


def escape_units(units: UnitString, escape_non_ascii: bool = False) -> UnitString:
    """Escape a UnitString in its own width."""
    render = numeric_escape_for(units.width)
    out: list[int] = []
    for unit in units:
        simple = _SIMPLE_ESCAPES.get(unit)
        if simple is not None:
            out.extend(map(ord, simple))
        elif unit < 0x20 or (escape_non_ascii and unit >= 0x7F):
            out.extend(map(ord, render(unit)))
        else:
            out.append(unit)
    return UnitString.from_units(out, units.width)


def _check_width(requested: Optional[Union[CharWidth, int, str]], actual: CharWidth) -> None:
    if requested is not None and CharWidth.parse(requested) is not actual:
        raise WidthMismatchError(
            f"requested {CharWidth.parse(requested).name} escaping "
            f"for {actual.name} input"
        )


def escape(
    src: S,
    *,
    width: Optional[Union[CharWidth, int, str]] = None,
    escape_non_ascii: Optional[bool] = None,
    config: Optional[StrOpsConfig] = None,
) -> S:
    """
    Return a printable form of ``src`` of the same type.

    ``bytes`` are narrow and a ``UnitString`` carries its own width; ``width``
    may restate it but not change it. ``str`` is encoded into ``width`` (or
    ``config.text_width``), escaped unit by unit and decoded again, so
    non-ASCII escaping of a narrow ``str`` yields the octal escapes of its
    UTF-8 bytes and a non-BMP character in 16-bit width yields two surrogate
    escapes.

    Example:
        escape("A\\n")                          # 'A\\\\n'
        escape("\\x01")                         # '\\\\001'
        escape("\\x01", width=CharWidth.UTF16)  # '\\\\u0001'
    """
    config = resolve_config(config)
    if escape_non_ascii is None:
        escape_non_ascii = config.escape_non_ascii

    if isinstance(src, UnitString):
        _check_width(width, src.width)
        return escape_units(src, escape_non_ascii)
    if isinstance(src, (bytes, bytearray)):
        _check_width(width, CharWidth.NARROW)
        escaped = escape_units(UnitString.from_bytes(src), escape_non_ascii)
        return type(src)(escaped.tobytes())
    if isinstance(src, str):
        target = config.text_width if width is None else CharWidth.parse(width)
        return escape_units(UnitString.from_text(src, target), escape_non_ascii).to_text()
    raise SequenceTypeError(
        f"expected str, bytes or UnitString, got {type(src).__name__}"
    )


def quote(
    src: S,
    *,
    width: Optional[Union[CharWidth, int, str]] = None,
    escape_non_ascii: Optional[bool] = None,
    config: Optional[StrOpsConfig] = None,
) -> S:
    """``escape(src)`` wrapped in double quotes: ``quote("\\n") == '"\\\\n"'``."""
    body = escape(src, width=width, escape_non_ascii=escape_non_ascii, config=config)
    mark = from_ascii('"', body)
    return concat([mark, body, mark], body)
