"""
Code-unit widths and the fixed-width character sequence.

A character sequence is an ordered list of code units that all share one
width: narrow 8-bit units, 16-bit units (UTF-16-like) or 32-bit units
(UTF-32-like). ``str`` and ``bytes`` cover the common cases directly;
``UnitString`` covers every width explicitly, backed by a numpy array whose
dtype *is* the width.
"""

from __future__ import annotations

import codecs
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

import numpy as np

from strops.utils.errors import (
    SequenceTypeError,
    UnsupportedWidthError,
    WidthMismatchError,
)


# =============================================================================
# Widths
# =============================================================================


class CharWidth(Enum):
    """Supported code-unit widths. The value is the size of one unit in bytes."""

    NARROW = 1
    UTF16 = 2
    UTF32 = 4

    @property
    def dtype(self) -> np.dtype:
        """Native-order numpy dtype holding one unit."""
        return np.dtype(_DTYPES[self])

    @property
    def bits(self) -> int:
        return self.value * 8

    @property
    def max_unit(self) -> int:
        """Largest value a single unit can hold."""
        return (1 << self.bits) - 1

    @property
    def encoding(self) -> str:
        """Codec used to move ``str`` text into and out of this width."""
        return _ENCODINGS[self]

    @property
    def codec_errors(self) -> str:
        return _CODEC_ERRORS[self]

    @classmethod
    def from_size(cls, size: int) -> CharWidth:
        """Resolve a unit size in bytes."""
        if isinstance(size, bool) or not isinstance(size, int):
            raise UnsupportedWidthError(size)
        try:
            return cls(size)
        except ValueError:
            raise UnsupportedWidthError(size) from None

    @classmethod
    def from_dtype(cls, dtype: object) -> CharWidth:
        """Resolve the width of an unsigned numpy dtype."""
        dtype = np.dtype(dtype)
        if dtype.kind != "u":
            raise UnsupportedWidthError(
                dtype.itemsize,
                detail=f"dtype {dtype} is not an unsigned integer type",
            )
        return cls.from_size(dtype.itemsize)

    @classmethod
    def parse(cls, value: Union[CharWidth, int, str]) -> CharWidth:
        """
        Resolve a width given as a member, a byte count or a name.

        Accepted names are the member names in any case (``"utf16"``) and
        the byte counts as strings (``"2"``).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.from_size(int(text))
            member = _NAMES.get(text.lower().replace("-", "").replace("_", ""))
            if member is None:
                raise UnsupportedWidthError(value)
            return member
        return cls.from_size(value)


_DTYPES = {
    CharWidth.NARROW: np.uint8,
    CharWidth.UTF16: np.uint16,
    CharWidth.UTF32: np.uint32,
}

_ENCODINGS = {
    CharWidth.NARROW: "utf-8",
    CharWidth.UTF16: "utf-16-le",
    CharWidth.UTF32: "utf-32-le",
}

# Narrow units carry U+DC80..U+DCFF as the raw bytes 0x80..0xFF, as
# surrogateescape does, and any other lone surrogate as its three-byte form,
# as surrogatepass does.
_NARROW_SURROGATES = "strops.surrogates"


def _is_encoded_surrogate(head: bytes) -> bool:
    return (
        len(head) == 3
        and head[0] == 0xED
        and 0xA0 <= head[1] <= 0xBF
        and 0x80 <= head[2] <= 0xBF
    )


def _narrow_surrogates(error: UnicodeError) -> tuple[Union[str, bytes], int]:
    if isinstance(error, UnicodeEncodeError):
        out = bytearray()
        for char in error.object[error.start : error.end]:
            code = ord(char)
            if 0xDC80 <= code <= 0xDCFF:
                out.append(code - 0xDC00)
            elif 0xD800 <= code <= 0xDFFF:
                out += char.encode("utf-8", "surrogatepass")
            else:
                raise error
        return bytes(out), error.end
    if isinstance(error, UnicodeDecodeError):
        data = bytes(error.object)
        head = data[error.start : error.start + 3]
        if _is_encoded_surrogate(head):
            return head.decode("utf-8", "surrogatepass"), error.start + 3
        return chr(0xDC00 + data[error.start]), error.start + 1
    raise error


codecs.register_error(_NARROW_SURROGATES, _narrow_surrogates)

_CODEC_ERRORS = {
    CharWidth.NARROW: _NARROW_SURROGATES,
    CharWidth.UTF16: "surrogatepass",
    CharWidth.UTF32: "surrogatepass",
}

_NAMES = {
    "narrow": CharWidth.NARROW,
    "utf8": CharWidth.NARROW,
    "utf16": CharWidth.UTF16,
    "utf32": CharWidth.UTF32,
}


# =============================================================================
# UnitString
# =============================================================================


@dataclass(frozen=True, eq=False)
class UnitString:
    """
    Immutable sequence of fixed-width code units.

    Behaves like ``str``/``bytes`` for the operations the transforms need:
    ``len``, iteration and indexing (yielding ``int`` units), slicing
    (yielding ``UnitString``), ``+``, ``in`` and ``find``/``rfind``.

    Writable arrays are copied on construction so later changes by the
    caller cannot leak in; read-only arrays (including slices of another
    UnitString) are shared.

    Example:
        s = UnitString.from_text("A|B", CharWidth.UTF16)
        s.find(UnitString.from_text("|", CharWidth.UTF16))  # 1
    """

    units: np.ndarray
    width: CharWidth = field(init=False)

    def __post_init__(self) -> None:
        array = np.asarray(self.units)
        if array.ndim != 1:
            raise SequenceTypeError(
                f"UnitString needs a one-dimensional array, got {array.ndim} dimensions"
            )
        width = CharWidth.from_dtype(array.dtype)
        if array.dtype != width.dtype:
            # Byte-swapped input; equal values must hash alike.
            array = array.astype(width.dtype)
        if array.flags.writeable:
            array = array.copy()
            array.setflags(write=False)
        object.__setattr__(self, "units", array)
        object.__setattr__(self, "width", width)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def empty(cls, width: CharWidth = CharWidth.NARROW) -> UnitString:
        return cls(np.empty(0, dtype=width.dtype))

    @classmethod
    def from_units(
        cls, units: Iterable[int], width: CharWidth = CharWidth.NARROW
    ) -> UnitString:
        """Build from integer code units, each of which must fit ``width``."""
        values = np.asarray(list(units), dtype=np.int64)
        if values.size and (values.min() < 0 or values.max() > width.max_unit):
            raise ValueError(
                f"code unit out of range for {width.name} "
                f"(0..{width.max_unit:#x})"
            )
        return cls(values.astype(width.dtype))

    @classmethod
    def from_text(cls, text: str, width: CharWidth = CharWidth.NARROW) -> UnitString:
        """Encode ``text`` into units of ``width`` (UTF-8, UTF-16-LE or UTF-32-LE)."""
        return cls.from_bytes(text.encode(width.encoding, width.codec_errors), width)

    @classmethod
    def from_bytes(
        cls, data: Union[bytes, bytearray], width: CharWidth = CharWidth.NARROW
    ) -> UnitString:
        """Read little-endian units from raw bytes."""
        if len(data) % width.value:
            raise ValueError(
                f"{len(data)} bytes is not a whole number of {width.value}-byte units"
            )
        raw = np.frombuffer(bytes(data), dtype=width.dtype.newbyteorder("<"))
        return cls(raw.astype(width.dtype))

    @classmethod
    def concat(
        cls, parts: Iterable[UnitString], width: CharWidth = CharWidth.NARROW
    ) -> UnitString:
        """Concatenate ``parts``, all of which must have ``width``."""
        arrays = []
        for part in parts:
            if part.width is not width:
                raise WidthMismatchError(
                    f"cannot concatenate {part.width.name} units into {width.name}"
                )
            arrays.append(part.units)
        if not arrays:
            return cls.empty(width)
        return cls(np.concatenate(arrays))

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def tobytes(self) -> bytes:
        """Little-endian raw bytes."""
        return self.units.astype(self.width.dtype.newbyteorder("<")).tobytes()

    def to_text(self) -> str:
        """Decode back into ``str`` with this width's codec."""
        return self.tobytes().decode(self.width.encoding, self.width.codec_errors)

    def tolist(self) -> list[int]:
        return self.units.tolist()

    # -------------------------------------------------------------------------
    # Sequence protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return int(self.units.shape[0])

    def __iter__(self) -> Iterator[int]:
        return iter(self.units.tolist())

    def __getitem__(self, index: Union[int, slice]) -> Union[int, UnitString]:
        if isinstance(index, slice):
            return UnitString(self.units[index])
        return int(self.units[index])

    def __add__(self, other: object) -> UnitString:
        if not isinstance(other, UnitString):
            return NotImplemented
        self._require_same_width(other)
        return UnitString(np.concatenate([self.units, other.units]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnitString):
            return NotImplemented
        return other.width is self.width and np.array_equal(self.units, other.units)

    def __hash__(self) -> int:
        return hash((self.width, self.units.tobytes()))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, (UnitString, int)):
            return self.find(item) >= 0
        return False

    def __repr__(self) -> str:
        text = self.tobytes().decode(self.width.encoding, "backslashreplace")
        return f"UnitString({text!r}, width={self.width.name})"

    # -------------------------------------------------------------------------
    # Searching
    # -------------------------------------------------------------------------

    def find(self, sub: Union[UnitString, int], start: int = 0) -> int:
        """Lowest index >= ``start`` where ``sub`` occurs, or -1."""
        hits = self._match_positions(sub, start)
        return int(hits[0]) + self._clamp(start) if hits.size else -1

    def rfind(self, sub: Union[UnitString, int], start: int = 0) -> int:
        """Highest index >= ``start`` where ``sub`` occurs, or -1."""
        hits = self._match_positions(sub, start)
        return int(hits[-1]) + self._clamp(start) if hits.size else -1

    def _clamp(self, start: int) -> int:
        length = len(self)
        if start < 0:
            return max(length + start, 0)
        return min(start, length)

    def _match_positions(self, sub: Union[UnitString, int], start: int) -> np.ndarray:
        if start > len(self):
            return np.empty(0, dtype=np.intp)
        haystack = self.units[self._clamp(start):]
        if isinstance(sub, int):
            if not 0 <= sub <= self.width.max_unit:
                return np.empty(0, dtype=np.intp)
            return np.flatnonzero(haystack == sub)
        if not isinstance(sub, UnitString):
            raise SequenceTypeError(
                f"cannot search a UnitString for {type(sub).__name__}"
            )
        self._require_same_width(sub)
        size = len(sub)
        if size == 0:
            return np.arange(haystack.shape[0] + 1)
        if size > haystack.shape[0]:
            return np.empty(0, dtype=np.intp)
        windows = np.lib.stride_tricks.sliding_window_view(haystack, size)
        return np.flatnonzero((windows == sub.units).all(axis=1))

    def _require_same_width(self, other: UnitString) -> None:
        if other.width is not self.width:
            raise WidthMismatchError(
                f"cannot combine {self.width.name} and {other.width.name} units"
            )
