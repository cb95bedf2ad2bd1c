"""
Low-level helpers shared by the transforms.

Every helper is generic over the supported sequence types: ``str`` (units
are characters), ``bytes``/``bytearray`` (units are ints) and
``UnitString`` (units are ints of its width). The C-style helpers treat a
NUL unit as a terminator, the way fixed-size character buffers do.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar, Union

import numpy as np

from strops.units import UnitString
from strops.utils.errors import SequenceTypeError, WidthMismatchError

Sequence = Union[str, bytes, bytearray, UnitString]
S = TypeVar("S", str, bytes, bytearray, UnitString)
Unit = Union[str, int, bytes, UnitString]


# =============================================================================
# Type checks
# =============================================================================


def sequence_kind(value: object) -> type:
    """Return ``str``, ``bytes`` or ``UnitString`` for a supported sequence."""
    if isinstance(value, str):
        return str
    if isinstance(value, (bytes, bytearray)):
        return bytes
    if isinstance(value, UnitString):
        return UnitString
    raise SequenceTypeError(
        f"expected str, bytes or UnitString, got {type(value).__name__}"
    )


def ensure_compatible(seq: Sequence, *others: Sequence) -> None:
    """Check that ``others`` can be searched for in, or joined with, ``seq``."""
    kind = sequence_kind(seq)
    for other in others:
        if sequence_kind(other) is not kind:
            raise SequenceTypeError(
                f"cannot mix {type(seq).__name__} and {type(other).__name__}"
            )
        if kind is UnitString and other.width is not seq.width:
            raise WidthMismatchError(
                f"cannot mix {seq.width.name} and {other.width.name} units"
            )


# =============================================================================
# Construction
# =============================================================================


def empty_like(seq: S) -> S:
    return seq[:0]


def from_ascii(text: str, like: S) -> S:
    """Convert ASCII ``text`` into the sequence type (and width) of ``like``."""
    if isinstance(like, str):
        return text
    if isinstance(like, (bytes, bytearray)):
        return type(like)(text.encode("ascii"))
    return UnitString.from_units(map(ord, text), like.width)


def concat(parts: Iterable[Sequence], like: S) -> S:
    """Concatenate ``parts`` into a sequence of the same type as ``like``."""
    if isinstance(like, str):
        return "".join(parts)
    if isinstance(like, bytearray):
        return bytearray().join(parts)
    if isinstance(like, bytes):
        return b"".join(parts)
    return UnitString.concat(parts, like.width)


# =============================================================================
# C-style helpers
# =============================================================================


def _nul(seq: Sequence) -> Union[str, int]:
    return "\0" if isinstance(seq, str) else 0


def terminated_length(seq: Sequence) -> int:
    """Number of units before the first NUL unit, or ``len(seq)`` without one."""
    sequence_kind(seq)
    index = seq.find(_nul(seq))
    return len(seq) if index < 0 else index


def bounded_copy(seq: S, maxbuf: int) -> S:
    """
    Copy ``seq`` into a buffer of ``maxbuf`` units.

    The copy stops at the terminator and keeps at most ``maxbuf - 1`` units
    so the terminator still fits. A zero-sized buffer receives nothing.
    """
    if maxbuf < 0:
        raise ValueError(f"buffer size must be non-negative, got {maxbuf}")
    if maxbuf == 0:
        return empty_like(seq)
    return seq[: min(terminated_length(seq), maxbuf - 1)]


def find_last(seq: Sequence, unit: Unit) -> int:
    """Index of the last ``unit`` before the terminator, or -1."""
    if isinstance(seq, str):
        if not isinstance(unit, str) or len(unit) != 1:
            raise SequenceTypeError("unit must be a single character")
    elif isinstance(unit, (bytes, bytearray, UnitString)):
        if len(unit) != 1:
            raise SequenceTypeError("unit must be a single code unit")
        unit = unit[0]
    return seq[: terminated_length(seq)].rfind(unit)


# =============================================================================
# Cut-set scans
# =============================================================================


def find_first_not_of(seq: Sequence, cutset: Sequence, start: int = 0) -> int:
    """
    Index of the first unit at or after ``start`` not in ``cutset``, or -1.

    A negative ``start`` counts from the end, as in ``str.find``.
    """
    ensure_compatible(seq, cutset)
    if start < 0:
        start = max(len(seq) + start, 0)
    if isinstance(seq, UnitString):
        keep = np.flatnonzero(~np.isin(seq.units[start:], cutset.units))
        return int(keep[0]) + start if keep.size else -1

    cut = set(cutset)
    for index in range(start, len(seq)):
        if seq[index] not in cut:
            return index
    return -1


def find_last_not_of(seq: Sequence, cutset: Sequence) -> int:
    """Index of the last unit not in ``cutset``, or -1."""
    ensure_compatible(seq, cutset)
    if isinstance(seq, UnitString):
        keep = np.flatnonzero(~np.isin(seq.units, cutset.units))
        return int(keep[-1]) if keep.size else -1

    cut = set(cutset)
    for index in range(len(seq) - 1, -1, -1):
        if seq[index] not in cut:
            return index
    return -1
