"""
Trim runs of cut characters from the ends of a sequence.

A unit is cut when it is a member of the caller's cut-set; order and
duplicates in the cut-set do not matter. Only maximal runs anchored at an
end are removed, never interior units. An empty cut-set cuts nothing.
"""

from __future__ import annotations

from strops.primitives import (
    S,
    empty_like,
    ensure_compatible,
    find_first_not_of,
    find_last_not_of,
)


def trim(seq: S, cutset: S) -> S:
    """Remove leading and trailing cut units. All-cut input becomes empty."""
    ensure_compatible(seq, cutset)
    first = find_first_not_of(seq, cutset)
    if first < 0:
        return empty_like(seq)
    last = find_last_not_of(seq, cutset)
    return seq[first : last + 1]


def trim_left(seq: S, cutset: S) -> S:
    """Remove leading cut units."""
    ensure_compatible(seq, cutset)
    first = find_first_not_of(seq, cutset)
    if first < 0:
        return empty_like(seq)
    return seq[first:]


def trim_right(seq: S, cutset: S) -> S:
    """Remove trailing cut units."""
    ensure_compatible(seq, cutset)
    last = find_last_not_of(seq, cutset)
    return seq[: last + 1]
