"""
Substring replacement.
"""

from __future__ import annotations

from strops.primitives import S, concat, ensure_compatible


def replacen(seq: S, old: S, new: S) -> tuple[S, int]:
    """
    Replace every non-overlapping occurrence of ``old`` with ``new``.

    Scanning is left to right and resumes right after each inserted ``new``,
    so replacement text is never matched again: ``replacen("123", "3", "34")``
    gives ``("1234", 1)``. An empty ``old`` occurs nowhere.

    Returns:
        The resulting sequence and the number of replacements. With no
        replacements the input itself is returned.
    """
    ensure_compatible(seq, old, new)
    if not old:
        return seq, 0

    parts = []
    count = 0
    start = 0
    index = seq.find(old)
    while index >= 0:
        parts.append(seq[start:index])
        parts.append(new)
        count += 1
        start = index + len(old)
        index = seq.find(old, start)

    if not count:
        return seq, 0
    parts.append(seq[start:])
    return concat(parts, seq), count


def replace(seq: S, old: S, new: S) -> S:
    """Like ``replacen`` but return only the resulting sequence."""
    return replacen(seq, old, new)[0]
