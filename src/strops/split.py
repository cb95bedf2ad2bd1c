"""
Split a sequence at a separator and join fragments back together.

``join(split(s, sep), sep) == s`` for every ``s`` and ``sep``.
"""

from __future__ import annotations

from collections.abc import Iterable, MutableSequence
from typing import Optional, Union

from strops.config import EmptySeparatorPolicy, StrOpsConfig, resolve_config
from strops.primitives import S, Sequence, concat, empty_like, ensure_compatible


def split(
    seq: S,
    sep: S,
    *,
    policy: Optional[Union[EmptySeparatorPolicy, str]] = None,
    config: Optional[StrOpsConfig] = None,
) -> list[S]:
    """
    Split ``seq`` at every non-overlapping occurrence of ``sep``.

    The fragment count is the number of occurrences plus one: the tail after
    the last separator is always emitted, even when empty, and input without
    any occurrence comes back as a single fragment.

    An empty ``sep`` follows ``policy`` (or ``config.empty_separator``):
    ``PER_CHARACTER`` yields one fragment per unit (none for empty input),
    ``LITERAL`` never matches and yields the whole input.

    Example:
        split("A|B|C|", "|")  # ["A", "B", "C", ""]
    """
    ensure_compatible(seq, sep)
    if policy is None:
        policy = resolve_config(config).empty_separator
    else:
        policy = EmptySeparatorPolicy.parse(policy)

    if not sep:
        if policy is EmptySeparatorPolicy.PER_CHARACTER:
            return [seq[i : i + 1] for i in range(len(seq))]
        return [seq[:]]

    fragments = []
    start = 0
    index = seq.find(sep)
    while index >= 0:
        fragments.append(seq[start:index])
        start = index + len(sep)
        index = seq.find(sep, start)
    fragments.append(seq[start:])
    return fragments


def split_into(
    container: MutableSequence[S],
    seq: S,
    sep: S,
    *,
    policy: Optional[Union[EmptySeparatorPolicy, str]] = None,
    config: Optional[StrOpsConfig] = None,
) -> int:
    """Replace the contents of ``container`` with ``split(seq, sep)``; return the count."""
    fragments = split(seq, sep, policy=policy, config=config)
    container.clear()
    container.extend(fragments)
    return len(fragments)


def join(fragments: Iterable[Sequence], sep: S) -> S:
    """
    Concatenate ``fragments`` with one ``sep`` between each consecutive pair.

    No fragments give an empty sequence of ``sep``'s type; a single fragment
    comes back unchanged.
    """
    fragments = list(fragments)
    ensure_compatible(sep, *fragments)
    if not fragments:
        return empty_like(sep)
    if len(fragments) == 1:
        return fragments[0]

    parts = [fragments[0]]
    for fragment in fragments[1:]:
        parts.append(sep)
        parts.append(fragment)
    return concat(parts, sep)
