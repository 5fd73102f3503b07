"""
Helper functions for ordered index search.

Helpers work on a `sortedcontainers.SortedKeyList` whose key function
returns the projected key of an entry. Probes are compared with `<` only,
so a probe finds a stored key when the two are order-equivalent (neither
sorts before the other). Any probe type whose ordering agrees with the
stored keys' ordering works.
"""

from typing import Any

from sortedcontainers import SortedKeyList

from ..bounds import UNBOUNDED, Bound, Excluded, Included


def same_key(a: Any, b: Any) -> bool:
    """Check order equivalence of two keys."""
    return not (a < b) and not (b < a)


def key_at(items: SortedKeyList, pos: int) -> Any:
    return items.key(items[pos])


def find_position(items: SortedKeyList, probe: Any) -> int | None:
    """Return the position of the entry whose key is order-equivalent to probe."""
    pos = items.bisect_key_left(probe)
    if pos < len(items) and same_key(key_at(items, pos), probe):
        return pos
    return None


def range_positions(items: SortedKeyList, start: Bound, end: Bound) -> tuple[int, int]:
    """
    Translate a pair of bounds into a half-open slice [lo, hi) of entries.

    An empty or inverted range gives lo == hi.
    """
    lo = _start_position(items, start)
    hi = _end_position(items, end)
    if hi < lo:
        hi = lo
    return lo, hi


def _start_position(items: SortedKeyList, bound: Bound) -> int:
    if bound is UNBOUNDED:
        return 0
    if isinstance(bound, Included):
        return items.bisect_key_left(bound.value)
    if isinstance(bound, Excluded):
        return items.bisect_key_right(bound.value)
    raise TypeError(f"Expected a Bound, got {type(bound).__name__}")


def _end_position(items: SortedKeyList, bound: Bound) -> int:
    if bound is UNBOUNDED:
        return len(items)
    if isinstance(bound, Included):
        return items.bisect_key_right(bound.value)
    if isinstance(bound, Excluded):
        return items.bisect_key_left(bound.value)
    raise TypeError(f"Expected a Bound, got {type(bound).__name__}")
