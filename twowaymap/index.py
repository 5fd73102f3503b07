"""
Ordered index: sorted mapping from key cells to partner cells.

Architecture:
  - One sortedcontainers.SortedKeyList of (projected key, key cell,
    partner cell) entries, ordered by the projected key.
  - Search, insert and delete are O(log n); slices are walked lazily.
  - Keys are unique under order equivalence (see lib/index_helpers.py).

A TwoWayMap owns two of these, one per side, kept in lock-step.
"""

from operator import itemgetter
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from sortedcontainers import SortedKeyList

from .bounds import UNBOUNDED, Bound
from .cell import SharedCell
from .errors import InvariantError
from .lib.index_helpers import find_position, range_positions
from .types import KeyFn

K = TypeVar("K")
V = TypeVar("V")

Entry = tuple[SharedCell[Any], SharedCell[Any]]

_projected = itemgetter(0)


class OrderedIndex(Generic[K, V]):
    """
    Sorted index over key cells.

    Usage:
        index = OrderedIndex()
        index.insert(SharedCell(1), SharedCell("one"))
        index.get(1).value       # "one"
        list(index.keys())       # [1]
    """

    __slots__ = ("_key_fn", "_items", "_version")

    def __init__(self, key: Optional[KeyFn] = None):
        if key is not None and not callable(key):
            raise TypeError(f"Key projection must be callable, got {type(key).__name__}")
        self._key_fn = key
        self._items: SortedKeyList = SortedKeyList(key=_projected)
        self._version = 0

    @property
    def key_fn(self) -> Optional[KeyFn]:
        return self._key_fn

    @property
    def version(self) -> int:
        """Counter bumped by every mutation; lets iterators detect changes."""
        return self._version

    def project(self, value: Any) -> Any:
        """Map a stored value to the form lookups are compared against."""
        if self._key_fn is None:
            return value
        return self._key_fn(value)

    def __len__(self) -> int:
        return len(self._items)

    def find(self, probe: Any) -> int | None:
        return find_position(self._items, probe)

    def contains(self, probe: Any) -> bool:
        return self.find(probe) is not None

    def get(self, probe: Any) -> SharedCell[V] | None:
        """Return the partner cell stored under probe, if any."""
        entry = self.get_entry(probe)
        if entry is None:
            return None
        return entry[1]

    def get_entry(self, probe: Any) -> tuple[SharedCell[K], SharedCell[V]] | None:
        """Return (key_cell, value_cell) stored under probe without removing it."""
        pos = self.find(probe)
        if pos is None:
            return None
        return self.entry_at(pos)

    def entry_at(self, pos: int) -> tuple[SharedCell[K], SharedCell[V]]:
        _, key_cell, value_cell = self._items[pos]
        return key_cell, value_cell

    def insert(self, key_cell: SharedCell[K], value_cell: SharedCell[V]) -> None:
        """
        Add a new entry.

        Raises:
            InvariantError: If an order-equivalent key is already present.
                Callers evict conflicting entries first.
        """
        key = self.project(key_cell.value)
        if find_position(self._items, key) is not None:
            raise InvariantError(f"Key {key_cell.value!r} is already indexed")
        self._items.add((key, key_cell, value_cell))
        self._version += 1

    def pop(self, probe: Any) -> tuple[SharedCell[K], SharedCell[V]] | None:
        """Remove and return the entry stored under probe, if any."""
        pos = self.find(probe)
        if pos is None:
            return None
        return self.pop_at(pos)

    def pop_at(self, pos: int) -> tuple[SharedCell[K], SharedCell[V]]:
        _, key_cell, value_cell = self._items.pop(pos)
        self._version += 1
        return key_cell, value_cell

    def pop_first(self) -> tuple[SharedCell[K], SharedCell[V]]:
        """
        Remove and return the entry with the smallest key.

        Raises:
            IndexError: If the index is empty.
        """
        return self.pop_at(0)

    def pop_cell(self, key_cell: SharedCell[K]) -> SharedCell[V]:
        """
        Remove the entry whose key is the given cell and return its partner.

        Raises:
            InvariantError: If no entry is keyed by this exact cell.
        """
        pos = self.find(self.project(key_cell.value))
        if pos is None or self._items[pos][1] is not key_cell:
            raise InvariantError(f"Key {key_cell.value!r} missing from index")
        _, value_cell = self.pop_at(pos)
        return value_cell

    def clear(self) -> None:
        self._items.clear()
        self._version += 1

    def keep_only(self, keep: Callable[[SharedCell[K], SharedCell[V]], bool]) -> list[Entry]:
        """
        Drop every entry for which keep(key_cell, value_cell) is false.

        Returns the dropped entries in key order. O(n).
        """
        kept: list[tuple[Any, SharedCell[K], SharedCell[V]]] = []
        dropped: list[Entry] = []

        for item in self._items:
            _, key_cell, value_cell = item
            if keep(key_cell, value_cell):
                kept.append(item)
            else:
                dropped.append((key_cell, value_cell))

        if dropped:
            self._items = SortedKeyList(kept, key=_projected)
            self._version += 1
        return dropped

    def span(self, start: Bound = UNBOUNDED, end: Bound = UNBOUNDED) -> tuple[int, int]:
        """Positions [lo, hi) covered by a pair of bounds."""
        return range_positions(self._items, start, end)

    def entries(
        self, lo: int = 0, hi: int | None = None, reverse: bool = False
    ) -> Iterator[tuple[SharedCell[K], SharedCell[V]]]:
        """
        Lazily yield (key_cell, value_cell) for positions [lo, hi).

        The returned iterator is bound to the index as it is now: any
        mutation after this call, even before the first step, makes the
        next step raise.

        Raises:
            RuntimeError: If the index is mutated while iterating.
        """
        if hi is None:
            hi = len(self._items)
        return self._walk(self._items.islice(lo, hi, reverse=reverse), self._version)

    def _walk(self, items: Iterator[Any], version: int) -> Iterator[tuple[SharedCell[K], SharedCell[V]]]:
        for _, key_cell, value_cell in items:
            if self._version != version:
                raise RuntimeError("Index changed size during iteration")
            yield key_cell, value_cell
        if self._version != version:
            raise RuntimeError("Index changed size during iteration")

    def keys(self) -> Iterator[K]:
        for key_cell, _ in self.entries():
            yield key_cell.value

    def __repr__(self) -> str:
        items = ", ".join(f"{k.value!r}: {v.value!r}" for k, v in self.entries())
        return f"OrderedIndex({{{items}}})"
