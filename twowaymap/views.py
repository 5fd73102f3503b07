"""
Iteration over a TwoWayMap: borrowing views and the consuming Drain.

Views are re-iterable and read the live map; they never copy stored values.
Drain dismantles the map one entry at a time.
"""

from collections.abc import Collection, Iterator, Reversible
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .cell import unwrap_pair
from .index import OrderedIndex
from .lib.index_helpers import same_key

if TYPE_CHECKING:
    from .two_way_map import TwoWayMap

L = TypeVar("L")
R = TypeVar("R")


class PairsView(Collection, Reversible, Generic[L, R]):
    """(left, right) pairs in ascending left order."""

    __slots__ = ("_left_index", "_right_index")

    def __init__(self, left_index: OrderedIndex[L, R], right_index: OrderedIndex[R, L]):
        self._left_index = left_index
        self._right_index = right_index

    def __len__(self) -> int:
        return len(self._left_index)

    def __iter__(self) -> Iterator[tuple[L, R]]:
        return cell_pairs(self._left_index.entries())

    def __reversed__(self) -> Iterator[tuple[L, R]]:
        return cell_pairs(self._left_index.entries(reverse=True))

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        left, right = pair
        right_cell = self._left_index.get(left)
        if right_cell is None:
            return False
        return same_key(self._right_index.project(right_cell.value), right)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class ValuesView(Collection, Reversible, Generic[L]):
    """Stored values of one side, in that side's ascending order."""

    __slots__ = ("_index",)

    def __init__(self, index: OrderedIndex[L, Any]):
        self._index = index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[L]:
        return _key_values(self._index.entries())

    def __reversed__(self) -> Iterator[L]:
        return _key_values(self._index.entries(reverse=True))

    def __contains__(self, probe: object) -> bool:
        return self._index.contains(probe)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class Drain(Iterator, Generic[L, R]):
    """
    Consuming iterator over a TwoWayMap.

    Each step removes the smallest left entry from both indices and yields
    the owned (left, right) pair. Stopping early leaves the unconsumed
    entries in the map.
    """

    __slots__ = ("_map",)

    def __init__(self, two_way_map: "TwoWayMap[L, R]"):
        self._map = two_way_map

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> "Drain[L, R]":
        return self

    def __next__(self) -> tuple[L, R]:
        left_index, right_index = self._map._left_index, self._map._right_index
        if not len(left_index):
            raise StopIteration

        left_cell, right_cell = left_index.pop_first()
        # Companion entry goes first so each cell is down to one owner.
        right_index.pop_cell(right_cell)
        pair = unwrap_pair(left_cell, right_cell)
        self._map._after_mutation()
        return pair


def cell_pairs(entries: Iterator[tuple[Any, Any]]) -> Iterator[tuple[Any, Any]]:
    """Unwrap (key_cell, value_cell) entries from an already-created iterator."""
    for key_cell, value_cell in entries:
        yield key_cell.value, value_cell.value


def _key_values(entries: Iterator[tuple[Any, Any]]) -> Iterator[Any]:
    for key_cell, _ in entries:
        yield key_cell.value
