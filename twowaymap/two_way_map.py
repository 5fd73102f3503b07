"""
TwoWayMap - ordered one-to-one map with lookup from either side.

Both sides are kept in their own OrderedIndex:
- left index:  left value  -> right value
- right index: right value -> left value

Each stored value lives in a single SharedCell referenced by both indices.
Every mutation touches both indices so that, after it returns, each left
value is paired with exactly one right value and vice versa.
"""

import logging
from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from .bounds import UNBOUNDED, Bound, as_end, as_start
from .cell import SharedCell, unwrap_pair
from .context import is_verifying
from .errors import InvariantError
from .index import OrderedIndex
from .types import Err, KeyFn, Ok
from .views import Drain, PairsView, ValuesView, cell_pairs

logger = logging.getLogger(__name__)

L = TypeVar("L")
R = TypeVar("R")


class TwoWayMap(Generic[L, R]):
    """
    Bidirectional ordered map enforcing a strict bijection.

    Lookups accept probes: values compared against the stored values (or
    their `left_key` / `right_key` projections) using `<` only. A probe must
    order exactly like the stored value it stands for; the map cannot check
    this, and a probe that orders differently silently finds nothing or the
    wrong entry.

    Examples:
        >>> codes = TwoWayMap([(1, "one"), (2, "two")])
        >>> codes.get_by_left(1)
        'one'
        >>> codes.get_by_right("two")
        2
        >>> codes.insert(1, "two")     # evicts (1, "one") and (2, "two")
        >>> list(codes)
        [(1, 'two')]
    """

    __slots__ = ("_left_index", "_right_index")

    def __init__(
        self,
        pairs: Iterable[tuple[L, R]] | Mapping[L, R] | None = None,
        *,
        left_key: Optional[KeyFn] = None,
        right_key: Optional[KeyFn] = None,
    ):
        """
        Initialize a map, optionally from pairs.

        Args:
            pairs: Iterable of (left, right) pairs, or a mapping left -> right.
                Inserted in order with `insert` semantics, so later pairs
                overwrite earlier conflicting ones.
            left_key: Projection applied to left values before comparison.
            right_key: Projection applied to right values before comparison.
        """
        self._left_index: OrderedIndex[L, R] = OrderedIndex(left_key)
        self._right_index: OrderedIndex[R, L] = OrderedIndex(right_key)
        if pairs is not None:
            self.extend(pairs)

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[L, R]] | Mapping[L, R],
        *,
        left_key: Optional[KeyFn] = None,
        right_key: Optional[KeyFn] = None,
    ) -> "TwoWayMap[L, R]":
        """Build a map from pairs with sequential `insert` semantics."""
        return cls(pairs, left_key=left_key, right_key=right_key)

    def __len__(self) -> int:
        return len(self._left_index)

    def __bool__(self) -> bool:
        return len(self._left_index) > 0

    def is_empty(self) -> bool:
        return len(self._left_index) == 0

    def insert(self, left: L, right: R) -> None:
        """
        Pair `left` with `right`, evicting whatever stood in the way.

        If `left` is already paired, that pairing is removed. Independently,
        if `right` is already paired, that pairing is removed too. A single
        call can therefore drop up to two existing entries before adding the
        new one; the length changes by +1, 0 or -1.
        """
        # Both lookups run before anything is evicted, so a lookup that raises
        # leaves the map untouched.
        by_left = self._left_index.get_entry(self._left_index.project(left))
        by_right = self._right_index.get_entry(self._right_index.project(right))

        if by_left is not None:
            left_cell, right_cell = by_left
            self._left_index.pop_cell(left_cell)
            self._right_index.pop_cell(right_cell)
            logger.debug(
                "insert(%r, %r) evicted (%r, %r) by left",
                left, right, left_cell.value, right_cell.value,
            )

        if by_right is not None and (by_left is None or by_right[0] is not by_left[1]):
            right_cell, left_cell = by_right
            self._right_index.pop_cell(right_cell)
            self._left_index.pop_cell(left_cell)
            logger.debug(
                "insert(%r, %r) evicted (%r, %r) by right",
                left, right, left_cell.value, right_cell.value,
            )

        left_cell = SharedCell(left)
        right_cell = SharedCell(right)
        self._left_index.insert(left_cell, right_cell)
        self._right_index.insert(right_cell.share(), left_cell.share())
        self._after_mutation()

    def insert_no_overwrite(self, left: L, right: R) -> Ok[None] | Err[tuple[L, R]]:
        """
        Pair `left` with `right` only if neither is stored yet.

        Returns:
            Ok(None) if the pair was inserted
            Err((left, right)) with the untouched arguments otherwise
        """
        if self._left_index.contains(self._left_index.project(left)) or self._right_index.contains(
            self._right_index.project(right)
        ):
            logger.debug("insert_no_overwrite(%r, %r) rejected", left, right)
            return Err((left, right))
        self.insert(left, right)
        return Ok(None)

    def remove_by_left(self, left: Any) -> tuple[L, R] | None:
        """
        Remove the entry whose left value matches the probe.

        Returns:
            The owned (left, right) pair, or None if no entry matched.
        """
        entry = self._left_index.pop(left)
        if entry is None:
            return None
        left_cell, right_cell = entry
        self._right_index.pop_cell(right_cell)
        pair = unwrap_pair(left_cell, right_cell)
        self._after_mutation()
        return pair

    def remove_by_right(self, right: Any) -> tuple[R, L] | None:
        """
        Remove the entry whose right value matches the probe.

        Returns:
            The owned (right, left) pair, or None if no entry matched.
        """
        entry = self._right_index.pop(right)
        if entry is None:
            return None
        right_cell, left_cell = entry
        self._left_index.pop_cell(left_cell)
        pair = unwrap_pair(right_cell, left_cell)
        self._after_mutation()
        return pair

    def clear(self) -> None:
        self._left_index.clear()
        self._right_index.clear()
        self._after_mutation()

    def retain(self, predicate: Callable[[L, R], bool]) -> None:
        """
        Keep only the pairs for which predicate(left, right) is true.

        The predicate runs once per pair, in ascending left order, and each
        failing pair leaves both indices together.
        """
        doomed: set[int] = set()

        def keep_left(left_cell: SharedCell[L], right_cell: SharedCell[R]) -> bool:
            if predicate(left_cell.value, right_cell.value):
                return True
            doomed.add(id(left_cell))
            return False

        dropped = self._left_index.keep_only(keep_left)
        if dropped:
            self._right_index.keep_only(lambda _, left_cell: id(left_cell) not in doomed)
            logger.debug("retain removed %d pair(s)", len(dropped))
        self._after_mutation()

    def extend(self, pairs: Iterable[tuple[L, R]] | Mapping[L, R]) -> None:
        """Insert each pair in order with `insert` semantics."""
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        for item in items:
            try:
                left, right = item
            except (TypeError, ValueError) as e:
                raise TypeError(f"Expected a (left, right) pair, got {item!r}") from e
            self.insert(left, right)

    def get_by_left(self, left: Any, default: Any = None) -> R | Any:
        """Return the right value paired with the probe, else default."""
        right_cell = self._left_index.get(left)
        if right_cell is None:
            return default
        return right_cell.value

    def get_by_right(self, right: Any, default: Any = None) -> L | Any:
        """Return the left value paired with the probe, else default."""
        left_cell = self._right_index.get(right)
        if left_cell is None:
            return default
        return left_cell.value

    def contains_left(self, left: Any) -> bool:
        return self._left_index.contains(left)

    def contains_right(self, right: Any) -> bool:
        return self._right_index.contains(right)

    def __contains__(self, pair: object) -> bool:
        """Check whether a (left, right) pair is stored."""
        return pair in self.pairs()

    def left_range(self, start: Bound | Any = UNBOUNDED, end: Bound | Any = UNBOUNDED) -> Iterator[tuple[L, R]]:
        """
        Lazily yield (left, right) pairs whose left value lies in the range.

        Args:
            start: Included(v), Excluded(v), UNBOUNDED, or a bare value
                (inclusive)
            end: Included(v), Excluded(v), UNBOUNDED, or a bare value
                (exclusive)

        Examples:
            m.left_range(Included(1), Included(3))   # 1 <= left <= 3
            m.left_range(1, 3)                       # 1 <= left < 3
            m.left_range(end=Included(3))            # left <= 3
        """
        lo, hi = self._left_index.span(as_start(start), as_end(end))
        return cell_pairs(self._left_index.entries(lo, hi))

    def right_range(self, start: Bound | Any = UNBOUNDED, end: Bound | Any = UNBOUNDED) -> Iterator[tuple[R, L]]:
        """
        Lazily yield (right, left) pairs whose right value lies in the range.

        Bounds behave as in `left_range`, over the right side's ordering.
        """
        lo, hi = self._right_index.span(as_start(start), as_end(end))
        return cell_pairs(self._right_index.entries(lo, hi))

    def pairs(self) -> PairsView[L, R]:
        """Re-iterable view of (left, right) pairs in ascending left order."""
        return PairsView(self._left_index, self._right_index)

    def left_values(self) -> ValuesView[L]:
        return ValuesView(self._left_index)

    def right_values(self) -> ValuesView[R]:
        return ValuesView(self._right_index)

    def __iter__(self) -> Iterator[tuple[L, R]]:
        return iter(self.pairs())

    def __reversed__(self) -> Iterator[tuple[L, R]]:
        return reversed(self.pairs())

    def drain(self) -> Drain[L, R]:
        """
        Consume the map, yielding owned (left, right) pairs in left order.

        Entries leave the map as they are yielded; the map is empty once the
        iterator is exhausted.
        """
        return Drain(self)

    def _empty_like(self) -> "TwoWayMap[L, R]":
        return type(self)(
            left_key=self._left_index.key_fn, right_key=self._right_index.key_fn
        )

    def clone(self) -> "TwoWayMap[L, R]":
        """Return an independent map holding deep copies of every value."""
        return self.__deepcopy__({})

    def copy(self) -> "TwoWayMap[L, R]":
        """Return a new map with fresh cells around the same value objects."""
        other = self._empty_like()
        for left, right in self.pairs():
            other.insert(left, right)
        return other

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> "TwoWayMap[L, R]":
        other = self._empty_like()
        memo[id(self)] = other
        for left, right in self.pairs():
            other.insert(deepcopy(left, memo), deepcopy(right, memo))
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TwoWayMap):
            return NotImplemented
        return len(self) == len(other) and list(self.pairs()) == list(other.pairs())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.pairs())!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        from .schema import two_way_map_schema

        return two_way_map_schema(cls, source_type, handler)

    def _after_mutation(self) -> None:
        if is_verifying():
            self.verify()

    def verify(self) -> None:
        """
        Check the full bijection invariant. O(n).

        Raises:
            InvariantError: If the two indices disagree.
        """
        if len(self._left_index) != len(self._right_index):
            raise InvariantError(
                f"Index sizes differ: {len(self._left_index)} left, "
                f"{len(self._right_index)} right"
            )
        for left_cell, right_cell in self._left_index.entries():
            mirror = self._right_index.get(self._right_index.project(right_cell.value))
            if mirror is not left_cell:
                raise InvariantError(
                    f"Pair ({left_cell.value!r}, {right_cell.value!r}) has no mirror"
                )
            if left_cell.owners != 2 or right_cell.owners != 2:
                raise InvariantError(
                    f"Pair ({left_cell.value!r}, {right_cell.value!r}) has "
                    f"{left_cell.owners}/{right_cell.owners} owners (expected 2/2)"
                )
