"""
Shared value cell used by both indices of a TwoWayMap.
"""

from typing import Generic, TypeVar

from .errors import InvariantError

T = TypeVar("T")

_SPENT = object()


class SharedCell(Generic[T]):
    """
    Read-only holder for one stored value with an explicit owner count.

    A map stores each value once and lets both of its indices reference the
    same cell: the index keyed by the value and the index that holds it as a
    partner. The value can be taken back out with `into_inner()` only after
    every other owner has released the cell.

    Examples:
        cell = SharedCell("abc")   # one owner
        cell.share()               # two owners
        cell.release()             # back to one
        cell.into_inner()          # "abc", cell is now spent
    """

    __slots__ = ("_value", "_owners")

    def __init__(self, value: T):
        self._value = value
        self._owners = 1

    @property
    def value(self) -> T:
        if self._value is _SPENT:
            raise InvariantError("Cell value was already taken")
        return self._value  # type: ignore[return-value]

    @property
    def owners(self) -> int:
        return self._owners

    @property
    def is_spent(self) -> bool:
        return self._value is _SPENT

    def share(self) -> "SharedCell[T]":
        """Register another owner and return the same cell."""
        if self._value is _SPENT:
            raise InvariantError("Cannot share a spent cell")
        self._owners += 1
        return self

    def release(self) -> None:
        """Drop one owner's reference."""
        if self._owners <= 0:
            raise InvariantError("Cell released more times than it was shared")
        self._owners -= 1

    def into_inner(self) -> T:
        """
        Take the stored value out of the cell.

        Raises:
            InvariantError: If any owner other than the caller remains, or the
                value was already taken.
        """
        if self._value is _SPENT:
            raise InvariantError("Cell value was already taken")
        if self._owners != 1:
            raise InvariantError(
                f"Cannot unwrap cell with {self._owners} owners (expected 1)"
            )
        value = self._value
        self._value = _SPENT
        self._owners = 0
        return value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self._value is _SPENT:
            return "SharedCell(<spent>)"
        return f"SharedCell({self._value!r}, owners={self._owners})"


def unwrap_pair(first: SharedCell, second: SharedCell) -> tuple:
    """
    Take the values out of a detached pair of cells.

    Both cells must already be out of both indices. Each still counts the
    companion index's reference, which is released here before unwrapping.
    """
    first.release()
    second.release()
    return first.into_inner(), second.into_inner()
