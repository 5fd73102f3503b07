"""
Range bounds for ordered range queries.
"""

from enum import Enum
from typing import Any


class Bound:
    """Base class for one edge of a range query."""

    __slots__ = ()


class Included(Bound):
    """
    Edge that includes its value.

    Examples:
        m.left_range(Included(1), Included(3))   # 1 <= left <= 3
    """

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"Included({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Included):
            return self.value == other.value
        return False

    def __hash__(self) -> int:
        return hash((Included, self.value))


class Excluded(Bound):
    """
    Edge that excludes its value.

    Examples:
        m.left_range(Excluded(1), Excluded(3))   # 1 < left < 3
    """

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"Excluded({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Excluded):
            return self.value == other.value
        return False

    def __hash__(self) -> int:
        return hash((Excluded, self.value))


class _Unbounded(Bound, Enum):
    """Edge with no limit on its side of the range."""

    UNBOUNDED = "unbounded"

    def __repr__(self) -> str:
        return "UNBOUNDED"


UNBOUNDED = _Unbounded.UNBOUNDED


def as_start(bound: Any) -> Bound:
    """Normalize a range start; bare values are inclusive."""
    if isinstance(bound, Bound):
        return bound
    return Included(bound)


def as_end(bound: Any) -> Bound:
    """Normalize a range end; bare values are exclusive."""
    if isinstance(bound, Bound):
        return bound
    return Excluded(bound)
