"""Tests for OrderedIndex, bounds and the search helpers."""

import pytest
from sortedcontainers import SortedKeyList

from twowaymap import UNBOUNDED, Excluded, Included, InvariantError, OrderedIndex, SharedCell
from twowaymap.bounds import as_end, as_start
from twowaymap.lib.index_helpers import find_position, range_positions, same_key


def _keys(*keys) -> SortedKeyList:
    return SortedKeyList(keys, key=lambda k: k)


def _index(*pairs, key=None) -> OrderedIndex:
    index = OrderedIndex(key)
    for k, v in pairs:
        index.insert(SharedCell(k), SharedCell(v))
    return index


class TestHelpers:
    def test_same_key_is_order_equivalence(self):
        assert same_key(1, 1)
        assert same_key(1, 1.0)
        assert not same_key(1, 2)

    def test_find_position(self):
        keys = _keys(1, 3, 5)
        assert find_position(keys, 3) == 1
        assert find_position(keys, 4) is None
        assert find_position(keys, 6) is None
        assert find_position(_keys(), 1) is None

    @pytest.mark.parametrize(
        "start,end,expected",
        [
            (UNBOUNDED, UNBOUNDED, (0, 5)),
            (Included(3), Included(7), (1, 4)),
            (Excluded(3), Included(7), (2, 4)),
            (Included(3), Excluded(7), (1, 3)),
            (Excluded(3), Excluded(7), (2, 3)),
            (Included(4), UNBOUNDED, (2, 5)),
            (UNBOUNDED, Excluded(1), (0, 0)),
            (Included(8), Included(2), (4, 4)),
        ],
    )
    def test_range_positions(self, start, end, expected):
        assert range_positions(_keys(1, 3, 5, 7, 9), start, end) == expected

    def test_range_positions_rejects_non_bound(self):
        with pytest.raises(TypeError):
            range_positions(_keys(1, 2), 1, UNBOUNDED)

    def test_bare_values_are_half_open(self):
        assert as_start(1) == Included(1)
        assert as_end(1) == Excluded(1)
        assert as_start(Excluded(1)) == Excluded(1)
        assert as_end(UNBOUNDED) is UNBOUNDED


class TestOrderedIndex:
    def test_keeps_keys_sorted(self):
        index = _index((5, "e"), (1, "a"), (3, "c"))
        assert list(index.keys()) == [1, 3, 5]
        assert len(index) == 3

    def test_get_and_contains(self):
        index = _index((1, "a"), (2, "b"))
        assert index.get(2).value == "b"
        assert index.get(3) is None
        assert index.contains(1)
        assert not index.contains(0)

    def test_duplicate_insert_is_invariant_error(self):
        index = _index((1, "a"))
        with pytest.raises(InvariantError):
            index.insert(SharedCell(1), SharedCell("z"))
        assert index.get(1).value == "a"

    def test_pop(self):
        index = _index((1, "a"), (2, "b"))
        key_cell, value_cell = index.pop(1)
        assert (key_cell.value, value_cell.value) == (1, "a")
        assert index.pop(1) is None
        assert list(index.keys()) == [2]

    def test_pop_cell_requires_identical_cell(self):
        index = _index((1, "a"))
        with pytest.raises(InvariantError):
            index.pop_cell(SharedCell(1))
        key_cell, _ = index.entry_at(0)
        assert index.pop_cell(key_cell).value == "a"
        assert len(index) == 0

    def test_keep_only(self):
        index = _index((1, "a"), (2, "b"), (3, "c"))
        dropped = index.keep_only(lambda k, _: k.value != 2)
        assert [(k.value, v.value) for k, v in dropped] == [(2, "b")]
        assert list(index.keys()) == [1, 3]

    def test_entries_detects_mutation(self):
        index = _index((1, "a"), (2, "b"))
        entries = index.entries()
        next(entries)
        index.pop(2)
        with pytest.raises(RuntimeError):
            next(entries)

    def test_entries_bound_to_state_at_creation(self):
        index = _index((1, "a"), (2, "b"))
        entries = index.entries()
        index.clear()
        with pytest.raises(RuntimeError):
            next(entries)

    def test_pop_first(self):
        index = _index((3, "c"), (1, "a"), (2, "b"))
        key_cell, value_cell = index.pop_first()
        assert (key_cell.value, value_cell.value) == (1, "a")
        assert list(index.keys()) == [2, 3]

    def test_pop_first_on_empty_raises(self):
        with pytest.raises(IndexError):
            OrderedIndex().pop_first()

    def test_get_entry_does_not_remove(self):
        index = _index((1, "a"))
        key_cell, value_cell = index.get_entry(1)
        assert (key_cell.value, value_cell.value) == (1, "a")
        assert index.get_entry(2) is None
        assert len(index) == 1

    def test_reverse_entries(self):
        index = _index((1, "a"), (2, "b"), (3, "c"))
        assert [k.value for k, _ in index.entries(reverse=True)] == [3, 2, 1]
        assert [k.value for k, _ in index.entries(0, 2, reverse=True)] == [2, 1]

    def test_projection(self):
        index = _index(("apple", 1), ("Banana", 2), key=str.lower)
        assert list(index.keys()) == ["apple", "Banana"]
        assert index.get("banana").value == 2
        assert index.project("CHERRY") == "cherry"

    def test_projection_must_be_callable(self):
        with pytest.raises(TypeError):
            OrderedIndex(key="not callable")

    def test_version_bumps_on_mutation(self):
        index = OrderedIndex()
        before = index.version
        index.insert(SharedCell(1), SharedCell(2))
        assert index.version > before

    def test_repr(self):
        assert repr(_index((1, "a"))) == "OrderedIndex({1: 'a'})"
