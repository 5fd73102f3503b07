"""Property-based tests for the bijection invariant."""

from hypothesis import given
from hypothesis import strategies as st

from twowaymap import Excluded, Included, TwoWayMap

small_ints = st.integers(min_value=0, max_value=20)


@st.composite
def operations(draw):
    """Generate a sequence of mutating operations on a TwoWayMap."""
    ops = []
    for _ in range(draw(st.integers(min_value=0, max_value=40))):
        kind = draw(st.sampled_from(["insert", "insert_no_overwrite", "remove_left", "remove_right"]))
        if kind.startswith("insert"):
            ops.append((kind, draw(small_ints), draw(small_ints)))
        else:
            ops.append((kind, draw(small_ints)))
    return ops


def _apply(m: TwoWayMap, model: dict, op: tuple) -> None:
    """Apply op to both the map and a plain-dict reference model."""
    kind = op[0]
    if kind == "insert":
        _, left, right = op
        model.pop(left, None)
        for k in [k for k, v in model.items() if v == right]:
            del model[k]
        model[left] = right
        m.insert(left, right)
    elif kind == "insert_no_overwrite":
        _, left, right = op
        result = m.insert_no_overwrite(left, right)
        if left in model or right in model.values():
            assert result.is_err()
            assert result.error == (left, right)
        else:
            assert result.is_ok()
            model[left] = right
    elif kind == "remove_left":
        _, left = op
        expected = (left, model.pop(left)) if left in model else None
        assert m.remove_by_left(left) == expected
    else:
        _, right = op
        owners = [k for k, v in model.items() if v == right]
        expected = (right, model.pop(owners[0])) if owners else None
        assert m.remove_by_right(right) == expected


class TestPropertyBased:
    @given(operations())
    def test_bijection_holds_after_every_operation(self, ops):
        m = TwoWayMap()
        model: dict[int, int] = {}
        for op in ops:
            _apply(m, model, op)
            m.verify()
            assert list(m) == sorted(model.items())
            assert len(m.left_values()) == len(m.right_values()) == len(model)
            for left, right in m:
                assert m.get_by_right(right) == left

    @given(st.lists(st.tuples(small_ints, small_ints)))
    def test_from_pairs_matches_sequential_inserts(self, pairs):
        built = TwoWayMap(pairs)
        manual = TwoWayMap()
        for left, right in pairs:
            manual.insert(left, right)
        assert built == manual
        built.verify()

    @given(st.lists(st.tuples(small_ints, small_ints)), small_ints, small_ints, st.booleans(), st.booleans())
    def test_range_matches_filter(self, pairs, lo, hi, lo_inclusive, hi_inclusive):
        m = TwoWayMap(pairs)
        start = Included(lo) if lo_inclusive else Excluded(lo)
        end = Included(hi) if hi_inclusive else Excluded(hi)

        def in_range(value: int) -> bool:
            above = value >= lo if lo_inclusive else value > lo
            below = value <= hi if hi_inclusive else value < hi
            return above and below

        assert list(m.left_range(start, end)) == [p for p in m if in_range(p[0])]
        expected_right = sorted((right, left) for left, right in m if in_range(right))
        assert list(m.right_range(start, end)) == expected_right

    @given(st.lists(st.tuples(small_ints, small_ints)))
    def test_drain_yields_every_pair_once(self, pairs):
        m = TwoWayMap(pairs)
        expected = list(m)
        assert list(m.drain()) == expected
        assert len(m) == 0

    @given(st.lists(st.tuples(small_ints, small_ints)))
    def test_retain_keeps_matching_pairs(self, pairs):
        m = TwoWayMap(pairs)
        expected = [(left, right) for left, right in m if (left + right) % 3 == 0]
        m.retain(lambda left, right: (left + right) % 3 == 0)
        assert list(m) == expected
        m.verify()
