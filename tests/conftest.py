import pytest

from twowaymap import TwoWayMap


@pytest.fixture(scope="function")
def small_map() -> TwoWayMap[int, int]:
    return TwoWayMap([(1, 2), (3, 4), (5, 6)])


@pytest.fixture(scope="function")
def string_map() -> TwoWayMap[str, str]:
    return TwoWayMap([("hello", "world"), ("foo", "bar")])
