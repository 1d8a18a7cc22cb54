import logging

import pytest

from calckit.numeric import ranges
from calckit.numeric.ranges import number_range


def test_ascending_and_descending():
    assert number_range(1, 5) == [1, 2, 3, 4, 5]
    assert number_range(0, 10, 2) == [0, 2, 4, 6, 8, 10]
    assert number_range(5, 1, -1) == [5, 4, 3, 2, 1]


def test_end_not_on_step_is_excluded():
    assert number_range(1, 5.5) == [1, 2, 3, 4, 5]


def test_fractional_step_includes_end():
    assert number_range(0, 1, 0.25) == [0, 0.25, 0.5, 0.75, 1.0]
    values = number_range(0, 1, 0.1)
    assert len(values) == 11
    assert values[-1] == pytest.approx(1.0)


def test_single_element_when_bounds_equal():
    assert number_range(3, 3) == [3]


@pytest.mark.parametrize(
    "start,end,step",
    [
        (1, 5, -1),
        (5, 1, 1),
        (1, 5, 0),
        (float("nan"), 5, 1),
        (1, float("inf"), 1),
        (1, 5, float("inf")),
        ("1", 5, 1),
        (True, 5, 1),
    ],
)
def test_misconfigured_ranges_are_empty(start, end, step):
    assert number_range(start, end, step) == []


def test_long_ranges_are_truncated(monkeypatch, caplog):
    monkeypatch.setattr(ranges, "MAX_RANGE_LENGTH", 10)
    with caplog.at_level(logging.WARNING, logger="calckit.numeric.ranges"):
        values = number_range(0, 100)
    assert values == list(range(10))
    assert "truncating" in caplog.text


@pytest.mark.parametrize(
    "start,end,step",
    [
        (-1e308, 1e308, 1e307),
        (0, 1, 5e-324),
        (-(10**308), 10**308, 1),
    ],
)
def test_spans_beyond_float_range_are_truncated(monkeypatch, start, end, step):
    monkeypatch.setattr(ranges, "MAX_RANGE_LENGTH", 5)
    values = number_range(start, end, step)
    assert len(values) == 5
    assert values[0] == start
    assert values[1] == start + step


def test_integer_bounds_beyond_float_range_are_empty():
    assert number_range(0, 10**400) == []
    assert number_range(10**400, 0, -1) == []
