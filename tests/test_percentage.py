import math

from calckit.numeric.percentage import (
    calculate_percentage,
    calculate_percentage_change,
    percentage_of,
    whole_from_percentage,
)


def test_calculate_percentage():
    assert calculate_percentage(10, 100) == 10
    assert calculate_percentage(200, 100) == 200
    assert calculate_percentage(-10, 100) == -10
    assert calculate_percentage(50, 200) == 100
    assert calculate_percentage(0, 100) == 0


def test_calculate_percentage_propagates_non_finite():
    assert calculate_percentage(float("inf"), 100) == float("inf")
    assert calculate_percentage(10, float("-inf")) == float("-inf")
    assert math.isnan(calculate_percentage(float("nan"), 5))


def test_calculate_percentage_change():
    assert calculate_percentage_change(100, 150) == 50
    assert calculate_percentage_change(100, 50) == -50
    assert calculate_percentage_change(100, 100) == 0


def test_percentage_change_without_baseline_is_zero():
    assert calculate_percentage_change(0, 100) == 0
    assert calculate_percentage_change(0, 0) == 0


def test_percentage_change_uses_absolute_baseline():
    assert calculate_percentage_change(-50, -25) == 50
    assert calculate_percentage_change(-50, -100) == -100


def test_percentage_change_ieee_propagation():
    assert calculate_percentage_change(100, float("inf")) == float("inf")
    assert math.isnan(calculate_percentage_change(float("inf"), float("inf")))
    assert math.isnan(calculate_percentage_change(float("nan"), 1))


def test_percentage_of_and_whole():
    assert percentage_of(25, 200) == 12.5
    assert percentage_of(5, 0) == 0
    assert whole_from_percentage(20, 10) == 200
    assert whole_from_percentage(20, 0) == 0
