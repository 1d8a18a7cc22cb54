"""Percentage arithmetic. Inputs are not validated; NaN and inf propagate."""

from __future__ import annotations


def calculate_percentage(percentage: float, base: float) -> float:
    """``percentage`` percent of ``base``: ``calculate_percentage(10, 200) == 20``."""
    return (percentage / 100) * base


def calculate_percentage_change(old_value: float, new_value: float) -> float:
    """
    Relative change from ``old_value`` to ``new_value`` in percent.

    The change is measured against ``abs(old_value)`` so that moving from -50
    to -25 is reported as growth. A zero baseline reports no change (0.0).
    """
    if old_value == 0:
        return 0.0
    return ((new_value - old_value) / abs(old_value)) * 100


def percentage_of(part: float, whole: float) -> float:
    """What percent of ``whole`` is ``part``. Zero ``whole`` gives 0.0."""
    if whole == 0:
        return 0.0
    return (part / whole) * 100


def whole_from_percentage(part: float, percentage: float) -> float:
    """``part`` is ``percentage`` percent of what? Zero ``percentage`` gives 0.0."""
    if percentage == 0:
        return 0.0
    return part * 100 / percentage
