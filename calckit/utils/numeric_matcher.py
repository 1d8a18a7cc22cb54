from __future__ import annotations

import math
from typing import Any


def within_tolerance(
    a: float,
    b: float,
    rel_tolerance: float = 1e-9,
    abs_tolerance: float = 1e-12,
) -> bool:
    if a == b:
        return True
    if abs(a - b) <= abs_tolerance:
        return True
    if b != 0 and abs(a - b) / abs(b) <= rel_tolerance:
        return True
    return False


def is_finite_real(value: Any) -> bool:
    """
    True for int/float values that are finite. ``bool`` is not a number here,
    and neither is an int too large to convert to float.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False
