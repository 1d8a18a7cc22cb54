from __future__ import annotations

import logging
import math
from typing import List

from ..utils.numeric_matcher import is_finite_real

logger = logging.getLogger(__name__)

MAX_RANGE_LENGTH = 1_000_000

# Relative slack when deciding whether ``end`` is reached by a fractional step.
STEP_TOLERANCE = 1e-9


def number_range(start: float, end: float, step: float = 1) -> List[float]:
    """
    Inclusive arithmetic sequence from ``start`` towards ``end``.

    ``number_range(0, 1, 0.25) == [0, 0.25, 0.5, 0.75, 1.0]``. A misconfigured
    range (zero step, step pointing away from ``end``, non-finite bounds)
    yields an empty list instead of raising.
    """
    if not (is_finite_real(start) and is_finite_real(end) and is_finite_real(step)):
        return []
    if step == 0:
        return []
    if start == end:
        return [start]
    if (step > 0 and start > end) or (step < 0 and start < end):
        return []

    # Spans wider than the float range, or tiny steps, overflow here.
    try:
        steps = (end - start) / step
    except OverflowError:
        steps = math.inf
    if math.isfinite(steps) and steps < MAX_RANGE_LENGTH:
        count = math.floor(steps + STEP_TOLERANCE * max(1.0, abs(steps))) + 1
    else:
        count = MAX_RANGE_LENGTH + 1
    if count > MAX_RANGE_LENGTH:
        logger.warning(
            "Range %s..%s step %s exceeds %d elements, truncating",
            start, end, step, MAX_RANGE_LENGTH,
        )
        count = MAX_RANGE_LENGTH

    return [start + i * step for i in range(count)]
