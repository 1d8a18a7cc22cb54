from __future__ import annotations

import math
from typing import Mapping, Optional

from ..utils.numeric_matcher import is_finite_real
from .tables import is_valid_factor


def convert_unit(
    value: float,
    from_unit: str,
    to_unit: str,
    rates: Optional[Mapping[str, float]],
) -> Optional[float]:
    """
    Convert ``value`` between two units of the same family.

    ``rates`` maps each unit to the number of base units it represents, so the
    result is ``value * rates[from_unit] / rates[to_unit]``. Returns ``None``
    when either unit is missing from ``rates`` (unknown or incompatible units),
    when a factor is unusable, or when ``value`` is not a finite number.
    Converting a unit to itself returns ``value`` even if the unit is unknown.
    """
    if not isinstance(rates, Mapping) or not is_finite_real(value):
        return None
    if from_unit == to_unit:
        return value

    from_rate = rates.get(from_unit)
    to_rate = rates.get(to_unit)
    if not (is_valid_factor(from_rate) and is_valid_factor(to_rate)):
        return None

    result = value * from_rate / to_rate
    if not math.isfinite(result):
        return None
    return result
