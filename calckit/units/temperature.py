"""Temperature needs an offset as well as a factor, so it has no ConversionTable."""

from __future__ import annotations

from typing import Dict, Optional

from ..utils.numeric_matcher import is_finite_real

ABSOLUTE_ZERO_C = -273.15

# Accepted spellings, normalized to "C", "F" or "K".
TEMPERATURE_ALIASES: Dict[str, str] = {
    "c": "C",
    "°c": "C",
    "celsius": "C",
    "f": "F",
    "°f": "F",
    "fahrenheit": "F",
    "k": "K",
    "kelvin": "K",
}


def normalize_temperature_unit(unit: str) -> Optional[str]:
    if not isinstance(unit, str):
        return None
    return TEMPERATURE_ALIASES.get(unit.strip().lower())


def convert_temperature(value: float, from_unit: str, to_unit: str) -> Optional[float]:
    """Convert between Celsius, Fahrenheit and Kelvin. Unknown units give None."""
    source = normalize_temperature_unit(from_unit)
    target = normalize_temperature_unit(to_unit)
    if source is None or target is None or not is_finite_real(value):
        return None
    if source == target:
        return value

    if source == "F":
        celsius = (value - 32) * 5 / 9
    elif source == "K":
        celsius = value + ABSOLUTE_ZERO_C
    else:
        celsius = value

    if target == "F":
        return celsius * 9 / 5 + 32
    if target == "K":
        return celsius - ABSOLUTE_ZERO_C
    return celsius
