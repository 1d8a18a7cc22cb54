"""
Conversion tables for the calculator site's unit families.

Each factor says how many base units one unit represents.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from ..exceptions import InvalidConversionTableError
from ..utils.numeric_matcher import is_finite_real


def is_valid_factor(factor: Any) -> bool:
    return is_finite_real(factor) and factor != 0


class ConversionTable(Mapping[str, float]):
    """
    Read-only ``unit -> factor`` mapping for one unit family.

    Any ``Mapping`` works with ``convert_unit``; this class adds validation
    at construction time and a ``family`` label used by ``UnitRegistry``.
    """

    def __init__(self, family: str, factors: Mapping[str, float]) -> None:
        if not factors:
            raise InvalidConversionTableError(f"Conversion table '{family}' has no units")
        invalid = [unit for unit, factor in factors.items() if not is_valid_factor(factor)]
        if invalid:
            raise InvalidConversionTableError(
                f"Conversion table '{family}' has invalid factors for: {', '.join(map(str, invalid))}"
            )
        self.family = family
        self._factors = MappingProxyType({str(unit): float(factor) for unit, factor in factors.items()})

    def __getitem__(self, unit: str) -> float:
        return self._factors[unit]

    def __iter__(self) -> Iterator[str]:
        return iter(self._factors)

    def __len__(self) -> int:
        return len(self._factors)

    def __repr__(self) -> str:
        return f"ConversionTable({self.family!r}, {dict(self._factors)!r})"

    @property
    def base_unit(self) -> str:
        """The unit whose factor is 1, or the first unit if none is."""
        for unit, factor in self._factors.items():
            if math.isclose(factor, 1.0):
                return unit
        return next(iter(self._factors))


LENGTH = ConversionTable(
    "length",
    {
        "mm": 0.001,
        "cm": 0.01,
        "m": 1,
        "km": 1000,
        "in": 0.0254,
        "ft": 0.3048,
        "yd": 0.9144,
        "mi": 1609.34,
    },
)

WEIGHT = ConversionTable(
    "weight",
    {
        "mg": 0.001,
        "g": 1,
        "kg": 1000,
        "t": 1_000_000,
        "oz": 28.3495,
        "lb": 453.592,
        "st": 6350.29,
    },
)

VOLUME = ConversionTable(
    "volume",
    {
        "ml": 1,
        "l": 1000,
        "m3": 1_000_000,
        "tsp": 4.92892,
        "tbsp": 14.7868,
        "fl-oz": 29.5735,
        "cup": 236.588,
        "pt": 473.176,
        "qt": 946.353,
        "gal": 3785.41,
    },
)

AREA = ConversionTable(
    "area",
    {
        "mm2": 1e-6,
        "cm2": 1e-4,
        "m2": 1,
        "a": 100,
        "ha": 10_000,
        "km2": 1_000_000,
        "ft2": 0.09290304,
        "yd2": 0.83612736,
        "acre": 4046.8564224,
    },
)

BUILTIN_TABLES = (LENGTH, WEIGHT, VOLUME, AREA)
