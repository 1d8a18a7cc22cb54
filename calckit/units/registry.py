from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..utils.numeric_matcher import is_finite_real
from .config_loader import load_conversion_tables
from .converter import convert_unit
from .tables import BUILTIN_TABLES, ConversionTable
from .temperature import convert_temperature, normalize_temperature_unit

logger = logging.getLogger(__name__)

TEMPERATURE = "temperature"


class UnitRegistry:
    """
    A set of conversion tables keyed by family, plus temperature.

    ``convert`` finds the family of both units and refuses (returns None) to
    convert across families, which a single ``convert_unit`` table cannot
    detect on its own.
    """

    def __init__(self, tables: Iterable[ConversionTable] = BUILTIN_TABLES) -> None:
        self._tables: Dict[str, ConversionTable] = {}
        for table in tables:
            self.register(table)

    def register(self, table: ConversionTable) -> None:
        """
        Add a family, or extend an existing one with more units. Extra units
        must use the same base unit as the family they extend.
        """
        existing = self._tables.get(table.family)
        if existing is not None:
            table = ConversionTable(table.family, {**existing, **table})
        self._tables[table.family] = table
        logger.debug("Registered unit family %s with %d units", table.family, len(table))

    @property
    def families(self) -> List[str]:
        return [*self._tables, TEMPERATURE]

    def table(self, family: str) -> Optional[ConversionTable]:
        return self._tables.get(family)

    def family_of(self, unit: str) -> Optional[str]:
        for family, table in self._tables.items():
            if unit in table:
                return family
        if normalize_temperature_unit(unit) is not None:
            return TEMPERATURE
        return None

    def convert(
        self,
        value: float,
        from_unit: str,
        to_unit: str,
        family: Optional[str] = None,
    ) -> Optional[float]:
        if not is_finite_real(value):
            return None

        if family is None:
            from_family = self.family_of(from_unit)
            to_family = self.family_of(to_unit)
            if from_family is None or from_family != to_family:
                logger.debug(
                    "Cannot convert %s (%s) to %s (%s)", from_unit, from_family, to_unit, to_family
                )
                return None
            family = from_family

        if family == TEMPERATURE:
            return convert_temperature(value, from_unit, to_unit)
        table = self._tables.get(family)
        if table is None:
            return None
        return convert_unit(value, from_unit, to_unit, table)


def default_registry(units_file: Optional[str | Path] = None) -> UnitRegistry:
    """Built-in families, extended with those from ``units_file`` when given."""
    registry = UnitRegistry()
    if units_file:
        for table in load_conversion_tables(units_file).values():
            registry.register(table)
    return registry
