"""Unit conversion between named units of one family."""

from .config_loader import load_conversion_tables
from .converter import convert_unit
from .registry import TEMPERATURE, UnitRegistry, default_registry
from .tables import AREA, BUILTIN_TABLES, LENGTH, VOLUME, WEIGHT, ConversionTable
from .temperature import convert_temperature, normalize_temperature_unit

__all__ = [
    "convert_unit",
    "ConversionTable",
    "LENGTH",
    "WEIGHT",
    "VOLUME",
    "AREA",
    "BUILTIN_TABLES",
    "TEMPERATURE",
    "UnitRegistry",
    "default_registry",
    "convert_temperature",
    "normalize_temperature_unit",
    "load_conversion_tables",
]
