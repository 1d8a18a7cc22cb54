"""
calckit: numeric helpers behind the calculator pages.

Parsing and validating form input, rounding and formatting results,
percentage math, restricted formula evaluation, unit conversion, number
ranges and the per-page formula calculators.
"""

from .exceptions import (
    CalckitError,
    ConfigError,
    ExpressionError,
    ExpressionEvaluationError,
    ExpressionSyntaxError,
    InvalidConversionTableError,
    NonFiniteNumberError,
)
from .expression import (
    Expression,
    evaluate_math_expression,
    is_valid_math_expression,
    parse_expression,
)
from .numeric import (
    NumberFormat,
    calculate_percentage,
    calculate_percentage_change,
    format_number,
    format_number_with_commas,
    is_valid_number,
    number_range,
    parse_number,
    percentage_of,
    round_number,
    whole_from_percentage,
)
from .tools import CalculationResult, Calculator, get_calculator
from .units import (
    ConversionTable,
    UnitRegistry,
    convert_temperature,
    convert_unit,
    default_registry,
)

__version__ = "0.1.0"

__all__ = [
    "CalckitError",
    "ConfigError",
    "ExpressionError",
    "ExpressionEvaluationError",
    "ExpressionSyntaxError",
    "InvalidConversionTableError",
    "NonFiniteNumberError",
    "Expression",
    "evaluate_math_expression",
    "is_valid_math_expression",
    "parse_expression",
    "NumberFormat",
    "calculate_percentage",
    "calculate_percentage_change",
    "format_number",
    "format_number_with_commas",
    "is_valid_number",
    "number_range",
    "parse_number",
    "percentage_of",
    "round_number",
    "whole_from_percentage",
    "CalculationResult",
    "Calculator",
    "get_calculator",
    "ConversionTable",
    "UnitRegistry",
    "convert_temperature",
    "convert_unit",
    "default_registry",
]
