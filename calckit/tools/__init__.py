"""Formula calculators used by the individual calculator pages."""

from .calculator import (
    CONCRETE_MIXES,
    CalculationResult,
    Calculator,
    CalculatorOperation,
    get_calculator,
)

__all__ = [
    "CONCRETE_MIXES",
    "CalculationResult",
    "Calculator",
    "CalculatorOperation",
    "get_calculator",
]
