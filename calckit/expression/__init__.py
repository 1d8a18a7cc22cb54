"""Restricted arithmetic expressions: parsing, validation and evaluation."""

from .evaluator import (
    Expression,
    evaluate_math_expression,
    is_valid_math_expression,
    parse_expression,
)
from .functions import CONSTANTS, FUNCTIONS
from .parser import MAX_NESTING_DEPTH

__all__ = [
    "Expression",
    "evaluate_math_expression",
    "is_valid_math_expression",
    "parse_expression",
    "CONSTANTS",
    "FUNCTIONS",
    "MAX_NESTING_DEPTH",
]
