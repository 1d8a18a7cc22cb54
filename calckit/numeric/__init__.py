"""Numeric coercion, formatting, percentage and range helpers."""

from .coercion import coerce_number, is_valid_number, parse_number
from .formatting import (
    NumberFormat,
    format_number,
    format_number_with_commas,
    round_number,
)
from .percentage import (
    calculate_percentage,
    calculate_percentage_change,
    percentage_of,
    whole_from_percentage,
)
from .ranges import MAX_RANGE_LENGTH, number_range

__all__ = [
    "coerce_number",
    "is_valid_number",
    "parse_number",
    "NumberFormat",
    "format_number",
    "format_number_with_commas",
    "round_number",
    "calculate_percentage",
    "calculate_percentage_change",
    "percentage_of",
    "whole_from_percentage",
    "MAX_RANGE_LENGTH",
    "number_range",
]
