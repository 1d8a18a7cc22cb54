"""
Coercion of untrusted form input into numbers.

Form fields arrive as strings, and a naive ``float()`` call would accept things
a browser's ``Number()`` rejects (``"1_000"``, ``True``). Both helpers here share
one literal grammar so that ``is_valid_number(x)`` is true exactly when
``parse_number(x)`` would not fall back.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Optional

DECIMAL_LITERAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Prefixed integer literals and their bases.
PREFIXED_LITERALS = (
    (re.compile(r"0[xX][0-9a-fA-F]+"), 16),
    (re.compile(r"0[bB][01]+"), 2),
    (re.compile(r"0[oO][0-7]+"), 8),
)


def _finite(number: float) -> Optional[float]:
    return number if math.isfinite(number) else None


def _coerce_string(text: str) -> Optional[float]:
    text = text.strip()
    if not text:
        return None

    for pattern, base in PREFIXED_LITERALS:
        if pattern.fullmatch(text):
            try:
                return _finite(float(int(text, base)))
            except OverflowError:
                return None

    if DECIMAL_LITERAL.fullmatch(text):
        return _finite(float(text))
    return None


def coerce_number(value: Any) -> Optional[float]:
    """
    Convert ``value`` to a finite float, or return ``None``.

    Accepted: ``int``, ``float``, ``Decimal`` and numeric strings (decimal,
    exponent, ``0x``/``0b``/``0o`` prefixed). Rejected: ``None``, ``bool``,
    empty strings, containers and every other type, plus NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return _coerce_string(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        return _finite(float(value))
    if isinstance(value, (int, float)):
        try:
            return _finite(float(value))
        except OverflowError:
            return None
    return None


def is_valid_number(value: Any) -> bool:
    return coerce_number(value) is not None


def parse_number(value: Any, fallback: float = 0) -> float:
    """
    Parse ``value`` into a float, returning ``fallback`` when it is not a
    finite number. Surrounding whitespace is ignored. Never raises.
    """
    number = coerce_number(value)
    if number is None:
        return fallback
    return number
