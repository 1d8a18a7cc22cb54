"""Whitelisted functions and constants available inside expressions."""

from __future__ import annotations

import math
from typing import Callable, Dict, NamedTuple


class MathFunction(NamedTuple):
    arity: int
    apply: Callable[..., float]


# Allowed functions (whitelist). Names outside this table are rejected at parse time.
FUNCTIONS: Dict[str, MathFunction] = {
    "sin": MathFunction(1, math.sin),
    "cos": MathFunction(1, math.cos),
    "tan": MathFunction(1, math.tan),
    "sqrt": MathFunction(1, math.sqrt),  # ValueError for negative input
    "log": MathFunction(1, math.log),    # natural log, ValueError for x <= 0
    "pow": MathFunction(2, math.pow),
}

CONSTANTS: Dict[str, float] = {
    "PI": math.pi,
    "E": math.e,
}
