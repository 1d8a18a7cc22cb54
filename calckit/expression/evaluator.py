"""
Safe evaluation of calculator formulas such as ``"2 * PI * r"``.

Expressions are parsed into a small syntax tree and evaluated by walking it.
Nothing is ever handed to ``eval``: names resolve only against the caller's
bindings and the ``CONSTANTS`` table, and calls only reach ``FUNCTIONS``.

Usage:
    from calckit.expression import evaluate_math_expression

    evaluate_math_expression("a * (1 + b / 100)", {"a": 1200, "b": 21})  # 1452.0
    evaluate_math_expression("1 / 0")                                     # None
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Mapping, Optional, Tuple

from ..exceptions import ExpressionError, ExpressionEvaluationError, ExpressionSyntaxError
from ..utils.numeric_matcher import is_finite_real
from .functions import CONSTANTS, FUNCTIONS
from .parser import BinaryOp, Call, Name, Node, Number, UnaryOp, parse

logger = logging.getLogger(__name__)


def _collect_names(root: Node) -> Iterable[str]:
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Name):
            yield node.name
        elif isinstance(node, UnaryOp):
            stack.append(node.operand)
        elif isinstance(node, BinaryOp):
            stack.append(node.right)
            stack.append(node.left)
        elif isinstance(node, Call):
            stack.extend(reversed(node.args))


def _checked(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise ExpressionEvaluationError(f"{what} produced a non-finite result")
    return value


@dataclass(frozen=True)
class Expression:
    """A parsed expression. Immutable and safe to share between callers."""

    source: str
    root: Node = field(repr=False)

    @property
    def names(self) -> Tuple[str, ...]:
        """Referenced names that are not built-in constants, in first-use order."""
        seen = dict.fromkeys(_collect_names(self.root))
        return tuple(name for name in seen if name not in CONSTANTS)

    def evaluate(self, variables: Optional[Mapping[str, float]] = None) -> float:
        """
        Evaluate against ``variables``. Raises ExpressionEvaluationError for
        unknown names, non-numeric bindings and non-finite or undefined results.
        """
        if variables is None:
            variables = {}
        elif not isinstance(variables, Mapping):
            raise ExpressionEvaluationError("Variables must be a mapping of names to numbers")
        return float(self._eval(self.root, variables))

    def _eval(self, node: Node, variables: Mapping[str, float]) -> float:
        if isinstance(node, Number):
            return node.value

        if isinstance(node, Name):
            if node.name in variables:
                value = variables[node.name]
                if not is_finite_real(value):
                    raise ExpressionEvaluationError(
                        f"Variable '{node.name}' is not a finite number: {value!r}"
                    )
                return float(value)
            if node.name in CONSTANTS:
                return CONSTANTS[node.name]
            raise ExpressionEvaluationError(f"Unknown variable '{node.name}'")

        if isinstance(node, UnaryOp):
            operand = self._eval(node.operand, variables)
            return -operand if node.op == "-" else operand

        if isinstance(node, BinaryOp):
            # "1 + 2 + 3 ..." parses into a left-deep chain of any length; fold it
            # from the bottom instead of recursing once per operator.
            chain = []
            while isinstance(node, BinaryOp):
                chain.append(node)
                node = node.left
            value = self._eval(node, variables)
            for link in reversed(chain):
                right = self._eval(link.right, variables)
                value = _checked(self._apply_operator(link.op, value, right), f"'{link.op}'")
            return value

        if isinstance(node, Call):
            args = [self._eval(arg, variables) for arg in node.args]
            try:
                result = FUNCTIONS[node.function].apply(*args)
            except (ValueError, ArithmeticError) as exc:
                raise ExpressionEvaluationError(f"{node.function}() failed: {exc}") from exc
            return _checked(result, f"{node.function}()")

        raise ExpressionEvaluationError(f"Unsupported node {type(node).__name__}")

    @staticmethod
    def _apply_operator(op: str, left: float, right: float) -> float:
        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op == "/":
            if right == 0:
                raise ExpressionEvaluationError("Division by zero")
            return left / right
        if op == "^":
            try:
                return math.pow(left, right)
            except (ValueError, ArithmeticError) as exc:
                raise ExpressionEvaluationError(f"{left} ^ {right} is undefined") from exc
        raise ExpressionEvaluationError(f"Unknown operator {op!r}")


@lru_cache(maxsize=256)
def parse_expression(text: str) -> Expression:
    """Parse ``text`` into an Expression. Raises ExpressionSyntaxError."""
    if not isinstance(text, str):
        raise ExpressionSyntaxError("Expression must be a string")
    return Expression(source=text, root=parse(text))


def is_valid_math_expression(
    expression: str,
    allowed_names: Optional[Iterable[str]] = None,
) -> bool:
    """
    True iff ``expression`` is a non-blank string in the arithmetic grammar.

    With ``allowed_names``, every referenced variable must also be listed there
    (built-in constants are always allowed).
    """
    if not isinstance(expression, str) or not expression.strip():
        return False
    try:
        parsed = parse_expression(expression)
    except (ExpressionSyntaxError, RecursionError):
        return False
    if allowed_names is not None:
        return set(parsed.names) <= set(allowed_names)
    return True


def evaluate_math_expression(
    expression: str,
    variables: Optional[Mapping[str, float]] = None,
) -> Optional[float]:
    """Evaluate ``expression``; returns ``None`` instead of raising on any failure."""
    if not isinstance(expression, str):
        return None
    try:
        return parse_expression(expression).evaluate(variables)
    except (ExpressionError, RecursionError) as exc:
        logger.debug("Could not evaluate %r: %s", expression, exc)
        return None
