"""Exception hierarchy shared across calckit."""

from __future__ import annotations


class CalckitError(Exception):
    """Base class for all calckit errors."""


class NonFiniteNumberError(CalckitError, ValueError):
    """Raised when a formatter receives NaN, Infinity or a non-number."""


class ExpressionError(CalckitError):
    """Base class for expression parsing and evaluation failures."""


class ExpressionSyntaxError(ExpressionError):
    """The expression text does not match the supported grammar."""

    def __init__(self, message: str, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)
        self.position = position


class ExpressionEvaluationError(ExpressionError):
    """A well-formed expression could not be reduced to a finite number."""


class InvalidConversionTableError(CalckitError, ValueError):
    """A conversion table contains no units or an unusable factor."""


class ConfigError(CalckitError):
    """An environment or file based setting has an invalid value."""
