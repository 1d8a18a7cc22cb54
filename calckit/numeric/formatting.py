"""
Rounding and string rendering of numbers that already passed validation.

Rounding works on the shortest decimal representation of a float (``repr``),
so ``1.005`` rounds to ``1.01`` the way a reader expects, not to ``1.0`` as the
binary value ``1.00499999...`` would suggest. Rounding is half away from zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import ClassVar, Dict, Optional, Union

from ..exceptions import NonFiniteNumberError

Number = Union[int, float, Decimal]


@dataclass(frozen=True)
class NumberFormat:
    """Separators used when rendering grouped numbers."""

    group_separator: str = ","
    decimal_separator: str = "."

    EN: ClassVar["NumberFormat"]
    CS: ClassVar["NumberFormat"]

    @classmethod
    def for_locale(cls, locale: str) -> "NumberFormat":
        """Look up a preset by locale tag (``"cs"``, ``"cs-CZ"``, ``"en_US"``)."""
        language = locale.replace("_", "-").split("-")[0].lower()
        try:
            return LOCALE_FORMATS[language]
        except KeyError:
            raise ValueError(f"No number format registered for locale '{locale}'") from None


NumberFormat.EN = NumberFormat(",", ".")
NumberFormat.CS = NumberFormat("\u00a0", ",")

LOCALE_FORMATS: Dict[str, NumberFormat] = {
    "en": NumberFormat.EN,
    "cs": NumberFormat.CS,
    "sk": NumberFormat.CS,
    "de": NumberFormat(".", ","),
    "fr": NumberFormat("\u202f", ","),
}


def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ValueError(f"decimals must be a non-negative integer, got {decimals!r}")


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(repr(float(value)))


def _quantize(value: Number, decimals: int) -> Decimal:
    exact = _to_decimal(value)
    with localcontext() as ctx:
        # quantize() needs every integer digit plus the requested fraction digits
        ctx.prec = max(28, exact.adjusted() + decimals + 2)
        return exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def _require_finite(value: object) -> Number:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise NonFiniteNumberError(f"Cannot format non-numeric value {value!r}")
    if isinstance(value, Decimal):
        finite = value.is_finite()
    else:
        finite = isinstance(value, int) or math.isfinite(value)
    if not finite:
        raise NonFiniteNumberError("Cannot format non-finite number")
    return value


def _trim_fraction(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def round_number(value: float, decimals: int = 2) -> float:
    """Round half away from zero. NaN and infinities are returned unchanged."""
    _check_decimals(decimals)
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise TypeError(f"Cannot round non-numeric value {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            return float(value)
    elif isinstance(value, float) and not math.isfinite(value):
        return value
    return float(_quantize(value, decimals))


def format_number(value: float, decimals: int = 2) -> str:
    """
    Round ``value`` to ``decimals`` places and render it without trailing zeros.

    >>> format_number(123.4567)
    '123.46'
    >>> format_number(123.9999)
    '124'

    Raises NonFiniteNumberError for NaN, infinities and non-numbers: callers are
    expected to have validated input with ``is_valid_number`` first.
    """
    _check_decimals(decimals)
    number = _require_finite(value)
    return _trim_fraction(format(_quantize(number, decimals), "f"))


def format_number_with_commas(
    value: float,
    decimals: int = 2,
    number_format: Optional[NumberFormat] = None,
) -> str:
    """
    Render ``value`` with thousands grouping and at most ``decimals`` fraction
    digits, e.g. ``1234.56 -> "1,234.56"`` and ``1000 -> "1,000"``.

    ``number_format`` selects the separators; English style is the default.
    """
    _check_decimals(decimals)
    number = _require_finite(value)
    fmt = number_format or NumberFormat.EN
    text = _trim_fraction(format(_quantize(number, decimals), ",f"))
    if fmt == NumberFormat.EN:
        return text
    return text.translate({ord(","): fmt.group_separator, ord("."): fmt.decimal_separator})
