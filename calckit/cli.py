"""
Command line front end for calckit.

Examples:
    calckit eval "2 * PI * r" -v r=1.5
    calckit convert 5 km mi
    calckit format 1234567.891 --grouped --locale cs
    calckit range 0 1 0.25
    calckit calc irr cash_flows=-1000,300,400,500
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Sequence

from .config import Settings, get_settings
from .exceptions import CalckitError
from .expression import evaluate_math_expression
from .numeric import (
    NumberFormat,
    coerce_number,
    format_number,
    format_number_with_commas,
    number_range,
)
from .tools import get_calculator
from .units import default_registry
from .utils import setup_logging


class CommandError(CalckitError):
    """User-facing CLI failure; printed without a traceback."""


def _number(text: str, what: str) -> float:
    value = coerce_number(text)
    if value is None:
        raise CommandError(f"{what} is not a valid number: {text!r}")
    return value


def _parse_assignments(pairs: Sequence[str]) -> Dict[str, str]:
    assignments: Dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise CommandError(f"Expected name=value, got {pair!r}")
        assignments[name.strip()] = value.strip()
    return assignments


def _calc_argument(text: str) -> Any:
    """Numbers, comma separated number lists and booleans; anything else stays a string."""
    lowered = text.lower()
    if lowered in ("true", "yes"):
        return True
    if lowered in ("false", "no"):
        return False
    number = coerce_number(text)
    if number is not None:
        return int(number) if number.is_integer() and "." not in text and "e" not in lowered else number
    if "," in text:
        items = [coerce_number(item) for item in text.split(",")]
        if all(item is not None for item in items):
            return items
    return text


def _render(value: float, settings: Settings) -> str:
    return format_number(value, settings.default_decimals)


def cmd_eval(args: argparse.Namespace, settings: Settings) -> str:
    variables = {
        name: _number(value, f"Variable '{name}'")
        for name, value in _parse_assignments(args.var).items()
    }
    result = evaluate_math_expression(args.expression, variables)
    if result is None:
        raise CommandError(f"Could not evaluate expression: {args.expression!r}")
    return _render(result, settings)


def cmd_convert(args: argparse.Namespace, settings: Settings) -> str:
    try:
        registry = default_registry(settings.units_file)
    except OSError as exc:
        raise CommandError(f"Cannot read units file: {exc}") from exc
    value = _number(args.value, "Value")
    result = registry.convert(value, args.from_unit, args.to_unit, family=args.family)
    if result is None:
        raise CommandError(f"Cannot convert {args.from_unit!r} to {args.to_unit!r}")
    return f"{_render(result, settings)} {args.to_unit}"


def cmd_format(args: argparse.Namespace, settings: Settings) -> str:
    value = _number(args.value, "Value")
    decimals = settings.default_decimals if args.decimals is None else args.decimals
    try:
        if not args.grouped:
            return format_number(value, decimals)
        number_format = NumberFormat.for_locale(args.locale) if args.locale else settings.number_format
        return format_number_with_commas(value, decimals, number_format)
    except ValueError as exc:
        raise CommandError(str(exc)) from exc


def cmd_range(args: argparse.Namespace, settings: Settings) -> str:
    values = number_range(
        _number(args.start, "Start"),
        _number(args.end, "End"),
        _number(args.step, "Step"),
    )
    return "\n".join(_render(value, settings) for value in values)


def cmd_calc(args: argparse.Namespace, settings: Settings) -> str:
    kwargs = {name: _calc_argument(value) for name, value in _parse_assignments(args.params).items()}
    try:
        result = get_calculator().execute(args.operation, **kwargs)
    except ValueError as exc:
        raise CommandError(str(exc)) from exc
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calckit", description="Calculator utilities.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_eval = subparsers.add_parser("eval", help="Evaluate an arithmetic expression")
    p_eval.add_argument("expression")
    p_eval.add_argument("-v", "--var", action="append", default=[], metavar="NAME=VALUE")
    p_eval.set_defaults(handler=cmd_eval)

    p_convert = subparsers.add_parser("convert", help="Convert a value between units")
    p_convert.add_argument("value")
    p_convert.add_argument("from_unit")
    p_convert.add_argument("to_unit")
    p_convert.add_argument("--family", default=None, help="Unit family, detected when omitted")
    p_convert.set_defaults(handler=cmd_convert)

    p_format = subparsers.add_parser("format", help="Round and format a number")
    p_format.add_argument("value")
    p_format.add_argument("--decimals", type=int, default=None)
    p_format.add_argument("--grouped", action="store_true", help="Use thousands separators")
    p_format.add_argument("--locale", default=None)
    p_format.set_defaults(handler=cmd_format)

    p_range = subparsers.add_parser("range", help="Print an inclusive number range")
    p_range.add_argument("start")
    p_range.add_argument("end")
    p_range.add_argument("step", nargs="?", default="1")
    p_range.set_defaults(handler=cmd_range)

    p_calc = subparsers.add_parser("calc", help="Run a formula calculator")
    p_calc.add_argument("operation", help="One of: " + ", ".join(get_calculator().operations()))
    p_calc.add_argument("params", nargs="*", metavar="NAME=VALUE")
    p_calc.set_defaults(handler=cmd_calc)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
        setup_logging(settings.log_level, settings.log_file)
        output = args.handler(args, settings)
    except CalckitError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    if output:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
