"""Number parsing, arithmetic and display formatting for calcpad.

Pure functions from strings/floats to display strings. Nothing here touches
engine state, so the rounding and scientific-notation rules can be tested on
their own.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from operator import add, mul, sub, truediv
from typing import Callable, Optional

from calcpad.models import Operator

MAX_LENGTH = 15
FRACTION_DIGITS = 8

# Numerals as the engine produces them: "12", "-0.5", "3.", "1.2e+16".
_NUMERAL_RE = re.compile(r"^-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?$")

_APPLY: dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: add,
    Operator.SUBTRACT: sub,
    Operator.MULTIPLY: mul,
    Operator.DIVIDE: truediv,
}


class ComputationError(Exception):
    """A computation that can only be shown as the error sentinel."""


def parse_operand(text: str) -> float:
    """Parse a display numeral into a float.

    Raises:
        ComputationError: for the error sentinel or anything that is not a
            plain decimal numeral (``float()`` alone would accept "inf").
    """
    if not _NUMERAL_RE.match(text):
        raise ComputationError(f"Not a number: {text!r}")
    return float(text)


def plain_number(value: float) -> str:
    """Shortest round-trip positional rendering, never with an exponent.

    5.0 → '5', -0.0 → '0', 1.5e-07 → '0.00000015'
    """
    value = float(value)
    if not math.isfinite(value):
        raise ComputationError(f"Result out of range: {value}")
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def scientific_number(value: float, digits: int = FRACTION_DIGITS) -> str:
    """Scientific notation with an unpadded exponent, e.g. '1.23456712e+6'."""
    mantissa, _, exponent = f"{value:.{digits}e}".partition("e")
    return f"{mantissa}e{int(exponent):+d}"


def format_result(
    value: float,
    fraction_digits: int = FRACTION_DIGITS,
    max_length: int = MAX_LENGTH,
) -> str:
    """Render a computed result for the display.

    More than ``fraction_digits`` fractional digits are rounded away (trailing
    zeros dropped). A string still longer than ``max_length`` falls back to
    scientific notation.

    Raises:
        ComputationError: if the value is not finite.
    """
    text = plain_number(value)
    _, _, fraction = text.partition(".")
    if len(fraction) > fraction_digits:
        text = plain_number(round(value, fraction_digits))
    if len(text) > max_length:
        text = scientific_number(float(text), fraction_digits)
    return text


def evaluate(
    left: str,
    operator: Operator,
    right: str,
    fraction_digits: int = FRACTION_DIGITS,
    max_length: int = MAX_LENGTH,
) -> str:
    """Compute ``left operator right`` and format the result.

    Raises:
        ComputationError: on an unparseable operand, a zero divisor or an
            overflowing result.
    """
    a = parse_operand(left)
    b = parse_operand(right)
    if operator is Operator.DIVIDE and b == 0:
        raise ComputationError("Division by zero")
    return format_result(_APPLY[operator](a, b), fraction_digits, max_length)


def percent_of(
    current: str,
    previous: Optional[str] = None,
    fraction_digits: int = FRACTION_DIGITS,
    max_length: int = MAX_LENGTH,
) -> str:
    """Percent key arithmetic, formatted like any other result.

    With a pending left operand, ``current`` percent of it
    (``previous * current / 100``); otherwise ``current / 100``.
    """
    value = parse_operand(current)
    if previous is None:
        result = value / 100
    else:
        result = (parse_operand(previous) * value) / 100
    return format_result(result, fraction_digits, max_length)


def negate(text: str) -> str:
    """Flip the sign of a display numeral, e.g. '2.5' → '-2.5'."""
    return plain_number(-parse_operand(text))
