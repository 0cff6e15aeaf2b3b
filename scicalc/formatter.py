"""Display formatting for finite results."""

import math
from decimal import ROUND_HALF_UP, Decimal

from .errors import NonFiniteResultError

DECIMAL_PLACES = 6
_QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)


def format_result(value: float) -> str:
    """Render ``value`` for display.

    Integers print without a decimal point; anything else is rounded half
    away from zero to six decimal places, using the exact binary value, with
    trailing zeros and a dangling point removed. Never uses exponent notation
    or digit grouping.
    """
    if not math.isfinite(value):
        raise NonFiniteResultError(f"Cannot format non-finite value: {value}")
    if float(value).is_integer():
        return str(int(value))
    rounded = Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    text = f"{rounded:f}".rstrip("0")
    if text.endswith("."):
        text = text[:-1]
    return text
