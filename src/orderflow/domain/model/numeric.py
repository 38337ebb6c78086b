"""Numeric coercion and rounding helpers used by every pricing computation.

Monetary values are stored and compared rounded to two decimals.  Sums may
carry more precision transiently, before a final ``round_money`` pass.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TypeVar

CENT = Decimal("0.01")

_T = TypeVar("_T")


def to_number(value: object, fallback: _T) -> Decimal | _T:
    """Coerce *value* to a finite Decimal, or return *fallback*.

    Accepts ints, floats, Decimals and numeric strings.  Never raises:
    anything that is not a finite number (None, "", "abc", NaN, Infinity,
    booleans) yields *fallback*.
    """
    if value is None or isinstance(value, bool):
        return fallback
    try:
        if isinstance(value, float):
            number = Decimal(repr(value))
        else:
            number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return fallback
    if not number.is_finite():
        return fallback
    return number


def round_money(value: Decimal | int | str) -> Decimal:
    """Round to 2 decimal places, half-up (0.005 -> 0.01)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def truncate_quantity(value: object) -> int | None:
    """Coerce *value* to a number and drop its fractional part.

    Returns None when the value is not a finite number.
    """
    number = to_number(value, None)
    if number is None:
        return None
    return int(number.to_integral_value(rounding=ROUND_DOWN))
