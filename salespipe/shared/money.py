"""Exact decimal helpers for money, percentages and commission rates.

Every amount entering a calculation goes through ``to_decimal`` first, so floats
coming from JSON or config never leak binary rounding noise into currency math.
Intermediate results keep full precision; rounding happens once, when a value is
handed back to the caller (``to_money`` / ``to_percent`` / ``to_rate``).

Rounding is always ROUND_HALF_UP and is passed to ``quantize`` explicitly, so the
thread-local decimal context is never mutated.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")

MONEY_PLACES = 0
PERCENT_PLACES = 2


def to_decimal(value: object) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, (int, float, str)):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            return ZERO
        return parsed if parsed.is_finite() else ZERO
    return ZERO


def sum_decimals(values: Iterable[object]) -> Decimal:
    total = ZERO
    for value in values:
        total += to_decimal(value)
    return total


def safe_divide(numerator: object, denominator: object, fallback: Decimal = ZERO) -> Decimal:
    divisor = to_decimal(denominator)
    if divisor.is_zero():
        return fallback
    return to_decimal(numerator) / divisor


def round_to(value: object, places: int) -> Decimal:
    exponent = ONE.scaleb(-places)
    return to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def round_money(value: object) -> Decimal:
    return round_to(value, MONEY_PLACES)


def round_percent(value: object) -> Decimal:
    return round_to(value, PERCENT_PLACES)


def percent(value: object, base: object) -> Decimal:
    """``value / base * 100`` rounded to 2 places; exactly 0 when ``base <= 0``."""
    divisor = to_decimal(base)
    if divisor <= ZERO:
        return ZERO
    return round_percent(to_decimal(value) / divisor * HUNDRED)


def to_money(value: object) -> int:
    return int(round_money(value))


def to_percent(value: object) -> float:
    return float(round_percent(value))


def to_rate(value: object) -> float:
    return float(to_decimal(value))


def to_whole(value: object) -> int:
    """Whole-number rounding for non-currency figures such as completion percent."""
    return int(round_to(value, 0))
