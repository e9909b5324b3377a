"""Exact rounding helpers.

Scores must agree to the last displayed digit with the club dashboard, which
rounds halves upward. Python's ``round`` rounds halves to even, so these
helpers work on exact ``Decimal``/``Fraction`` values instead.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction

Number = int | Decimal | Fraction


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Fraction):
        return Decimal(value.numerator) / Decimal(value.denominator)
    return Decimal(value)


def round_half_up(value: Number, places: int = 0) -> Decimal:
    """Round an exact value half away from zero to ``places`` decimals.

    Example:
        >>> round_half_up(Fraction(25, 4), 1)
        Decimal('6.3')
    """
    quantum = Decimal(1).scaleb(-places)
    return _to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


def round_to_int(value: Number) -> int:
    """Round an exact value to the nearest integer, halves upward."""
    return int(round_half_up(value, 0))


def percentage(numerator: int, denominator: int, places: int = 1) -> Decimal:
    """Exact ``numerator / denominator * 100`` rounded to ``places`` decimals.

    Returns ``Decimal(0)`` at the given precision when the denominator is 0.
    """
    if denominator <= 0:
        return round_half_up(0, places)
    return round_half_up(Fraction(numerator * 100, denominator), places)


def percentage_label(numerator: int, denominator: int) -> str:
    """Whole-number percentage string such as "67%", or "0%" for no games."""
    return f"{percentage(numerator, denominator, places=0)}%"
