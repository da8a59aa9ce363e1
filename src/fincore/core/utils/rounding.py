"""
Central rounding policy.

Every reported figure goes through one of these helpers so the tax calculator
and the projection engine cannot drift apart:

- money rounds half-up to cents
- rates round half-up to 4 decimal places (basis-point precision)

Uses Decimal for the quantize step, returns float.
"""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
BASIS_POINT = Decimal("0.0001")


def _quantize(value: float, step: Decimal) -> float:
    return float(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))


def round_currency(value: float) -> float:
    """Round a monetary amount to cents."""
    return _quantize(value, CENTS)


def round_rate(value: float) -> float:
    """Round a rate (decimal, e.g. 0.3) to 4 decimal places."""
    return _quantize(value, BASIS_POINT)
