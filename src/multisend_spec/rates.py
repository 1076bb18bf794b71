"""Exact-rational rate handling and integer helpers."""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction
from typing import Optional

from .config import I128_MAX, I128_MIN, MAX_RATE, MIN_RATE
from .errors import ErrorCode, SpecError
from .types import RateLike


def parse_rate(value: RateLike, *, denom: Optional[str] = None) -> Fraction:
    """Convert a configured rate into an exact ``Fraction`` in [0, 1].

    Floats go through their shortest repr, so ``0.08`` becomes ``2/25``
    rather than the nearest binary double.
    """
    if isinstance(value, bool):
        raise SpecError(ErrorCode.INVALID_RATE, "rate must be numeric", denom=denom)

    try:
        if isinstance(value, Fraction):
            rate = value
        elif isinstance(value, int):
            rate = Fraction(value)
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise SpecError(ErrorCode.INVALID_RATE, "rate not finite", denom=denom)
            rate = Fraction(repr(value))
        elif isinstance(value, Decimal):
            if not value.is_finite():
                raise SpecError(ErrorCode.INVALID_RATE, "rate not finite", denom=denom)
            rate = Fraction(value)
        elif isinstance(value, str):
            rate = Fraction(value.strip())
        else:
            raise SpecError(
                ErrorCode.INVALID_RATE, f"unsupported rate type {type(value).__name__}", denom=denom
            )
    except (ValueError, ZeroDivisionError) as exc:
        raise SpecError(ErrorCode.INVALID_RATE, f"unparsable rate {value!r}", denom=denom) from exc

    if rate < MIN_RATE or rate > MAX_RATE:
        raise SpecError(ErrorCode.INVALID_RATE, f"rate {rate} outside [0, 1]", denom=denom)
    return rate


def format_rate(rate: Fraction) -> str:
    """Render a rate losslessly (``"2/25"``, ``"0"``, ``"1"``)."""
    if rate.denominator == 1:
        return str(rate.numerator)
    return f"{rate.numerator}/{rate.denominator}"


def ceil_div(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise SpecError(ErrorCode.ARITHMETIC_FAILURE, "non-positive divisor")
    return -((-numerator) // denominator)


def scaled_share(amount: int, rate: Fraction, num: int, den: int) -> int:
    """ceil(amount * rate * num / den) on integers."""
    return ceil_div(amount * rate.numerator * num, rate.denominator * den)


def check_i128(
    value: int, what: str, *, address: Optional[str] = None, denom: Optional[str] = None
) -> int:
    if value < I128_MIN or value > I128_MAX:
        raise SpecError(
            ErrorCode.ARITHMETIC_FAILURE, f"{what} exceeds i128 range", address=address, denom=denom
        )
    return value
