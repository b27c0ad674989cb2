"""Currency-cent and ratio helpers shared by every calculator.

Money crosses module boundaries as integer cents. Fractional intermediate
values (ratios, hours, pay before rounding) are carried as ``Decimal`` and
rounded half-up, the same way line items are rounded at persistence.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("1")
TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def to_decimal(value: Any) -> Decimal:
    """Convert an int/float/str/Decimal to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def num(value: Any) -> float:
    """Coerce anything to a finite number, falling back to 0."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0
    return result if math.isfinite(result) else 0


def round_cents(amount: Any) -> int:
    """Round a (possibly fractional) cent amount to a whole cent."""
    return int(to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP))


def round2(amount: Any) -> Decimal:
    """Round to 2 decimal places."""
    return to_decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def round4(amount: Any) -> Decimal:
    """Round to 4 decimal places."""
    return to_decimal(amount).quantize(FOUR_PLACES, rounding=ROUND_HALF_UP)


def clamp01(ratio: Any) -> float:
    """Clamp a ratio into [0, 1]."""
    return max(0.0, min(1.0, num(ratio)))


def max0(amount: Any) -> Any:
    """Clamp an amount to be non-negative."""
    return amount if amount > 0 else 0


def float_to_cents(amount: float | int | str | Decimal) -> int:
    """Convert a dollar amount to integer cents.

    Strings are truncated to two decimals ("12.3456" -> 1234); numbers are
    rounded half-up (12.345 -> 1235). Unparseable or non-finite input is 0.
    """
    if isinstance(amount, str):
        whole, _, frac = amount.strip().partition(".")
        frac2 = (frac + "00")[:2]
        sign = -1 if whole.startswith("-") else 1
        try:
            return int(whole or "0") * 100 + sign * int(frac2)
        except ValueError:
            return 0
    if not isinstance(amount, Decimal):
        amount = num(amount)
    try:
        return round_cents(to_decimal(amount) * 100)
    except (InvalidOperation, ValueError, OverflowError):
        return 0


def cents_to_float(cents: int) -> float:
    """Convert integer cents back to a dollar float."""
    return round(cents) / 100


def sum_cents(values: Iterable[int]) -> int:
    return sum(values, 0)


def emp_key(uid: Any, period_id: Any, role_name: str) -> str:
    """Build the ``period:uid:role`` key used by affected sets."""
    return f"{period_id}:{uid}:{role_name}"


def split_emp_key(key: str) -> tuple[str, str, str]:
    """Inverse of :func:`emp_key`. Role names may themselves contain ':'."""
    period_id, uid, role_name = key.split(":", 2)
    return period_id, uid, role_name


def stable_distribute_cents(total: int, weights: Sequence[float | int]) -> list[int]:
    """Split ``total`` cents proportionally to ``weights`` in whole cents.

    Each share is floored, then the leftover cents go one at a time to the
    shares with the largest fractional part. Ties keep input order, so the
    same inputs always give the same split.
    """
    if not weights:
        return []
    weight_sum = sum(to_decimal(w) for w in weights) or Decimal(1)
    raw = [to_decimal(total) * to_decimal(w) / weight_sum for w in weights]
    floors = [int(x.to_integral_value(rounding=ROUND_FLOOR)) for x in raw]
    remainder = total - sum(floors)

    by_fraction = sorted(
        range(len(raw)), key=lambda i: raw[i] - floors[i], reverse=True
    )
    for k in range(max(remainder, 0)):
        floors[by_fraction[k % len(by_fraction)]] += 1
    return floors
