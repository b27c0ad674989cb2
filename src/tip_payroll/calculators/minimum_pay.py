"""Minimum-wage makeup for tipped employees."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from tip_payroll.calculators.numbers import round2, to_decimal
from tip_payroll.calculators.overtime import OVERTIME_MULTIPLIER
from tip_payroll.calculators.types import MinPayAdjustResult


def apply_minimum_pay_adjustment(
    regular_hours: Any,
    overtime_hours: Any,
    pay_amount: Any,
    tips: Any,
    tips_cash: Any,
    bonus: Any,
    min_pay_rate: Any,
    overtime_multiplier: Any = OVERTIME_MULTIPLIER,
) -> MinPayAdjustResult:
    """Top up reported tips so total pay reaches the statutory minimum.

    Cash tips close the gap first, never more than are available; if cash
    alone is not enough the reported (credit card) tips are raised. All
    outputs are rounded to 2 decimal places of whatever unit the caller
    passes in.
    """
    rate = to_decimal(min_pay_rate)
    pay = to_decimal(pay_amount)
    tips_dec = to_decimal(tips)

    multiplier = to_decimal(overtime_multiplier)
    minimum_pay = (
        rate * to_decimal(regular_hours) + multiplier * rate * to_decimal(overtime_hours)
    )
    hour_pay = pay - tips_dec - to_decimal(bonus)

    new_tips_cash = min(max(minimum_pay - pay, Decimal("0")), to_decimal(tips_cash))
    new_tips_cash = round2(new_tips_cash)
    new_tips = round2(max(tips_dec, minimum_pay - hour_pay - new_tips_cash))
    new_pay_amount = round2(max(pay, minimum_pay))

    return MinPayAdjustResult(
        tips=new_tips,
        tips_cash=new_tips_cash,
        pay_amount=new_pay_amount,
        minimum_pay=round2(minimum_pay),
    )
