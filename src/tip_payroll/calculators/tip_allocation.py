"""Tip-pool allocation formulas.

Role handling:
- Busser: share of the pool equal to ``busser_percent * percent``
- Server: share of the pool equal to ``(1 - busser_percent) * percent``
- Host, Bartender and every other role: their own cc/cash figures pass
  through unchanged; they are never pool-derived.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from tip_payroll.calculators.numbers import (
    clamp01,
    max0,
    num,
    round2,
    round4,
    round_cents,
    to_decimal,
)
from tip_payroll.calculators.types import EmployeeTipResult, PayrollTotals, PeriodTotals

BUSSER = "Busser"
SERVER = "Server"
BARTENDER = "Bartender"
HOST = "Host"

# Roles whose tips are taken first and reduce the pool left for Server/Busser.
PRIORITY_ROLES = (HOST, BARTENDER)
POOLED_ROLES = (BUSSER, SERVER)


def calculate_employee(
    role_name: str,
    cc: int,
    cash: int,
    percent: float,
    cc_pool_after_others: int,
    cash_pool_after_others: int,
    busser_percent: float,
) -> EmployeeTipResult:
    """Compute one employee's cc/cash tips for one role in one period.

    Pools are clamped to >= 0 and both ratios to [0, 1] before use, so the
    function never fails. Results are rounded to whole cents.
    """
    cc_pool = to_decimal(max0(cc_pool_after_others))
    cash_pool = to_decimal(max0(cash_pool_after_others))
    share = to_decimal(clamp01(percent))
    busser_share = to_decimal(clamp01(busser_percent))

    if role_name == BUSSER:
        tips_cc = cc_pool * busser_share * share
        tips_cash = cash_pool * busser_share * share
    elif role_name == SERVER:
        server_share = 1 - busser_share
        tips_cc = cc_pool * server_share * share
        tips_cash = cash_pool * server_share * share
    else:
        tips_cc = to_decimal(cc)
        tips_cash = to_decimal(cash)

    return EmployeeTipResult(tips_cc=round_cents(tips_cc), tips_cash=round_cents(tips_cash))


def calculate_period_totals(
    sales: Any, cc_tips: Any, sc: Any, cash_tips: Any = 0
) -> PeriodTotals:
    """Total tips (cc + service charge) and tips as a fraction of sales."""
    total_tips = round2(to_decimal(cc_tips) + to_decimal(sc))
    sales_dec = to_decimal(sales)
    if sales_dec == 0:
        return PeriodTotals(total_tips=total_tips, tips_percent=Decimal("0"))
    return PeriodTotals(total_tips=total_tips, tips_percent=round4(total_tips / sales_dec))


def sum_payroll_totals(periods: Iterable[Mapping[str, Any]]) -> PayrollTotals:
    """Sum ``cc_tips + sc`` and ``cash_tips`` across periods.

    Missing or non-numeric values count as zero; both sums are rounded to
    integers the way the payroll sheet displays them.
    """
    total_tips = Decimal("0")
    total_cash = Decimal("0")
    for p in periods:
        total_tips += to_decimal(num(p.get("cc_tips"))) + to_decimal(num(p.get("sc")))
        total_cash += to_decimal(num(p.get("cash_tips")))
    return PayrollTotals(
        total_tips=round_cents(total_tips), total_cash_tips=round_cents(total_cash)
    )
