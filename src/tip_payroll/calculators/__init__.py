"""Tip-pool calculation formulas."""

from tip_payroll.calculators.minimum_pay import apply_minimum_pay_adjustment
from tip_payroll.calculators.overtime import (
    compute_spread_of_hours,
    compute_weekly_hours_pay,
    compute_weekly_overtime_by_role,
)
from tip_payroll.calculators.tip_allocation import (
    calculate_employee,
    calculate_period_totals,
    sum_payroll_totals,
)

__all__ = [
    "apply_minimum_pay_adjustment",
    "calculate_employee",
    "calculate_period_totals",
    "compute_spread_of_hours",
    "compute_weekly_hours_pay",
    "compute_weekly_overtime_by_role",
    "sum_payroll_totals",
]
