"""Weekly payroll summary over reconciled time-clock data."""

from tip_payroll.summary.types import (
    ReconciledPayroll,
    Reconciler,
    WeeklyEmployeeSummary,
    WeeklySummary,
)
from tip_payroll.summary.weekly import add_variance, summarize_weekly, worst_status

__all__ = [
    "ReconciledPayroll",
    "Reconciler",
    "WeeklyEmployeeSummary",
    "WeeklySummary",
    "add_variance",
    "summarize_weekly",
    "worst_status",
]
