"""Weekly payroll summary from reconciled data.

For each employee in the date range:
- Tips and spread-of-hours days are summed from the employee-days.
- Hourly hours are split into regular/overtime from the time-clock events,
  sharing one weekly cap across roles; salaried roles earn their salary.
- Tips are topped up to the minimum wage (cash first, then cc tips).
- Gross pay is wages plus adjusted tips, plus spread pay where required.

Employees with no gross pay and no hours mismatch are left out.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from tip_payroll.calculators.minimum_pay import apply_minimum_pay_adjustment
from tip_payroll.calculators.numbers import round2, round_cents, to_decimal
from tip_payroll.calculators.overtime import (
    OVERTIME_MULTIPLIER,
    SPREAD_THRESHOLD_HOURS,
    WEEKLY_OVERTIME_CAP,
    compute_weekly_overtime_by_role,
)
from tip_payroll.calculators.types import PayType, Position, ShiftRecord
from tip_payroll.summary.types import (
    DailyMismatch,
    EmployeeDay,
    IssueLevel,
    ReconciledPayroll,
    ReconciliationReport,
    RoleSummary,
    TimeClockEvent,
    Variance,
    VarianceStatus,
    WeeklyEmployeeSummary,
    WeeklyReport,
    WeeklySummary,
    WeeklyTotals,
)

logger = logging.getLogger(__name__)

EPS = 1e-6

# States whose labour law requires spread-of-hours pay.
SPREAD_OF_HOURS_STATES = frozenset({"NY"})

_STATUS_RANK = {
    VarianceStatus.OK: 0,
    VarianceStatus.WARNING: 1,
    VarianceStatus.ERROR: 2,
}


def worst_status(a: VarianceStatus, b: VarianceStatus) -> VarianceStatus:
    return a if _STATUS_RANK[a] >= _STATUS_RANK[b] else b


def add_variance(total: Variance | None, variance: Variance) -> Variance:
    """Fold ``variance`` into a running ``total`` (``None`` to start one)."""
    if total is None:
        sheet, external, status = variance.sheet, variance.external, variance.status
    else:
        sheet = total.sheet + variance.sheet
        external = total.external + variance.external
        status = worst_status(total.status, variance.status)
    delta = sheet - external
    return Variance(
        sheet=sheet,
        external=external,
        delta=delta,
        pct=abs(delta) / max(external, EPS),
        status=status,
    )


def _add_employee_day(
    summary: WeeklyEmployeeSummary,
    day: EmployeeDay,
    spread_threshold: Decimal,
    overtime_multiplier: Decimal,
) -> None:
    summary.totals.cc_tips += day.cc_tips
    summary.totals.cash_tips += day.cash_tips
    if to_decimal(day.hours) >= spread_threshold:
        summary.totals.spread_of_hours += 1

    for segment in day.segments:
        role = summary.hours_by_role.get(segment.role_id)
        if role is None:
            role = summary.hours_by_role[segment.role_id] = RoleSummary(
                role_id=segment.role_id,
                role_name=segment.role_name,
                pay_rate=segment.pay_rate,
                pay_type=segment.pay_type,
                position=segment.position,
                overtime_multiplier=overtime_multiplier,
            )
        # Salaried hours never come from the time clock.
        if segment.pay_type == PayType.SALARY:
            role.regular_hours += to_decimal(segment.hours)

    for role_id, variance in day.hours_by_role.items():
        summary.role_variances[role_id] = add_variance(
            summary.role_variances.get(role_id), variance
        )
        if variance.status != VarianceStatus.OK:
            role = summary.hours_by_role.get(role_id)
            summary.daily_mismatches.append(
                DailyMismatch(
                    date=day.date,
                    role_id=role_id,
                    role_name=role.role_name if role else "Unknown",
                    variance=variance,
                )
            )


def _split_hours(
    summary: WeeklyEmployeeSummary,
    events: Iterable[TimeClockEvent],
    weekly_cap: Any,
) -> None:
    shifts = [
        ShiftRecord(clock_in=e.clock_in, role_id=e.role_id, hour=e.hours)
        for e in events
        if e.pay_type == PayType.HOURLY
    ]
    hours_by_role = compute_weekly_overtime_by_role(shifts, weekly_cap)

    for role in summary.hours_by_role.values():
        if role.pay_type == PayType.SALARY:
            role.wages = role.pay_rate
            continue
        hours = hours_by_role.get(role.role_id)
        if hours is None:
            continue
        rate = to_decimal(role.pay_rate)
        role.regular_hours = hours.regular_hours
        role.overtime_hours = hours.overtime_hours
        role.wages = round_cents(
            hours.regular_hours * rate
            + hours.overtime_hours * rate * role.overtime_multiplier
        )


def _finish_totals(
    summary: WeeklyEmployeeSummary,
    minimum_wage: int,
    overtime_multiplier: Decimal,
    spread_required: bool,
) -> None:
    totals = summary.totals
    for role in summary.hours_by_role.values():
        role.regular_hours = round2(role.regular_hours)
        role.overtime_hours = round2(role.overtime_hours)
        totals.regular_hours += role.regular_hours
        totals.overtime_hours += role.overtime_hours
        totals.wages += role.wages

        bucket = totals.boh if role.position == Position.BACK_OF_HOUSE else totals.foh
        bucket.hours += role.regular_hours + role.overtime_hours
        bucket.wages += role.wages

    adjusted = apply_minimum_pay_adjustment(
        regular_hours=totals.regular_hours,
        overtime_hours=totals.overtime_hours,
        pay_amount=totals.wages + totals.cc_tips,
        tips=totals.cc_tips,
        tips_cash=totals.cash_tips,
        bonus=0,
        min_pay_rate=minimum_wage,
        overtime_multiplier=overtime_multiplier,
    )
    totals.cc_tips = round_cents(adjusted.tips)
    totals.cash_tips = round_cents(adjusted.tips_cash)

    if spread_required:
        totals.spread_pay = totals.spread_of_hours * minimum_wage
    totals.gross = totals.wages + totals.cc_tips + totals.cash_tips + totals.spread_pay

    totals.regular_hours = round2(totals.regular_hours)
    totals.overtime_hours = round2(totals.overtime_hours)
    totals.boh.hours = round2(totals.boh.hours)
    totals.foh.hours = round2(totals.foh.hours)

    for variance in summary.role_variances.values():
        summary.overall_variance = add_variance(summary.overall_variance, variance)


def _build_report(report: ReconciliationReport) -> WeeklyReport:
    counts = {level: 0 for level in IssueLevel}
    for issue in report.issues:
        counts[IssueLevel(issue.level)] += 1
    return WeeklyReport(
        score=report.score,
        issues=list(report.issues),
        issue_count_by_level=counts,
        blocking=counts[IssueLevel.ERROR] > 0,
    )


def summarize_weekly(
    reconciled: ReconciledPayroll,
    start_date: str,
    end_date: str,
    weekly_cap: Any = WEEKLY_OVERTIME_CAP,
    overtime_multiplier: Any = OVERTIME_MULTIPLIER,
    spread_required: bool | None = None,
    spread_threshold_hours: Any = SPREAD_THRESHOLD_HOURS,
) -> WeeklySummary:
    """Summarize ``reconciled`` over ``start_date``..``end_date`` inclusive.

    Dates are ``YYYY-MM-DD`` strings. ``spread_required`` defaults to
    whether the location's state mandates spread-of-hours pay.

    Raises ``ValueError`` if the reconciled meta carries no time-clock
    events.
    """
    events_by_employee = reconciled.meta.time_clock_events_by_employee
    if events_by_employee is None:
        raise ValueError("Reconciled payroll carries no time-clock events")
    if spread_required is None:
        spread_required = reconciled.meta.location_state in SPREAD_OF_HOURS_STATES

    multiplier = to_decimal(overtime_multiplier)
    threshold = to_decimal(spread_threshold_hours)

    def in_range(date: str) -> bool:
        return start_date <= date <= end_date

    days = [day for day in reconciled.days if in_range(day.date)]
    totals = WeeklyTotals(
        hours=round2(sum((to_decimal(day.hours) for day in days), Decimal("0"))),
        cc_tips=sum(day.cc_tips for day in days),
        cash_tips=sum(day.cash_tips for day in days),
        service_charge=sum(day.service_charge for day in days),
    )

    summaries: dict[str, WeeklyEmployeeSummary] = {}
    for day in reconciled.employees:
        if not in_range(day.date):
            continue
        summary = summaries.get(day.employee_uid)
        if summary is None:
            summary = summaries[day.employee_uid] = WeeklyEmployeeSummary(
                employee_uid=day.employee_uid, display_name=day.display_name
            )
        _add_employee_day(summary, day, threshold, multiplier)

    for uid, summary in summaries.items():
        _split_hours(summary, events_by_employee.get(uid, []), weekly_cap)
        _finish_totals(summary, reconciled.meta.minimum_wage, multiplier, spread_required)

    employees = sorted(
        (s for s in summaries.values() if s.totals.gross > 0 or s.daily_mismatches),
        key=lambda s: s.employee_uid,
    )

    logger.debug(
        "Weekly summary %s..%s: %d of %d employee(s), %d day(s)",
        start_date,
        end_date,
        len(employees),
        len(summaries),
        len(days),
    )
    return WeeklySummary(
        start_date=start_date,
        end_date=end_date,
        employees=employees,
        days=days,
        totals=totals,
        meta=reconciled.meta,
        report=_build_report(reconciled.report),
    )
