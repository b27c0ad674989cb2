"""Weekly overtime splitting and spread-of-hours premium.

The weekly cap is shared across roles and applied in clock-in order: once
earlier shifts (in any role) have used up the regular-hour budget, every
later hour is overtime, whichever role it was worked in.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from tip_payroll.calculators.numbers import round2, to_decimal
from tip_payroll.calculators.types import (
    PayShiftRecord,
    PayType,
    Position,
    RoleWeeklyHours,
    ShiftRecord,
    SpreadDay,
    SpreadResult,
    WeeklyHoursPay,
)

WEEKLY_OVERTIME_CAP = 40
OVERTIME_MULTIPLIER = Decimal("1.5")
SPREAD_THRESHOLD_HOURS = 10


def _non_negative_hours(hour: Any) -> Decimal:
    hours = to_decimal(hour or 0)
    return hours if hours > 0 else Decimal("0")


def compute_weekly_overtime_by_role(
    records: Iterable[ShiftRecord],
    weekly_cap: float = WEEKLY_OVERTIME_CAP,
) -> dict[str, RoleWeeklyHours]:
    """Split a week's shifts into regular/overtime hours per role.

    Records are ordered by ``clock_in`` (stable for ties). Negative hours
    count as zero. Per-role totals are rounded to 2 decimals.
    """
    cap = to_decimal(weekly_cap)
    ordered = sorted(records, key=lambda r: r.clock_in)

    result: dict[str, RoleWeeklyHours] = {}
    accumulated = Decimal("0")

    for record in ordered:
        hours = _non_negative_hours(record.hour)
        remaining_regular = max(Decimal("0"), cap - accumulated)
        to_regular = min(remaining_regular, hours)
        to_overtime = hours - to_regular

        bucket = result.setdefault(record.role_id, RoleWeeklyHours())
        bucket.regular_hours += to_regular
        bucket.overtime_hours += to_overtime

        accumulated += hours

    for bucket in result.values():
        bucket.regular_hours = round2(bucket.regular_hours)
        bucket.overtime_hours = round2(bucket.overtime_hours)

    return result


def compute_weekly_hours_pay(
    records: Iterable[PayShiftRecord],
    weekly_cap: float = WEEKLY_OVERTIME_CAP,
    overtime_multiplier: Any = OVERTIME_MULTIPLIER,
) -> WeeklyHoursPay:
    """Split a week of dated shifts into regular/overtime hours and wages.

    Salaried records always count as regular hours (they still consume the
    weekly cap) and contribute their salary once. Hourly records are paid
    at ``pay_rate`` for regular hours and ``pay_rate * overtime_multiplier``
    for overtime.
    """
    cap = to_decimal(weekly_cap)
    multiplier = to_decimal(overtime_multiplier)
    out = WeeklyHoursPay()
    accumulated = Decimal("0")

    for record in sorted(records, key=lambda r: r.date):
        hours = _non_negative_hours(record.hour)
        rate = to_decimal(record.pay_rate)

        if record.pay_type == PayType.SALARY:
            to_regular, to_overtime = hours, Decimal("0")
            out.hour_pay += rate
        else:
            to_regular = min(max(Decimal("0"), cap - accumulated), hours)
            to_overtime = hours - to_regular
            out.hour_pay += to_regular * rate + to_overtime * rate * multiplier

        out.regular_hours += to_regular
        out.overtime_hours += to_overtime
        if record.position == Position.BACK_OF_HOUSE:
            out.boh_hours += hours
            out.boh_overtime_hours += to_overtime
        else:
            out.foh_hours += hours
            out.foh_overtime_hours += to_overtime

        accumulated += hours

    out.regular_hours = round2(out.regular_hours)
    out.overtime_hours = round2(out.overtime_hours)
    out.foh_hours = round2(out.foh_hours)
    out.boh_hours = round2(out.boh_hours)
    out.foh_overtime_hours = round2(out.foh_overtime_hours)
    out.boh_overtime_hours = round2(out.boh_overtime_hours)
    out.hour_pay = round2(out.hour_pay)
    return out


def compute_spread_of_hours(
    records: Iterable[PayShiftRecord],
    min_pay_rate: Any,
    enabled: bool = True,
    threshold_hours: float = SPREAD_THRESHOLD_HOURS,
    only_if_extra_hours_positive: bool = True,
    extra_hours_from_source: float = 0,
) -> SpreadResult:
    """Pay one extra minimum-wage hour for each long hourly shift.

    ``only_if_extra_hours_positive`` gates the premium on the time-clock
    source having reported extra hours for the week.
    """
    if not enabled:
        return SpreadResult()
    if only_if_extra_hours_positive and extra_hours_from_source <= 0:
        return SpreadResult()

    rate = to_decimal(min_pay_rate)
    threshold = to_decimal(threshold_hours)
    result = SpreadResult()
    for record in records:
        if record.pay_type == PayType.HOURLY and to_decimal(record.hour) >= threshold:
            result.spread_hours += 1
            result.per_date.append(SpreadDay(date=record.date, hours=1, pay=rate))

    result.spread_pay = rate * result.spread_hours
    return result
