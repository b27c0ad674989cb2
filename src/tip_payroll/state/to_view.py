"""Project a PayrollSnapshot into the sheet view model."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from tip_payroll.calculators.minimum_pay import apply_minimum_pay_adjustment
from tip_payroll.calculators.numbers import to_decimal
from tip_payroll.calculators.overtime import OVERTIME_MULTIPLIER, WEEKLY_OVERTIME_CAP
from tip_payroll.state.types import EmployeeRecord, LogEntry, LogType, PayrollSnapshot

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Period ids 1..14: lunch then dinner for each day of the week.
PERIOD_LABELS: dict[str, tuple[str, str]] = {
    str(i * 2 + 1 + offset): (day, meal)
    for i, day in enumerate(_DAYS)
    for offset, meal in enumerate(("lunch", "dinner"))
}


class UnknownPeriodError(ValueError):
    """Raised when a period id has no day/meal label."""

    def __init__(self, period_id: str):
        self.period_id = period_id
        super().__init__(f"No day/meal label for period {period_id!r}")


@dataclass
class PeriodBlock:
    period_id: str
    day: str
    meal: str
    sales: int
    cash_tips: int
    cc_tips: int
    service_charge: int
    tips_total: int


@dataclass
class EmployeeRow:
    uid: str
    name: str
    pay_rate: int
    total_hour: Decimal
    total_cc: Decimal  # after minimum-wage makeup
    total_cash: Decimal  # after minimum-wage makeup
    by_period: dict[str, dict[str, float | int]] = field(default_factory=dict)


@dataclass
class RoleSection:
    role_name: str
    employees: list[EmployeeRow] = field(default_factory=list)


@dataclass
class GroupedLogs:
    payroll: list[LogEntry] = field(default_factory=list)
    period: dict[str, list[LogEntry]] = field(default_factory=dict)
    employee: dict[str, list[LogEntry]] = field(default_factory=dict)
    all: list[LogEntry] = field(default_factory=list)


@dataclass
class PayrollModel:
    blocks: list[PeriodBlock]
    sections: list[RoleSection]
    busser_by_period: dict[str, float]
    meta: dict[str, object]
    logs: GroupedLogs


def _period_sort_key(period_id: str) -> tuple[int, str]:
    return (int(period_id), period_id) if period_id.isdigit() else (10**9, period_id)


def _employee_row(
    employee: EmployeeRecord,
    min_pay_rate: int,
    weekly_cap: Decimal,
    overtime_multiplier: Decimal,
) -> EmployeeRow:
    cells = employee.by_period.values()
    total_hour = sum((to_decimal(c.hour) for c in cells), Decimal("0"))
    total_cc = sum(c.cc for c in cells)
    total_cash = sum(c.cash for c in cells)

    regular_hours = min(total_hour, weekly_cap)
    overtime_hours = max(total_hour - weekly_cap, Decimal("0"))
    rate = to_decimal(employee.pay_rate)
    pay_amount = (
        regular_hours * rate + overtime_hours * rate * overtime_multiplier + total_cc
    )
    adjusted = apply_minimum_pay_adjustment(
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        pay_amount=pay_amount,
        tips=total_cc,
        tips_cash=total_cash,
        bonus=0,
        min_pay_rate=min_pay_rate,
        overtime_multiplier=overtime_multiplier,
    )

    return EmployeeRow(
        uid=employee.uid,
        name=employee.name,
        pay_rate=employee.pay_rate,
        total_hour=total_hour,
        total_cc=adjusted.tips,
        total_cash=adjusted.tips_cash,
        by_period={
            period_id: {
                "hour": cell.hour,
                "cc": cell.cc,
                "cash": cell.cash,
                "percent": cell.percent,
            }
            for period_id, cell in employee.by_period.items()
        },
    )


def _group_logs(logs: list[LogEntry]) -> GroupedLogs:
    grouped = GroupedLogs(all=list(logs))
    for log in logs:
        payload = log.raw if isinstance(log.raw, dict) else {}
        if log.type == LogType.PAYROLL:
            grouped.payroll.append(log)
        elif log.type in (LogType.PERIOD, LogType.PERIOD_V2):
            period_id = payload.get("period_id", payload.get("periodId"))
            if period_id is not None and str(period_id) in PERIOD_LABELS:
                grouped.period.setdefault(str(period_id), []).append(log)
        elif log.type in (LogType.EMPLOYEE, LogType.EMPLOYEE_V2):
            uid = payload.get("uid")
            if uid is not None:
                grouped.employee.setdefault(str(uid), []).append(log)
    return grouped


def from_state_to_model(
    snapshot: PayrollSnapshot,
    weekly_cap: Any = WEEKLY_OVERTIME_CAP,
    overtime_multiplier: Any = OVERTIME_MULTIPLIER,
) -> PayrollModel:
    """Build the display model.

    Employee cc/cash totals are reported after the minimum-wage makeup, with
    hours beyond ``weekly_cap`` treated as overtime. Raises
    ``UnknownPeriodError`` for a period id outside 1..14.
    """
    blocks = []
    for period_id in sorted(snapshot.periods, key=_period_sort_key):
        period = snapshot.periods[period_id]
        if period_id not in PERIOD_LABELS:
            raise UnknownPeriodError(period_id)
        day, meal = PERIOD_LABELS[period_id]
        blocks.append(
            PeriodBlock(
                period_id=period_id,
                day=day,
                meal=meal,
                sales=period.sales,
                cash_tips=period.cash_tips,
                cc_tips=period.cc_tips,
                service_charge=period.service_charge,
                tips_total=period.cash_tips + period.cc_tips,
            )
        )

    sections: dict[str, RoleSection] = {}
    for employee in snapshot.employees:
        section = sections.setdefault(employee.role_name, RoleSection(role_name=employee.role_name))
        row = _employee_row(
            employee,
            snapshot.meta.min_pay_rate,
            to_decimal(weekly_cap),
            to_decimal(overtime_multiplier),
        )
        section.employees.append(row)

    meta = snapshot.meta
    return PayrollModel(
        blocks=blocks,
        sections=list(sections.values()),
        busser_by_period={pid: p.busser_percent for pid, p in snapshot.periods.items()},
        meta={
            "id": meta.payroll_id,
            "location_id": meta.location_id,
            "location_name": meta.location_name,
            "min_pay_rate": meta.min_pay_rate,
            "start_date": meta.start_date_iso or "",
            "end_date": meta.end_date_iso or "",
            "total_cash_tips": meta.total_cash_tips or 0,
            "total_tips": meta.total_tips or 0,
        },
        logs=_group_logs(snapshot.logs),
    )
