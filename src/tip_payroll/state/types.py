"""Payroll snapshot, change and diff records.

All money fields are integer cents. ``percent`` and ``busser_percent`` are
ratios in [0, 1]. A snapshot owns every nested period, employee and cell;
callers never share nested objects between snapshots.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from tip_payroll.calculators.types import PayType


class PeriodField(str, Enum):
    """Editable fields of a period record."""

    SALES = "sales"
    CASH_TIPS = "cash_tips"
    CC_TIPS = "cc_tips"
    SERVICE_CHARGE = "service_charge"
    BUSSER_PERCENT = "busser_percent"


class EmployeeField(str, Enum):
    """Editable fields of an employee cell."""

    HOUR = "hour"
    PERCENT = "percent"
    CC = "cc"
    CASH = "cash"


class LogType(int, Enum):
    PAYROLL = 1
    PERIOD = 2
    EMPLOYEE = 3
    PERIOD_V2 = 4
    EMPLOYEE_V2 = 5


@dataclass
class PeriodRecord:
    """Sales and tip inputs for one period (a meal on a day)."""

    id: str
    sales: int = 0
    cash_tips: int = 0
    cc_tips: int = 0
    service_charge: int = 0
    busser_percent: float = 0.0


@dataclass
class EmployeeCell:
    """One employee's figures for one period."""

    hour: float = 0
    cc: int = 0
    cash: int = 0
    percent: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not (self.hour or self.cc or self.cash or self.percent)


@dataclass
class EmployeeRecord:
    """An employee in one role. The same person in two roles is two records."""

    uid: str
    role_id: str
    role_name: str
    name: str
    pay_rate: int = 0
    pay_type: PayType = PayType.HOURLY
    by_period: dict[str, EmployeeCell] = field(default_factory=dict)

    def ensure_cell(self, period_id: str) -> EmployeeCell:
        """Return the cell for ``period_id``, creating a zeroed one if absent."""
        cell = self.by_period.get(period_id)
        if cell is None:
            cell = EmployeeCell()
            self.by_period[period_id] = cell
        return cell


@dataclass
class LogEntry:
    """Audit log entry. Passed through untouched by the engine."""

    type: int
    timestamp: str
    operator_name: str
    raw: Any = None


@dataclass
class PayrollMeta:
    payroll_id: str
    location_id: str
    location_name: str
    min_pay_rate: int
    start_date_iso: str
    end_date_iso: str
    total_cash_tips: int | None = None
    total_tips: int | None = None


@dataclass
class PayrollSnapshot:
    """One complete payroll state for a pay period."""

    meta: PayrollMeta
    periods: dict[str, PeriodRecord] = field(default_factory=dict)
    employees: list[EmployeeRecord] = field(default_factory=list)
    logs: list[LogEntry] = field(default_factory=list)

    def find_employee(self, uid: str, role_name: str) -> EmployeeRecord | None:
        for employee in self.employees:
            if employee.uid == uid and employee.role_name == role_name:
                return employee
        return None

    def ensure_period(self, period_id: str) -> PeriodRecord:
        """Return the period, creating a zeroed one if absent."""
        period = self.periods.get(period_id)
        if period is None:
            period = PeriodRecord(id=period_id)
            self.periods[period_id] = period
        return period

    def draft(self) -> PayrollSnapshot:
        """Independent working copy; mutating it never touches ``self``."""
        return copy.deepcopy(self)


# ============================================================================
# Changes
# ============================================================================


@dataclass
class PeriodChange:
    """Literal edit of one period field."""

    period_id: str
    field: PeriodField | str
    value: Any

    kind = "period"


@dataclass
class EmployeeChange:
    """Literal edit of one employee cell field."""

    period_id: str
    uid: str
    role_name: str
    field: EmployeeField | str
    value: Any

    kind = "employee"


PayrollChange = Union[PeriodChange, EmployeeChange]


def change_from_dict(data: dict[str, Any]) -> PayrollChange:
    """Build a change record from its tagged dict form (``kind`` key)."""
    kind = data.get("kind")
    if kind == "period":
        return PeriodChange(
            period_id=data["period_id"], field=data["field"], value=data["value"]
        )
    if kind == "employee":
        return EmployeeChange(
            period_id=data["period_id"],
            uid=data["uid"],
            role_name=data["role_name"],
            field=data["field"],
            value=data["value"],
        )
    raise ValueError(f"Unknown change kind: {kind!r}")


# ============================================================================
# Diffs
# ============================================================================


@dataclass(frozen=True)
class PeriodChangeDiff:
    period_id: str
    field: PeriodField
    before: Any = None
    after: Any = None


@dataclass(frozen=True)
class EmployeeChangeDiff:
    period_id: str
    uid: str
    role_name: str
    field: EmployeeField
    before: Any = None
    after: Any = None


@dataclass(frozen=True)
class MetaChangeDiff:
    field: str  # "total_cash_tips" | "total_tips"
    before: int | None = None
    after: int | None = None


@dataclass
class PayrollDiff:
    """Field-level before/after changes produced by one batch."""

    periods: list[PeriodChangeDiff] = field(default_factory=list)
    employees: list[EmployeeChangeDiff] = field(default_factory=list)
    meta: list[MetaChangeDiff] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.periods or self.employees or self.meta)
