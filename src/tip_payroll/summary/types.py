"""Types for reconciled payroll data and the weekly summary built from it.

Reconciliation (matching sheet figures against time-clock and point-of-sale
exports) is done by an outside collaborator implementing ``Reconciler``.
Money is in cents; hours are decimal hours.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Protocol

from tip_payroll.calculators.overtime import OVERTIME_MULTIPLIER
from tip_payroll.calculators.types import PayType, Position
from tip_payroll.state.types import PayrollSnapshot


class VarianceStatus(str, Enum):
    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"


class IssueLevel(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ============================================================================
# Reconciled input
# ============================================================================


@dataclass
class Variance:
    """Sheet figure against the external source's figure."""

    sheet: float
    external: float
    delta: float = 0.0  # sheet - external
    pct: float = 0.0  # |delta| / external
    status: VarianceStatus = VarianceStatus.OK
    source: str = "EXTERNAL"


@dataclass
class RoleSlice:
    """The part of one employee-day worked in one role, as on the sheet."""

    role_id: str
    role_name: str
    pay_rate: int  # hourly rate, or weekly salary for SALARY
    pay_type: PayType = PayType.HOURLY
    position: Position = Position.FRONT_OF_HOUSE
    hours: float = 0
    cc_tips: int = 0
    cash_tips: int = 0


@dataclass
class EmployeeDay:
    """One employee's reconciled day."""

    date: str  # YYYY-MM-DD
    employee_uid: str
    display_name: str
    hours: float = 0
    cc_tips: int = 0
    cash_tips: int = 0
    segments: list[RoleSlice] = field(default_factory=list)
    hours_by_role: dict[str, Variance] = field(default_factory=dict)


@dataclass
class ReconciledDay:
    """Location totals for one day with their variances."""

    date: str
    hours: float = 0
    cc_tips: int = 0
    cash_tips: int = 0
    service_charge: int = 0
    hours_variance: Variance | None = None
    cc_tips_variance: Variance | None = None
    service_charge_variance: Variance | None = None


@dataclass
class TimeClockEvent:
    """A clocked shift from the time-clock export."""

    date: str
    employee_uid: str
    clock_in: str  # ISO 8601
    role_id: str
    hours: float
    role_name: str = ""
    pay_rate: int = 0
    pay_type: PayType = PayType.HOURLY
    position: Position = Position.FRONT_OF_HOUSE


@dataclass
class ReconciliationIssue:
    level: IssueLevel
    code: str
    message: str
    date: str | None = None
    employee_uid: str | None = None


@dataclass
class ReconciliationReport:
    issues: list[ReconciliationIssue] = field(default_factory=list)
    score: float = 100


@dataclass
class ReconciledMeta:
    location_id: str
    minimum_wage: int  # cents per hour
    generated_at: str = ""
    location_state: str | None = None
    # uid -> that employee's shifts; required by the weekly summary
    time_clock_events_by_employee: dict[str, list[TimeClockEvent]] | None = None


@dataclass
class ReconciledPayroll:
    """Everything the weekly summary needs, already reconciled."""

    meta: ReconciledMeta
    days: list[ReconciledDay] = field(default_factory=list)
    employees: list[EmployeeDay] = field(default_factory=list)
    report: ReconciliationReport = field(default_factory=ReconciliationReport)


class Reconciler(Protocol):
    """Matches a payroll snapshot against time-clock data."""

    def reconcile(
        self,
        snapshot: PayrollSnapshot,
        time_clock_events: Sequence[TimeClockEvent],
    ) -> ReconciledPayroll:
        """Return the snapshot's days and employee-days with variances.

        Implementations must fill ``meta.time_clock_events_by_employee``.
        """
        ...


# ============================================================================
# Weekly summary
# ============================================================================


@dataclass
class RoleSummary:
    """One employee's week in one role."""

    role_id: str
    role_name: str
    pay_rate: int
    pay_type: PayType = PayType.HOURLY
    position: Position = Position.FRONT_OF_HOUSE
    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    overtime_multiplier: Decimal = OVERTIME_MULTIPLIER
    wages: int = 0


@dataclass
class PositionTotals:
    hours: Decimal = Decimal("0")
    wages: int = 0


@dataclass
class EmployeeWeekTotals:
    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    spread_of_hours: int = 0  # qualifying days
    spread_pay: int = 0
    wages: int = 0
    cc_tips: int = 0  # after minimum-wage makeup
    cash_tips: int = 0  # cash drawn in by the minimum-wage makeup
    gross: int = 0
    boh: PositionTotals = field(default_factory=PositionTotals)
    foh: PositionTotals = field(default_factory=PositionTotals)


@dataclass
class DailyMismatch:
    date: str
    role_id: str
    role_name: str
    variance: Variance
    field: str = "hours"


@dataclass
class WeeklyEmployeeSummary:
    employee_uid: str
    display_name: str
    hours_by_role: dict[str, RoleSummary] = field(default_factory=dict)
    totals: EmployeeWeekTotals = field(default_factory=EmployeeWeekTotals)
    role_variances: dict[str, Variance] = field(default_factory=dict)
    overall_variance: Variance | None = None
    daily_mismatches: list[DailyMismatch] = field(default_factory=list)


@dataclass
class WeeklyTotals:
    hours: Decimal = Decimal("0")
    cc_tips: int = 0
    cash_tips: int = 0
    service_charge: int = 0


@dataclass
class WeeklyReport:
    score: float
    issues: list[ReconciliationIssue]
    issue_count_by_level: dict[IssueLevel, int]
    blocking: bool  # any ERROR issue


@dataclass
class WeeklySummary:
    start_date: str
    end_date: str
    employees: list[WeeklyEmployeeSummary]
    days: list[ReconciledDay]
    totals: WeeklyTotals
    meta: ReconciledMeta
    report: WeeklyReport
