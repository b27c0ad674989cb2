"""Type definitions for the tip-pool calculators."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class PayType(str, Enum):
    """How an employee's base wage is earned."""

    HOURLY = "HOURLY"
    SALARY = "SALARY"


class Position(str, Enum):
    """Where a shift was worked."""

    FRONT_OF_HOUSE = "FRONT_OF_HOUSE"
    BACK_OF_HOUSE = "BACK_OF_HOUSE"


@dataclass(frozen=True)
class EmployeeTipResult:
    """One employee's tip share for one role in one period (cents)."""

    tips_cc: int
    tips_cash: int


@dataclass(frozen=True)
class PeriodTotals:
    """Derived totals for a single period."""

    total_tips: Decimal  # cc_tips + service charge
    tips_percent: Decimal  # total_tips / sales, 4 decimals


@dataclass(frozen=True)
class PayrollTotals:
    """Whole-payroll tip totals, rounded to integers."""

    total_tips: int
    total_cash_tips: int


@dataclass(frozen=True)
class MinPayAdjustResult:
    """Outcome of the minimum-wage makeup."""

    tips: Decimal
    tips_cash: Decimal
    pay_amount: Decimal
    minimum_pay: Decimal


@dataclass
class ShiftRecord:
    """A single clocked shift used for role-aware overtime splitting."""

    clock_in: str  # ISO 8601, compared lexically
    role_id: str
    hour: float


@dataclass
class RoleWeeklyHours:
    """Regular/overtime hours accumulated by one role over a week."""

    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")


@dataclass
class PayShiftRecord:
    """A dated shift carrying pay information (hourly or salaried)."""

    date: str  # YYYY-MM-DD
    hour: float
    pay_rate: float  # hourly rate, or weekly salary for SALARY
    pay_type: PayType = PayType.HOURLY
    position: Position = Position.FRONT_OF_HOUSE


@dataclass
class WeeklyHoursPay:
    """Weekly regular/overtime split with front/back-of-house breakdown."""

    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    foh_hours: Decimal = Decimal("0")
    boh_hours: Decimal = Decimal("0")
    foh_overtime_hours: Decimal = Decimal("0")
    boh_overtime_hours: Decimal = Decimal("0")
    hour_pay: Decimal = Decimal("0")  # wages only, no tips or bonus


@dataclass
class SpreadDay:
    date: str
    hours: int
    pay: Decimal


@dataclass
class SpreadResult:
    """Spread-of-hours premium: one extra hour per qualifying day."""

    spread_hours: int = 0
    spread_pay: Decimal = Decimal("0")
    per_date: list[SpreadDay] = field(default_factory=list)
