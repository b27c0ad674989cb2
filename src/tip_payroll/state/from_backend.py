"""Build a PayrollSnapshot from backend payroll records.

Two steps:
1) canonicalize: validate the raw payload (pydantic), stringify ids and
   rename fields. Amounts stay in dollars.
2) to state: convert dollars to cents, clamp ratios, keep only the four
   tip-pool roles and lay employees out by role then uid.

Malformed payloads raise ``pydantic.ValidationError``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tip_payroll.calculators.numbers import clamp01, float_to_cents, num
from tip_payroll.calculators.types import PayType
from tip_payroll.state.types import (
    EmployeeCell,
    EmployeeRecord,
    LogEntry,
    PayrollMeta,
    PayrollSnapshot,
    PeriodRecord,
)

ROLE_LABELS = {"1": "Server", "2": "Busser", "3": "Bartender", "4": "Host"}
SALARY_PAY_TYPE = 2


# ============================================================================
# Raw backend shapes
# ============================================================================


class RawPeriodRecord(BaseModel):
    id: int
    payroll_id: int
    period_id: int
    sales: float
    cash_tips: float
    cc_tips: float
    sc: float
    bus_percent: float | None = None


class RawEmployeeRecord(BaseModel):
    id: int
    uid: int
    payroll_id: int
    period_id: int
    role_id: int
    role_name: str | None = None
    pay_rate: float | None = None
    pay_type: int | None = None
    hour: float | None = None
    tips_cc: float | None = None
    tips_cash: float | None = None
    percent: float | None = None


class RawLocation(BaseModel):
    id: int
    name: str
    min_pay_rate: float


class RawMember(BaseModel):
    first_name: str | None = None
    last_name: str | None = None


class RawLog(BaseModel):
    type: int
    update_data: str
    timestamp: datetime
    member: RawMember


class RawPayroll(BaseModel):
    """Payroll row joined with its period, employee, location and log rows."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    location_id: int
    start_date: datetime
    end_date: datetime
    total_cash_tips: float
    total_tips: float
    period_records: list[RawPeriodRecord] = Field(default_factory=list, alias="periodRecords")
    employee_records: list[RawEmployeeRecord] = Field(
        default_factory=list, alias="employeeRecords"
    )
    location: RawLocation
    logs: list[RawLog] = Field(default_factory=list)


class RawRole(BaseModel):
    id: int
    name: str


class RawRateMember(BaseModel):
    uid: int
    first_name: str | None = None
    last_name: str | None = None


class RawPayRateRecord(BaseModel):
    id: int
    uid: int
    role_id: int
    location_id: int
    pay_rate: float
    pay_type: int | None = None
    role: RawRole
    member: RawRateMember


# ============================================================================
# Canonical shapes
# ============================================================================


@dataclass
class CanonicalPeriod:
    id: str
    payroll_id: str
    period_id: str
    sales: float
    cash_tips: float
    cc_tips: float
    service_charge: float
    busser_percent: float


@dataclass
class CanonicalEmployeeRow:
    id: str
    uid: str
    payroll_id: str
    period_id: str
    role_id: str
    role_name: str
    pay_rate: float
    pay_type: int
    hour: float
    tips_cc: float
    tips_cash: float
    percent: float


@dataclass
class CanonicalLog:
    type: int
    update_data: str
    timestamp: str
    first_name: str | None
    last_name: str | None


@dataclass
class CanonicalPayroll:
    id: str
    location_id: str
    location_name: str
    min_pay_rate: float
    start_date: str
    end_date: str
    total_cash_tips: float
    total_tips: float
    period_records: list[CanonicalPeriod] = field(default_factory=list)
    employee_records: list[CanonicalEmployeeRow] = field(default_factory=list)
    logs: list[CanonicalLog] = field(default_factory=list)


@dataclass
class PayRateRecord:
    id: str
    uid: str
    role_id: str
    location_id: str
    pay_rate: float
    pay_type: int | None
    role_name: str
    first_name: str | None
    last_name: str | None

    @property
    def display_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p).strip()


def _iso(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def canonicalize_snapshot(raw: RawPayroll | dict[str, Any]) -> CanonicalPayroll:
    """Validate a raw payroll payload and rename it into canonical form."""
    if not isinstance(raw, RawPayroll):
        raw = RawPayroll.model_validate(raw)

    return CanonicalPayroll(
        id=str(raw.id),
        location_id=str(raw.location_id),
        location_name=raw.location.name,
        min_pay_rate=raw.location.min_pay_rate,
        start_date=_iso(raw.start_date),
        end_date=_iso(raw.end_date),
        total_cash_tips=raw.total_cash_tips,
        total_tips=raw.total_tips,
        period_records=[
            CanonicalPeriod(
                id=str(r.id),
                payroll_id=str(r.payroll_id),
                period_id=str(r.period_id),
                sales=r.sales,
                cash_tips=r.cash_tips,
                cc_tips=r.cc_tips,
                service_charge=r.sc,
                busser_percent=r.bus_percent or 0,
            )
            for r in raw.period_records
        ],
        employee_records=[
            CanonicalEmployeeRow(
                id=str(e.id),
                uid=str(e.uid),
                payroll_id=str(e.payroll_id),
                period_id=str(e.period_id),
                role_id=str(e.role_id),
                role_name=e.role_name or "Unknown",
                pay_rate=e.pay_rate or 0,
                pay_type=e.pay_type or 1,
                hour=e.hour or 0,
                tips_cc=e.tips_cc or 0,
                tips_cash=e.tips_cash or 0,
                percent=e.percent or 0,
            )
            for e in raw.employee_records
        ],
        logs=[
            CanonicalLog(
                type=log.type,
                update_data=log.update_data,
                timestamp=_iso(log.timestamp),
                first_name=log.member.first_name,
                last_name=log.member.last_name,
            )
            for log in raw.logs
        ],
    )


def canonicalize_pay_rate(raw: RawPayRateRecord | dict[str, Any]) -> PayRateRecord:
    if not isinstance(raw, RawPayRateRecord):
        raw = RawPayRateRecord.model_validate(raw)
    return PayRateRecord(
        id=str(raw.id),
        uid=str(raw.uid),
        role_id=str(raw.role_id),
        location_id=str(raw.location_id),
        pay_rate=raw.pay_rate,
        pay_type=raw.pay_type,
        role_name=raw.role.name,
        first_name=raw.member.first_name,
        last_name=raw.member.last_name,
    )


def _parse_log(log: CanonicalLog) -> LogEntry:
    operator = " ".join(p for p in (log.first_name, log.last_name) if p) or "Unknown"
    try:
        payload: Any = json.loads(log.update_data)
    except (TypeError, ValueError):
        payload = log.update_data
    return LogEntry(type=log.type, timestamp=log.timestamp, operator_name=operator, raw=payload)


def _pay_type(code: int | None) -> PayType:
    return PayType.SALARY if code == SALARY_PAY_TYPE else PayType.HOURLY


def from_canonical_to_state(
    snap: CanonicalPayroll, rates: list[PayRateRecord]
) -> PayrollSnapshot:
    """Convert canonical records into a snapshot (cents, clamped ratios)."""
    periods = {
        p.period_id: PeriodRecord(
            id=p.period_id,
            sales=float_to_cents(p.sales),
            cash_tips=float_to_cents(p.cash_tips),
            cc_tips=float_to_cents(p.cc_tips),
            service_charge=float_to_cents(p.service_charge),
            busser_percent=clamp01(p.busser_percent or 0),
        )
        for p in snap.period_records
    }

    buckets: dict[str, dict[str, EmployeeRecord]] = {role_id: {} for role_id in ROLE_LABELS}

    # Everyone with a pay rate in a tip-pool role gets a row, even without records.
    for rate in rates:
        if not rate.uid or rate.role_id not in ROLE_LABELS:
            continue
        bucket = buckets[rate.role_id]
        if rate.uid not in bucket:
            bucket[rate.uid] = EmployeeRecord(
                uid=rate.uid,
                role_id=rate.role_id,
                role_name=ROLE_LABELS[rate.role_id],
                name=rate.display_name or rate.uid,
                pay_rate=float_to_cents(rate.pay_rate),
                pay_type=_pay_type(rate.pay_type),
            )

    for row in snap.employee_records:
        if row.role_id not in ROLE_LABELS:
            continue
        bucket = buckets[row.role_id]
        employee = bucket.get(row.uid)
        if employee is None:
            rate = next((r for r in rates if r.uid == row.uid), None)
            employee = EmployeeRecord(
                uid=row.uid,
                role_id=row.role_id,
                role_name=ROLE_LABELS[row.role_id],
                name=(rate.display_name if rate else "") or f"(#{row.uid})",
                pay_rate=float_to_cents(num(rate.pay_rate) if rate else 0),
                pay_type=_pay_type(rate.pay_type if rate else None),
            )
            bucket[row.uid] = employee

        employee.by_period[row.period_id] = EmployeeCell(
            hour=row.hour,
            cc=float_to_cents(row.tips_cc),
            cash=float_to_cents(row.tips_cash),
            percent=clamp01(row.percent or 0),
        )

    employees = [
        employee
        for role_id in ROLE_LABELS
        for _, employee in sorted(buckets[role_id].items())
    ]

    meta = PayrollMeta(
        payroll_id=snap.id,
        location_id=snap.location_id,
        location_name=snap.location_name,
        min_pay_rate=float_to_cents(snap.min_pay_rate),
        start_date_iso=snap.start_date,
        end_date_iso=snap.end_date,
        total_cash_tips=float_to_cents(snap.total_cash_tips),
        total_tips=float_to_cents(snap.total_tips),
    )

    return PayrollSnapshot(
        meta=meta,
        periods=periods,
        employees=employees,
        logs=[_parse_log(log) for log in snap.logs],
    )


def from_backend_snapshot_to_state(
    raw: RawPayroll | dict[str, Any],
    raw_rates: list[RawPayRateRecord | dict[str, Any]],
) -> PayrollSnapshot:
    """Entry point: raw backend payroll + pay rates to a snapshot."""
    snap = canonicalize_snapshot(raw)
    rates = [canonicalize_pay_rate(r) for r in raw_rates]
    return from_canonical_to_state(snap, rates)
