"""Pydantic schemas for API request/response models."""

from __future__ import annotations

from dataclasses import asdict
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tip_payroll.calculators.types import PayType, Position
from tip_payroll.orchestrator import ActualAffected, ApplyResult
from tip_payroll.orchestrator.normalize import FIELD_ALIASES
from tip_payroll.state.types import (
    EmployeeCell,
    EmployeeChange,
    EmployeeField,
    EmployeeRecord,
    LogEntry,
    PayrollChange,
    PayrollMeta,
    PayrollSnapshot,
    PeriodChange,
    PeriodField,
    PeriodRecord,
)


# ============================================================================
# Snapshot schemas
# ============================================================================


class PeriodRecordSchema(BaseModel):
    """Period inputs (cents; ``busser_percent`` in [0, 1])."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    sales: int = 0
    cash_tips: int = 0
    cc_tips: int = 0
    service_charge: int = 0
    busser_percent: float = 0.0


class EmployeeCellSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    hour: float = 0
    cc: int = 0
    cash: int = 0
    percent: float = 0.0


class EmployeeRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    uid: str
    role_id: str
    role_name: str
    name: str
    pay_rate: int = 0
    pay_type: PayType = PayType.HOURLY
    by_period: dict[str, EmployeeCellSchema] = Field(default_factory=dict)


class LogEntrySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: int
    timestamp: str
    operator_name: str
    raw: Any = None


class PayrollMetaSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payroll_id: str
    location_id: str
    location_name: str
    min_pay_rate: int
    start_date_iso: str
    end_date_iso: str
    total_cash_tips: int | None = None
    total_tips: int | None = None


class PayrollSnapshotSchema(BaseModel):
    """Wire form of a complete payroll snapshot."""

    model_config = ConfigDict(from_attributes=True)

    meta: PayrollMetaSchema
    periods: dict[str, PeriodRecordSchema] = Field(default_factory=dict)
    employees: list[EmployeeRecordSchema] = Field(default_factory=list)
    logs: list[LogEntrySchema] = Field(default_factory=list)

    @classmethod
    def from_state(cls, snapshot: PayrollSnapshot) -> PayrollSnapshotSchema:
        return cls.model_validate(asdict(snapshot))

    def to_state(self) -> PayrollSnapshot:
        return PayrollSnapshot(
            meta=PayrollMeta(**self.meta.model_dump()),
            periods={
                period_id: PeriodRecord(**period.model_dump())
                for period_id, period in self.periods.items()
            },
            employees=[
                EmployeeRecord(
                    uid=e.uid,
                    role_id=e.role_id,
                    role_name=e.role_name,
                    name=e.name,
                    pay_rate=e.pay_rate,
                    pay_type=e.pay_type,
                    by_period={
                        period_id: EmployeeCell(**cell.model_dump())
                        for period_id, cell in e.by_period.items()
                    },
                )
                for e in self.employees
            ],
            logs=[LogEntry(**log.model_dump()) for log in self.logs],
        )


# ============================================================================
# Change schemas
# ============================================================================


class PeriodChangeSchema(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    kind: Literal["period"]
    period_id: str
    field: PeriodField
    value: float

    @field_validator("field", mode="before")
    @classmethod
    def canonical_field(cls, v: Any) -> Any:
        return FIELD_ALIASES.get(v, v) if isinstance(v, str) else v

    def to_change(self) -> PeriodChange:
        return PeriodChange(period_id=self.period_id, field=self.field, value=self.value)


class EmployeeChangeSchema(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    kind: Literal["employee"]
    period_id: str
    uid: str
    role_name: str
    field: EmployeeField
    value: float

    @field_validator("field", mode="before")
    @classmethod
    def canonical_field(cls, v: Any) -> Any:
        return FIELD_ALIASES.get(v, v) if isinstance(v, str) else v

    def to_change(self) -> EmployeeChange:
        return EmployeeChange(
            period_id=self.period_id,
            uid=self.uid,
            role_name=self.role_name,
            field=self.field,
            value=self.value,
        )


ChangeSchema = Annotated[
    Union[PeriodChangeSchema, EmployeeChangeSchema], Field(discriminator="kind")
]


class ApplyChangesRequest(BaseModel):
    """Snapshot plus the batch of edits to apply to it."""

    snapshot: PayrollSnapshotSchema
    changes: list[ChangeSchema] = Field(default_factory=list)

    def to_changes(self) -> list[PayrollChange]:
        return [change.to_change() for change in self.changes]


# ============================================================================
# Result schemas
# ============================================================================


class AffectedResponse(BaseModel):
    """Affected set with members in sorted order."""

    periods: list[str]
    employees: list[str]
    roles: list[str]

    @classmethod
    def from_affected(cls, affected: ActualAffected) -> AffectedResponse:
        return cls(
            periods=sorted(affected.periods),
            employees=sorted(affected.employees),
            roles=sorted(affected.roles),
        )


class PeriodChangeDiffSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period_id: str
    field: PeriodField
    before: Any = None
    after: Any = None


class EmployeeChangeDiffSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period_id: str
    uid: str
    role_name: str
    field: EmployeeField
    before: Any = None
    after: Any = None


class MetaChangeDiffSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    field: str
    before: int | None = None
    after: int | None = None


class PayrollDiffSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    periods: list[PeriodChangeDiffSchema] = Field(default_factory=list)
    employees: list[EmployeeChangeDiffSchema] = Field(default_factory=list)
    meta: list[MetaChangeDiffSchema] = Field(default_factory=list)


class ApplyChangesResponse(BaseModel):
    next: PayrollSnapshotSchema
    affected: AffectedResponse
    diff: PayrollDiffSchema

    @classmethod
    def from_result(cls, result: ApplyResult) -> ApplyChangesResponse:
        return cls(
            next=PayrollSnapshotSchema.from_state(result.next),
            affected=AffectedResponse.from_affected(result.affected),
            diff=PayrollDiffSchema.model_validate(result.diff),
        )


# ============================================================================
# View schemas
# ============================================================================


class PeriodBlockResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period_id: str
    day: str
    meal: str
    sales: int
    cash_tips: int
    cc_tips: int
    service_charge: int
    tips_total: int


class EmployeeRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    uid: str
    name: str
    pay_rate: int
    total_hour: Decimal
    total_cc: Decimal
    total_cash: Decimal
    by_period: dict[str, dict[str, float | int]] = Field(default_factory=dict)


class RoleSectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    role_name: str
    employees: list[EmployeeRowResponse] = Field(default_factory=list)


class GroupedLogsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payroll: list[LogEntrySchema] = Field(default_factory=list)
    period: dict[str, list[LogEntrySchema]] = Field(default_factory=dict)
    employee: dict[str, list[LogEntrySchema]] = Field(default_factory=dict)
    all: list[LogEntrySchema] = Field(default_factory=list)


class PayrollViewResponse(BaseModel):
    """Sheet view model."""

    model_config = ConfigDict(from_attributes=True)

    blocks: list[PeriodBlockResponse]
    sections: list[RoleSectionResponse]
    busser_by_period: dict[str, float]
    meta: dict[str, Any]
    logs: GroupedLogsResponse


# ============================================================================
# Weekly hours schemas
# ============================================================================


class PayShiftSchema(BaseModel):
    date: str
    hour: float
    pay_rate: float
    pay_type: PayType = PayType.HOURLY
    position: Position = Position.FRONT_OF_HOUSE


class WeeklyHoursRequest(BaseModel):
    """Shifts for one employee-week plus the location's minimum rate."""

    shifts: list[PayShiftSchema] = Field(default_factory=list)
    min_pay_rate: float = 0
    spread_of_hours: bool = True


class SpreadDayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: str
    hours: int
    pay: Decimal


class WeeklyHoursResponse(BaseModel):
    regular_hours: Decimal
    overtime_hours: Decimal
    foh_hours: Decimal
    boh_hours: Decimal
    foh_overtime_hours: Decimal
    boh_overtime_hours: Decimal
    hour_pay: Decimal
    spread_hours: int
    spread_pay: Decimal
    spread_days: list[SpreadDayResponse] = Field(default_factory=list)


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    code: str | None = None
