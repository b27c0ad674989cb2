"""Payroll sheet endpoints.

Every request carries the full snapshot; nothing is stored between calls.
"""

import logging

from fastapi import APIRouter, status

from tip_payroll.api.schemas import (
    ApplyChangesRequest,
    ApplyChangesResponse,
    ErrorResponse,
    PayrollSnapshotSchema,
    PayrollViewResponse,
    SpreadDayResponse,
    WeeklyHoursRequest,
    WeeklyHoursResponse,
)
from tip_payroll.calculators.overtime import compute_spread_of_hours, compute_weekly_hours_pay
from tip_payroll.calculators.types import PayShiftRecord
from tip_payroll.config import get_settings
from tip_payroll.orchestrator import apply_changes
from tip_payroll.state.to_view import from_state_to_model

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payroll", tags=["payroll"])


@router.post(
    "/apply-changes",
    response_model=ApplyChangesResponse,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def apply_payroll_changes(payload: ApplyChangesRequest) -> ApplyChangesResponse:
    """Apply a batch of sheet edits and return the new snapshot with its diff."""
    snapshot = payload.snapshot.to_state()
    result = apply_changes(snapshot, payload.to_changes())
    logger.debug(
        "Payroll %s: %d change(s) produced %d cell diff(s)",
        snapshot.meta.payroll_id,
        len(payload.changes),
        len(result.diff.employees),
    )
    return ApplyChangesResponse.from_result(result)


@router.post(
    "/view",
    response_model=PayrollViewResponse,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ErrorResponse}},
)
async def view_payroll(payload: PayrollSnapshotSchema) -> PayrollViewResponse:
    """Project a snapshot into the sheet view model."""
    settings = get_settings()
    model = from_state_to_model(
        payload.to_state(),
        weekly_cap=settings.weekly_overtime_cap,
        overtime_multiplier=settings.overtime_multiplier,
    )
    return PayrollViewResponse.model_validate(model)


@router.post(
    "/weekly-hours",
    response_model=WeeklyHoursResponse,
    status_code=status.HTTP_200_OK,
)
async def weekly_hours(payload: WeeklyHoursRequest) -> WeeklyHoursResponse:
    """Split one employee-week of shifts into regular/overtime pay and spread-of-hours."""
    settings = get_settings()
    records = [
        PayShiftRecord(
            date=shift.date,
            hour=shift.hour,
            pay_rate=shift.pay_rate,
            pay_type=shift.pay_type,
            position=shift.position,
        )
        for shift in payload.shifts
    ]
    hours = compute_weekly_hours_pay(
        records,
        weekly_cap=settings.weekly_overtime_cap,
        overtime_multiplier=settings.overtime_multiplier,
    )
    spread = compute_spread_of_hours(
        records,
        payload.min_pay_rate,
        enabled=payload.spread_of_hours,
        threshold_hours=settings.spread_threshold_hours,
        only_if_extra_hours_positive=False,
    )
    return WeeklyHoursResponse(
        regular_hours=hours.regular_hours,
        overtime_hours=hours.overtime_hours,
        foh_hours=hours.foh_hours,
        boh_hours=hours.boh_hours,
        foh_overtime_hours=hours.foh_overtime_hours,
        boh_overtime_hours=hours.boh_overtime_hours,
        hour_pay=hours.hour_pay,
        spread_hours=spread.spread_hours,
        spread_pay=spread.spread_pay,
        spread_days=[SpreadDayResponse.model_validate(day) for day in spread.per_date],
    )
