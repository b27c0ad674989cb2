"""Write literal edits into a working snapshot."""

from __future__ import annotations

from collections.abc import Iterable

from tip_payroll.calculators.numbers import clamp01, num, round_cents
from tip_payroll.state.types import (
    EmployeeChange,
    EmployeeField,
    PayrollChange,
    PayrollSnapshot,
    PeriodChange,
    PeriodField,
)

_RATIO_FIELDS = {PeriodField.BUSSER_PERCENT, EmployeeField.PERCENT}


def _coerce(field: PeriodField | EmployeeField, value: object) -> float | int:
    if field in _RATIO_FIELDS:
        return clamp01(value)
    if field == EmployeeField.HOUR:
        return num(value)
    return round_cents(num(value))


def apply_direct_edits(draft: PayrollSnapshot, changes: Iterable[PayrollChange]) -> None:
    """Apply normalized ``changes`` to ``draft`` in place.

    Missing periods and cells are created zeroed on first write. Edits for
    an employee that is not in the snapshot (matched on uid and role) are
    skipped. Ratio fields are clamped again here whatever the caller did.
    """
    for change in changes:
        if isinstance(change, PeriodChange):
            period = draft.ensure_period(change.period_id)
            field = PeriodField(change.field)
            setattr(period, field.value, _coerce(field, change.value))
        elif isinstance(change, EmployeeChange):
            employee = draft.find_employee(change.uid, change.role_name)
            if employee is None:
                continue
            cell = employee.ensure_cell(change.period_id)
            field = EmployeeField(change.field)
            setattr(cell, field.value, _coerce(field, change.value))
