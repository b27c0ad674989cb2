"""Field-level before/after diff between two snapshots."""

from __future__ import annotations

from tip_payroll.calculators.numbers import split_emp_key
from tip_payroll.orchestrator.types import ActualAffected, AffectedHint
from tip_payroll.state.types import (
    EmployeeChangeDiff,
    EmployeeField,
    MetaChangeDiff,
    PayrollDiff,
    PayrollSnapshot,
    PeriodChangeDiff,
    PeriodField,
)

META_FIELDS = ("total_cash_tips", "total_tips")


def build_diff(
    before: PayrollSnapshot,
    after: PayrollSnapshot,
    affected: ActualAffected | AffectedHint,
) -> PayrollDiff:
    """Compare ``before`` and ``after`` within ``affected``.

    Only fields whose value differs are reported. A cell or period missing
    on one side reports ``None`` for that side. Returns an empty diff for an
    empty affected set or when both snapshots are the same object.
    """
    diff = PayrollDiff()
    if before is after or not (affected.periods or affected.employees or affected.roles):
        return diff

    for name in META_FIELDS:
        old = getattr(before.meta, name)
        new = getattr(after.meta, name)
        if old != new:
            diff.meta.append(MetaChangeDiff(field=name, before=old, after=new))

    for period_id in sorted(affected.periods):
        old_period = before.periods.get(period_id)
        new_period = after.periods.get(period_id)
        if old_period is None and new_period is None:
            continue
        for field in PeriodField:
            old = getattr(old_period, field.value) if old_period else None
            new = getattr(new_period, field.value) if new_period else None
            if old != new:
                diff.periods.append(
                    PeriodChangeDiff(period_id=period_id, field=field, before=old, after=new)
                )

    for key in sorted(affected.employees):
        period_id, uid, role_name = split_emp_key(key)
        old_employee = before.find_employee(uid, role_name)
        new_employee = after.find_employee(uid, role_name)
        old_cell = old_employee.by_period.get(period_id) if old_employee else None
        new_cell = new_employee.by_period.get(period_id) if new_employee else None
        if old_cell is None and new_cell is None:
            continue
        for field in EmployeeField:
            old = getattr(old_cell, field.value) if old_cell else None
            new = getattr(new_cell, field.value) if new_cell else None
            if old != new:
                diff.employees.append(
                    EmployeeChangeDiff(
                        period_id=period_id,
                        uid=uid,
                        role_name=role_name,
                        field=field,
                        before=old,
                        after=new,
                    )
                )

    return diff
