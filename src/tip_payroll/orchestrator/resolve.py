"""Static dependency propagation for a batch of edits.

Propagation rules:
- Pool field edit (cc_tips, cash_tips, service_charge, busser_percent):
  the period plus every Server/Busser already holding a cell in it, or
  named by an employee edit for it in the same batch.
- Sales edit: the period only.
- Employee edit: that employee's key and role, never the period.
- Host/Bartender edit: additionally cascades to Server/Busser employees of
  the period, selected as for a pool field edit.

The result is a hint. The recompute pass falls back to whole-role
recomputation for periods without employee keys, so the hint may
under-approximate.
"""

from __future__ import annotations

from collections.abc import Sequence

from tip_payroll.calculators.numbers import emp_key
from tip_payroll.calculators.tip_allocation import POOLED_ROLES, PRIORITY_ROLES
from tip_payroll.orchestrator.types import AffectedHint
from tip_payroll.state.types import (
    EmployeeChange,
    PayrollChange,
    PayrollSnapshot,
    PeriodChange,
    PeriodField,
)

POOL_FIELDS = frozenset(
    {
        PeriodField.CC_TIPS,
        PeriodField.CASH_TIPS,
        PeriodField.SERVICE_CHARGE,
        PeriodField.BUSSER_PERCENT,
    }
)


def _named_in_batch(changes: Sequence[PayrollChange]) -> set[str]:
    return {
        emp_key(c.uid, c.period_id, c.role_name)
        for c in changes
        if isinstance(c, EmployeeChange)
    }


def _add_pooled_dependents(
    snapshot: PayrollSnapshot,
    period_id: str,
    named: set[str],
    hint: AffectedHint,
) -> None:
    for employee in snapshot.employees:
        if employee.role_name not in POOLED_ROLES:
            continue
        key = emp_key(employee.uid, period_id, employee.role_name)
        if period_id in employee.by_period or key in named:
            hint.employees.add(key)
            hint.roles.add(employee.role_name)


def resolve_dependencies(
    snapshot: PayrollSnapshot, changes: Sequence[PayrollChange]
) -> AffectedHint:
    """Compute what ``changes`` might affect, from normalized changes."""
    hint = AffectedHint()
    named = _named_in_batch(changes)

    for change in changes:
        if isinstance(change, PeriodChange):
            hint.periods.add(change.period_id)
            if PeriodField(change.field) in POOL_FIELDS:
                _add_pooled_dependents(snapshot, change.period_id, named, hint)

        elif isinstance(change, EmployeeChange):
            employee = snapshot.find_employee(change.uid, change.role_name)
            if employee is None:
                continue
            hint.employees.add(emp_key(employee.uid, change.period_id, employee.role_name))
            hint.roles.add(employee.role_name)

            if employee.role_name in PRIORITY_ROLES:
                _add_pooled_dependents(snapshot, change.period_id, named, hint)

    return hint
