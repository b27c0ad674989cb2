"""Recompute pooled tip shares for the affected part of a snapshot."""

from __future__ import annotations

import logging

from tip_payroll.calculators.numbers import emp_key, max0
from tip_payroll.calculators.tip_allocation import (
    BARTENDER,
    BUSSER,
    HOST,
    SERVER,
    calculate_employee,
)
from tip_payroll.orchestrator.types import ActualAffected, AffectedHint
from tip_payroll.state.types import EmployeeRecord, PayrollSnapshot

logger = logging.getLogger(__name__)

# Pass-through roles first: their totals feed the Busser/Server pools.
ROLE_ORDER = (HOST, BARTENDER, BUSSER, SERVER)


def _role_totals(draft: PayrollSnapshot, period_id: str, role_name: str) -> tuple[int, int]:
    cc = cash = 0
    for employee in draft.employees:
        if employee.role_name != role_name:
            continue
        cell = employee.by_period.get(period_id)
        if cell is not None:
            cc += cell.cc
            cash += cell.cash
    return cc, cash


def _candidates(
    draft: PayrollSnapshot,
    hint: AffectedHint,
    period_id: str,
    role_name: str,
    has_employee_keys: bool,
) -> list[EmployeeRecord]:
    if has_employee_keys:
        return [
            e
            for e in draft.employees
            if e.role_name == role_name
            and emp_key(e.uid, period_id, e.role_name) in hint.employees
        ]
    # Period-only fallback: whole role, when the role is hinted or no roles are.
    if hint.roles and role_name not in hint.roles:
        return []
    return [e for e in draft.employees if e.role_name == role_name]


def recompute_affected(draft: PayrollSnapshot, hint: AffectedHint) -> ActualAffected:
    """Re-derive tip shares for the hinted cells of ``draft`` in place.

    Roles are walked in ``ROLE_ORDER`` per period and pools are read from
    the live draft before each role, so Busser/Server see the Host and
    Bartender totals already written in this pass. A cell is only written
    when its (cc, cash) actually changes, and a missing cell is never
    created for a zero result, which makes a second pass a no-op.

    Returns the hint widened with every rewritten cell.
    """
    actual = ActualAffected.widen_from(hint)
    period_ids = hint.periods | hint.employee_periods()
    rewritten = 0

    for period_id in sorted(period_ids):
        period = draft.periods.get(period_id)
        cc_tips = period.cc_tips if period else 0
        cash_tips = period.cash_tips if period else 0
        service_charge = period.service_charge if period else 0
        busser_percent = period.busser_percent if period else 0.0
        has_employee_keys = any(k.startswith(f"{period_id}:") for k in hint.employees)

        for role_name in ROLE_ORDER:
            candidates = _candidates(draft, hint, period_id, role_name, has_employee_keys)
            if not candidates:
                continue

            bartender_cc, bartender_cash = _role_totals(draft, period_id, BARTENDER)
            host_cc, host_cash = _role_totals(draft, period_id, HOST)
            cc_pool = max0(cc_tips + service_charge - bartender_cc - host_cc)
            cash_pool = max0(cash_tips - bartender_cash - host_cash)

            for employee in candidates:
                before = employee.by_period.get(period_id)
                result = calculate_employee(
                    role_name=role_name,
                    cc=before.cc if before else 0,
                    cash=before.cash if before else 0,
                    percent=before.percent if before else 0.0,
                    cc_pool_after_others=cc_pool,
                    cash_pool_after_others=cash_pool,
                    busser_percent=busser_percent,
                )

                if before is None and result.tips_cc == 0 and result.tips_cash == 0:
                    continue
                if before is not None and (before.cc, before.cash) == (
                    result.tips_cc,
                    result.tips_cash,
                ):
                    continue

                cell = employee.ensure_cell(period_id)
                cell.cc = result.tips_cc
                cell.cash = result.tips_cash
                actual.mark(period_id, emp_key(employee.uid, period_id, role_name), role_name)
                rewritten += 1

    logger.debug(
        "Recomputed %d period(s), rewrote %d cell(s)", len(period_ids), rewritten
    )
    return actual
