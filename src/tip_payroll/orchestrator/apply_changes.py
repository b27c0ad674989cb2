"""Apply a batch of edits to a payroll snapshot - main orchestrator."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from tip_payroll.calculators.numbers import split_emp_key
from tip_payroll.orchestrator.diff import build_diff
from tip_payroll.orchestrator.direct_edits import apply_direct_edits
from tip_payroll.orchestrator.normalize import normalize_changes
from tip_payroll.orchestrator.recompute import recompute_affected
from tip_payroll.orchestrator.resolve import resolve_dependencies
from tip_payroll.orchestrator.types import ActualAffected
from tip_payroll.state.types import PayrollChange, PayrollDiff, PayrollSnapshot

logger = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """Result of applying one batch of changes."""

    next: PayrollSnapshot
    affected: ActualAffected
    diff: PayrollDiff


def recompute_meta_totals(draft: PayrollSnapshot) -> None:
    """Refresh the cached whole-payroll tip totals on ``draft``."""
    total_cash_tips = sum(p.cash_tips for p in draft.periods.values())
    draft.meta.total_cash_tips = total_cash_tips
    draft.meta.total_tips = total_cash_tips + sum(p.cc_tips for p in draft.periods.values())


def prune_empty_cells(
    draft: PayrollSnapshot, original: PayrollSnapshot, affected: ActualAffected
) -> int:
    """Drop all-zero cells this batch created, and their affected keys."""
    pruned = 0
    for key in sorted(affected.employees):
        period_id, uid, role_name = split_emp_key(key)
        employee = draft.find_employee(uid, role_name)
        if employee is None:
            continue
        cell = employee.by_period.get(period_id)
        if cell is None or not cell.is_empty:
            continue
        existing = original.find_employee(uid, role_name)
        if existing is not None and period_id in existing.by_period:
            continue
        del employee.by_period[period_id]
        affected.employees.discard(key)
        pruned += 1
    return pruned


def apply_changes(
    snapshot: PayrollSnapshot,
    changes: Iterable[PayrollChange | dict[str, Any]],
) -> ApplyResult:
    """Apply ``changes`` and re-derive every dependent tip figure.

    Pipeline (stable order):
    1) Normalize the change records
    2) Write literal edits into a private draft
    3) Resolve the dependency hint against the untouched snapshot
    4) Recompute pooled shares on the draft
    5) Prune empty cells created by this batch
    6) Refresh meta totals, unless nothing was affected
    7) Diff input vs. draft over the actual affected set

    ``snapshot`` is never mutated; ``next`` shares no objects with it. A
    batch that affects nothing returns a copy equal to ``snapshot``, cached
    totals included.
    """
    normalized = normalize_changes(changes)

    draft = snapshot.draft()
    apply_direct_edits(draft, normalized)

    hint = resolve_dependencies(snapshot, normalized)
    affected = recompute_affected(draft, hint)
    pruned = prune_empty_cells(draft, snapshot, affected)

    if not affected.is_empty:
        recompute_meta_totals(draft)
    diff = build_diff(snapshot, draft, affected)

    logger.debug(
        "Applied %d change(s): %d period(s), %d cell(s) affected, %d pruned",
        len(normalized),
        len(affected.periods),
        len(affected.employees),
        pruned,
    )
    return ApplyResult(next=draft, affected=affected, diff=diff)
