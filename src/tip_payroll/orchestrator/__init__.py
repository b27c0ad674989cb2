"""Incremental recomputation of a payroll snapshot."""

from tip_payroll.orchestrator.apply_changes import ApplyResult, apply_changes
from tip_payroll.orchestrator.diff import build_diff
from tip_payroll.orchestrator.direct_edits import apply_direct_edits
from tip_payroll.orchestrator.normalize import normalize_changes
from tip_payroll.orchestrator.recompute import ROLE_ORDER, recompute_affected
from tip_payroll.orchestrator.resolve import resolve_dependencies
from tip_payroll.orchestrator.types import ActualAffected, AffectedHint

__all__ = [
    "ActualAffected",
    "AffectedHint",
    "ApplyResult",
    "ROLE_ORDER",
    "apply_changes",
    "apply_direct_edits",
    "build_diff",
    "normalize_changes",
    "recompute_affected",
    "resolve_dependencies",
]
