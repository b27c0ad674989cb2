"""Tip payroll engine.

Incremental recomputation of restaurant tip-pool payroll: apply a batch of
sheet edits to a snapshot and get back the new snapshot, the set of cells
that were recomputed and a field-level diff.
"""

from tip_payroll.orchestrator import ApplyResult, apply_changes
from tip_payroll.state import PayrollSnapshot

__version__ = "1.0.0"

__all__ = ["ApplyResult", "PayrollSnapshot", "apply_changes", "__version__"]
