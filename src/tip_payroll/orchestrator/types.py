"""Affected-set types.

``AffectedHint`` is the resolver's conservative guess of what must be
recomputed. ``ActualAffected`` is what the recompute pass reports back: the
hint widened with every cell it actually rewrote. Keeping them as separate
types makes the widening an explicit step.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class AffectedHint:
    periods: set[str] = field(default_factory=set)
    employees: set[str] = field(default_factory=set)  # "period:uid:role"
    roles: set[str] = field(default_factory=set)

    def employee_periods(self) -> set[str]:
        """Period ids mentioned by any employee key."""
        return {key.split(":", 1)[0] for key in self.employees if ":" in key}


@dataclass
class ActualAffected:
    periods: set[str] = field(default_factory=set)
    employees: set[str] = field(default_factory=set)
    roles: set[str] = field(default_factory=set)

    @classmethod
    def widen_from(cls, hint: AffectedHint) -> ActualAffected:
        """Start from a copy of ``hint``; recompute adds what it rewrites."""
        return cls(
            periods=set(hint.periods),
            employees=set(hint.employees),
            roles=set(hint.roles),
        )

    def mark(self, period_id: str, key: str, role_name: str) -> None:
        self.periods.add(period_id)
        self.employees.add(key)
        self.roles.add(role_name)

    @property
    def is_empty(self) -> bool:
        return not (self.periods or self.employees or self.roles)
