"""Canonicalize incoming change records."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from tip_payroll.calculators.numbers import clamp01
from tip_payroll.state.types import (
    EmployeeChange,
    EmployeeField,
    PayrollChange,
    PeriodChange,
    PeriodField,
    change_from_dict,
)

# Field names as emitted by the sheet UI.
FIELD_ALIASES = {
    "cashTips": "cash_tips",
    "ccTips": "cc_tips",
    "serviceCharge": "service_charge",
    "busserPercent": "busser_percent",
}


def _canonical_field(enum_cls: type, name: Any) -> Any:
    if isinstance(name, enum_cls):
        return name
    name = str(name)
    return enum_cls(FIELD_ALIASES.get(name, name))


def normalize_changes(changes: Iterable[PayrollChange | dict[str, Any]]) -> list[PayrollChange]:
    """Return canonical copies of ``changes`` in the same order.

    Identifiers become strings, field names become enum members and
    employee ``percent`` values are clamped to [0, 1]. Nothing is dropped.
    Raises ``ValueError`` for an unknown change kind or field name.
    """
    normalized: list[PayrollChange] = []
    for change in changes:
        if isinstance(change, dict):
            change = change_from_dict(change)

        if isinstance(change, PeriodChange):
            normalized.append(
                PeriodChange(
                    period_id=str(change.period_id),
                    field=_canonical_field(PeriodField, change.field),
                    value=change.value,
                )
            )
        elif isinstance(change, EmployeeChange):
            field = _canonical_field(EmployeeField, change.field)
            value = clamp01(change.value) if field == EmployeeField.PERCENT else change.value
            normalized.append(
                EmployeeChange(
                    period_id=str(change.period_id),
                    uid=str(change.uid),
                    role_name=str(change.role_name),
                    field=field,
                    value=value,
                )
            )
        else:
            raise ValueError(f"Unsupported change record: {change!r}")
    return normalized
