"""Payroll snapshot model and its adapters."""

from tip_payroll.state.types import (
    EmployeeCell,
    EmployeeChange,
    EmployeeChangeDiff,
    EmployeeField,
    EmployeeRecord,
    LogEntry,
    MetaChangeDiff,
    PayrollChange,
    PayrollDiff,
    PayrollMeta,
    PayrollSnapshot,
    PeriodChange,
    PeriodChangeDiff,
    PeriodField,
    PeriodRecord,
    change_from_dict,
)

__all__ = [
    "EmployeeCell",
    "EmployeeChange",
    "EmployeeChangeDiff",
    "EmployeeField",
    "EmployeeRecord",
    "LogEntry",
    "MetaChangeDiff",
    "PayrollChange",
    "PayrollDiff",
    "PayrollMeta",
    "PayrollSnapshot",
    "PeriodChange",
    "PeriodChangeDiff",
    "PeriodField",
    "PeriodRecord",
    "change_from_dict",
]
