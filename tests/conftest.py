"""Pytest fixtures for tip payroll engine tests."""

from __future__ import annotations

import pytest

from tip_payroll.state.types import (
    EmployeeCell,
    EmployeeRecord,
    PayrollMeta,
    PayrollSnapshot,
    PeriodRecord,
)

P1 = "1"  # Monday lunch
P2 = "2"  # Monday dinner

ROLE_IDS = {"Server": "1", "Busser": "2", "Bartender": "3", "Host": "4"}


def make_period(period_id: str = P1, **fields) -> PeriodRecord:
    return PeriodRecord(id=period_id, **fields)


def make_cell(**fields) -> EmployeeCell:
    return EmployeeCell(**fields)


def make_employee(
    uid: str,
    role_name: str,
    cells: dict[str, EmployeeCell] | None = None,
    pay_rate: int = 0,
) -> EmployeeRecord:
    return EmployeeRecord(
        uid=uid,
        role_id=ROLE_IDS.get(role_name, "0"),
        role_name=role_name,
        name=f"Employee {uid}",
        pay_rate=pay_rate,
        by_period=dict(cells or {}),
    )


def make_snapshot(
    periods: list[PeriodRecord] | None = None,
    employees: list[EmployeeRecord] | None = None,
    min_pay_rate: int = 1500,
) -> PayrollSnapshot:
    """Snapshot whose cached meta totals agree with its periods."""
    periods = periods or []
    total_cash = sum(p.cash_tips for p in periods)
    return PayrollSnapshot(
        meta=PayrollMeta(
            payroll_id="100",
            location_id="7",
            location_name="Main St",
            min_pay_rate=min_pay_rate,
            start_date_iso="2024-01-01T00:00:00.000Z",
            end_date_iso="2024-01-07T00:00:00.000Z",
            total_cash_tips=total_cash,
            total_tips=total_cash + sum(p.cc_tips for p in periods),
        ),
        periods={p.id: p for p in periods},
        employees=list(employees or []),
    )


@pytest.fixture
def snapshot() -> PayrollSnapshot:
    """A consistent two-period sheet.

    Period 1 pools: cc 10000 + 2000 sc - 2000 bartender - 1000 host = 9000,
    cash 5000 - 1000 - 500 = 3500, busser_percent 0.2. Two servers at 50%
    each and one busser at 100%.

    Period 2 pools: cc 4000, cash 0, busser_percent 0.25, one server at 100%.
    """
    return make_snapshot(
        periods=[
            make_period(
                P1,
                sales=100000,
                cash_tips=5000,
                cc_tips=10000,
                service_charge=2000,
                busser_percent=0.2,
            ),
            make_period(P2, sales=40000, cc_tips=4000, busser_percent=0.25),
        ],
        employees=[
            make_employee("10", "Server", {
                P1: make_cell(hour=5, cc=3600, cash=1400, percent=0.5),
                P2: make_cell(hour=6, cc=3000, cash=0, percent=1.0),
            }, pay_rate=1000),
            make_employee("11", "Server", {
                P1: make_cell(hour=5, cc=3600, cash=1400, percent=0.5),
            }, pay_rate=1000),
            make_employee("20", "Busser", {
                P1: make_cell(hour=4, cc=1800, cash=700, percent=1.0),
            }, pay_rate=900),
            make_employee("30", "Bartender", {
                P1: make_cell(hour=5, cc=2000, cash=1000),
            }, pay_rate=1200),
            make_employee("40", "Host", {
                P1: make_cell(hour=5, cc=1000, cash=500),
            }, pay_rate=1100),
        ],
    )
