"""Tests for the sheet view projection."""

from decimal import Decimal

import pytest

from tip_payroll.state.to_view import PERIOD_LABELS, UnknownPeriodError, from_state_to_model
from tip_payroll.state.types import LogEntry

from tests.conftest import P1, make_cell, make_employee, make_period, make_snapshot


class TestPeriodBlocks:
    """Test period blocks and labels."""

    def test_labels_cover_the_week(self):
        """Fourteen periods map to lunch and dinner for each weekday."""
        assert PERIOD_LABELS["1"] == ("Mon", "lunch")
        assert PERIOD_LABELS["2"] == ("Mon", "dinner")
        assert PERIOD_LABELS["14"] == ("Sun", "dinner")
        assert len(PERIOD_LABELS) == 14

    def test_blocks_sorted_numerically(self, snapshot):
        """Blocks sort by numeric period id."""
        snapshot.periods["10"] = make_period("10", cash_tips=5, cc_tips=7)
        model = from_state_to_model(snapshot)

        assert [b.period_id for b in model.blocks] == ["1", "2", "10"]
        assert (model.blocks[2].day, model.blocks[2].meal) == ("Fri", "dinner")
        assert model.blocks[2].tips_total == 12

    def test_unknown_period_raises(self):
        """A period id outside the week raises with the offending id."""
        snap = make_snapshot(periods=[make_period("15")])

        with pytest.raises(UnknownPeriodError) as exc_info:
            from_state_to_model(snap)
        assert exc_info.value.period_id == "15"


class TestRoleSections:
    """Test employee rows."""

    def test_sections_follow_employee_order(self, snapshot):
        """Sections and rows keep first-seen order."""
        model = from_state_to_model(snapshot)

        assert [s.role_name for s in model.sections] == ["Server", "Busser", "Bartender", "Host"]
        assert [e.uid for e in model.sections[0].employees] == ["10", "11"]

    def test_totals_above_minimum(self, snapshot):
        """Pay above the minimum leaves reported tips as they are."""
        server = from_state_to_model(snapshot).sections[0].employees[0]

        assert server.total_hour == Decimal("11")
        assert server.total_cc == Decimal("6600.00")
        assert server.total_cash == Decimal("0.00")

    def test_minimum_wage_makeup(self):
        """Hours over the cap count at the overtime multiplier."""
        snap = make_snapshot(
            periods=[make_period(P1)],
            employees=[
                make_employee(
                    "10",
                    "Server",
                    {P1: make_cell(hour=50, cc=1000, cash=30000)},
                    pay_rate=500,
                )
            ],
            min_pay_rate=1000,
        )
        row = from_state_to_model(snap).sections[0].employees[0]

        # minimum 40 * 1000 + 10 * 1.5 * 1000 = 55000; pay 40*500 + 10*750 + 1000 = 28500
        assert row.total_cash == Decimal("26500.00")
        assert row.total_cc == Decimal("1000.00")

    def test_custom_cap(self):
        """The view honours a custom cap and multiplier."""
        snap = make_snapshot(
            periods=[make_period(P1)],
            employees=[make_employee("10", "Server", {P1: make_cell(hour=10)}, pay_rate=0)],
            min_pay_rate=100,
        )
        row = from_state_to_model(snap, weekly_cap=8, overtime_multiplier=2).sections[0].employees[0]

        # minimum 8 * 100 + 2 * 2 * 100 = 1200, no cash to draw on
        assert row.total_cc == Decimal("1200.00")


class TestMetaAndLogs:
    """Test meta projection and log grouping."""

    def test_meta_and_busser_percent(self, snapshot):
        """Meta passes through and busser splits are keyed by period."""
        model = from_state_to_model(snapshot)

        assert model.meta["total_tips"] == 19000
        assert model.meta["location_name"] == "Main St"
        assert model.busser_by_period == {"1": 0.2, "2": 0.25}

    def test_logs_grouped_by_type(self, snapshot):
        """Logs group into payroll, period and employee buckets."""
        snapshot.logs = [
            LogEntry(type=1, timestamp="t1", operator_name="A", raw="closed"),
            LogEntry(type=2, timestamp="t2", operator_name="A", raw={"period_id": 3}),
            LogEntry(type=4, timestamp="t3", operator_name="A", raw={"periodId": "99"}),
            LogEntry(type=5, timestamp="t4", operator_name="B", raw={"uid": 10}),
        ]
        logs = from_state_to_model(snapshot).logs

        assert [log.timestamp for log in logs.payroll] == ["t1"]
        assert list(logs.period) == ["3"]
        assert [log.timestamp for log in logs.employee["10"]] == ["t4"]
        assert len(logs.all) == 4
