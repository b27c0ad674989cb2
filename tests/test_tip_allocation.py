"""Unit tests for the tip-pool allocation formulas."""

from decimal import Decimal

import pytest

from tip_payroll.calculators.tip_allocation import (
    calculate_employee,
    calculate_period_totals,
    sum_payroll_totals,
)


def _calc(role_name, **overrides):
    args = dict(
        cc=0,
        cash=0,
        percent=1.0,
        cc_pool_after_others=10000,
        cash_pool_after_others=4000,
        busser_percent=0.2,
    )
    args.update(overrides)
    return calculate_employee(role_name=role_name, **args)


class TestCalculateEmployee:
    """Test per-role tip allocation."""

    @pytest.mark.parametrize("role_name", ["Host", "Bartender", "Dishwasher"])
    def test_pass_through_roles(self, role_name):
        """Non-pooled roles keep their own figures whatever the pools are."""
        result = _calc(role_name, cc=1234, cash=567, percent=0.3)
        assert (result.tips_cc, result.tips_cash) == (1234, 567)

    def test_busser_share(self):
        """Bussers split busser_percent of each pool."""
        result = _calc("Busser", percent=0.5)
        assert (result.tips_cc, result.tips_cash) == (1000, 400)

    def test_server_share(self):
        """Servers split the remainder of each pool."""
        result = _calc("Server", percent=0.5)
        assert (result.tips_cc, result.tips_cash) == (4000, 1600)

    def test_single_busser_and_server_split_whole_pool(self):
        """At 100% each, one busser plus one server take exactly the pool."""
        busser = _calc("Busser", cc_pool_after_others=9999, busser_percent=0.37)
        server = _calc("Server", cc_pool_after_others=9999, busser_percent=0.37)
        assert busser.tips_cc + server.tips_cc == 9999

    def test_negative_pools_clamp_to_zero(self):
        """A negative pool pays nothing."""
        result = _calc("Server", cc_pool_after_others=-500, cash_pool_after_others=-1)
        assert (result.tips_cc, result.tips_cash) == (0, 0)

    def test_out_of_range_ratios_clamp(self):
        """percent > 1 acts as 1 and busser_percent < 0 as 0."""
        result = _calc("Server", percent=3, busser_percent=-0.5)
        assert (result.tips_cc, result.tips_cash) == (10000, 4000)

    def test_rounds_to_whole_cents(self):
        """Shares round half-up to whole cents."""
        result = _calc("Busser", cc_pool_after_others=1001, busser_percent=0.5)
        assert result.tips_cc == 501


class TestPeriodTotals:
    """Test per-period derived totals."""

    def test_totals_and_percent(self):
        """Total tips include service charge; the percent is of sales."""
        totals = calculate_period_totals(sales=1000, cc_tips=100, sc=20, cash_tips=50)
        assert totals.total_tips == Decimal("120.00")
        assert totals.tips_percent == Decimal("0.1200")

    def test_zero_sales(self):
        """Zero sales give a zero tip percent."""
        totals = calculate_period_totals(sales=0, cc_tips=30, sc=0)
        assert totals.tips_percent == Decimal("0")

    def test_payroll_totals_skip_missing_values(self):
        """Missing or junk values count as zero."""
        totals = sum_payroll_totals(
            [
                {"cc_tips": 10.4, "sc": 0, "cash_tips": 5.5},
                {"cc_tips": None, "sc": "x", "cash_tips": float("nan")},
                {},
            ]
        )
        assert totals.total_tips == 10
        assert totals.total_cash_tips == 6
