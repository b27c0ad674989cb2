"""Unit tests for the minimum-wage makeup."""

from decimal import Decimal

from tip_payroll.calculators.minimum_pay import apply_minimum_pay_adjustment


class TestMinimumPayAdjustment:
    """Test topping tips up to the statutory minimum."""

    def test_cash_then_reported_tips_close_the_gap(self):
        """Cash covers what it can; reported tips take the rest."""
        result = apply_minimum_pay_adjustment(
            regular_hours=20,
            overtime_hours=10,
            pay_amount=400,
            tips=20,
            tips_cash=80,
            bonus=0,
            min_pay_rate=20,
        )
        assert result.minimum_pay == Decimal("700.00")
        assert result.tips_cash == Decimal("80.00")
        assert result.tips == Decimal("240.00")
        assert result.pay_amount == Decimal("700.00")

    def test_cash_alone_covers_gap(self):
        """Only the cash needed to reach the minimum is used."""
        result = apply_minimum_pay_adjustment(
            regular_hours=10,
            overtime_hours=0,
            pay_amount=180,
            tips=30,
            tips_cash=50,
            bonus=0,
            min_pay_rate=20,
        )
        assert result.tips_cash == Decimal("20.00")
        assert result.tips == Decimal("30.00")

    def test_no_adjustment_above_minimum(self):
        """Pay already above the minimum leaves tips untouched and uses no cash."""
        result = apply_minimum_pay_adjustment(
            regular_hours=10,
            overtime_hours=0,
            pay_amount=500,
            tips=100,
            tips_cash=40,
            bonus=0,
            min_pay_rate=15,
        )
        assert result.tips == Decimal("100.00")
        assert result.tips_cash == Decimal("0.00")
        assert result.pay_amount == Decimal("500.00")

    def test_custom_overtime_multiplier(self):
        """Overtime hours count at the given multiplier."""
        result = apply_minimum_pay_adjustment(
            regular_hours=0,
            overtime_hours=10,
            pay_amount=0,
            tips=0,
            tips_cash=0,
            bonus=0,
            min_pay_rate=10,
            overtime_multiplier=2,
        )
        assert result.minimum_pay == Decimal("200.00")
