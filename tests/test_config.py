"""Tests for environment-driven settings."""

from decimal import Decimal

import pytest

from tip_payroll.config import Settings, get_settings


class TestSettings:
    """Test loading settings from the environment."""

    def test_defaults(self, monkeypatch):
        """Unset keys fall back to the documented defaults."""
        for name in (
            "ENGINE_VERSION",
            "WEEKLY_OVERTIME_CAP",
            "OVERTIME_MULTIPLIER",
            "SPREAD_THRESHOLD_HOURS",
            "HOST",
            "PORT",
            "DEBUG",
        ):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr("tip_payroll.config.load_dotenv", lambda: None)

        settings = Settings.from_env()

        assert settings.weekly_overtime_cap == Decimal("40")
        assert settings.overtime_multiplier == Decimal("1.5")
        assert settings.spread_threshold_hours == Decimal("10")
        assert settings.PORT == 8000
        assert settings.DEBUG is False

    def test_environment_overrides(self, monkeypatch):
        """Environment values override the defaults."""
        monkeypatch.setattr("tip_payroll.config.load_dotenv", lambda: None)
        monkeypatch.setenv("WEEKLY_OVERTIME_CAP", "35")
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("DEBUG", "True")

        settings = Settings.from_env()

        assert settings.weekly_overtime_cap == Decimal("35")
        assert settings.HOST == settings.host
        assert settings.PORT == 9001
        assert settings.DEBUG is True

    def test_invalid_number_raises(self, monkeypatch):
        """A non-numeric port is rejected."""
        monkeypatch.setattr("tip_payroll.config.load_dotenv", lambda: None)
        monkeypatch.setenv("PORT", "eighty")

        with pytest.raises(ValueError):
            Settings.from_env()

    def test_settings_are_cached(self):
        """get_settings returns one shared instance."""
        assert get_settings() is get_settings()

    def test_invalid_decimal_raises_value_error(self, monkeypatch):
        """A non-numeric multiplier raises ValueError naming the key."""
        monkeypatch.setattr("tip_payroll.config.load_dotenv", lambda: None)
        monkeypatch.setenv("OVERTIME_MULTIPLIER", "one and a half")

        with pytest.raises(ValueError, match="OVERTIME_MULTIPLIER"):
            Settings.from_env()
