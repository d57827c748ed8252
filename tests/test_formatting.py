"""Tests for display formatting and settings."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from billbook.config import LedgerSettings, get_settings
from billbook.formatting import category_name, format_amount, format_date


class TestFormatting:
    """Tests for display helpers."""

    def test_format_date(self):
        assert format_date(date(2024, 1, 1)) == "January 1, 2024"

    def test_format_naive_datetime(self):
        assert format_date(datetime(2024, 12, 25, 18, 0)) == "December 25, 2024"

    def test_format_aware_datetime_uses_local_day(self):
        local_noon = datetime(2024, 7, 4, 12, 0).astimezone()
        assert format_date(local_noon) == "July 4, 2024"

    def test_format_amount(self):
        assert format_amount(Decimal("50"), "₹") == "₹50.00"
        assert format_amount("12.5", "$") == "$12.50"

    def test_format_amount_default_symbol(self):
        assert format_amount(1).endswith("1.00")

    def test_category_name(self):
        assert category_name("entertainment") == "Entertainment"
        assert category_name("rent") is None


class TestSettings:
    """Tests for LedgerSettings."""

    def test_defaults(self, monkeypatch):
        for var in ("BILLBOOK_STORAGE_KEY", "BILLBOOK_STRICT_LOAD", "BILLBOOK_CURRENCY_SYMBOL"):
            monkeypatch.delenv(var, raising=False)
        settings = LedgerSettings(_env_file=None)
        assert settings.storage_key == "billRecords"
        assert settings.strict_load is False
        assert settings.currency_symbol == "₹"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("BILLBOOK_STORAGE_KEY", "household")
        monkeypatch.setenv("BILLBOOK_STRICT_LOAD", "true")
        settings = LedgerSettings(_env_file=None)
        assert settings.storage_key == "household"
        assert settings.strict_load is True

    def test_storage_key_whitespace_rejected(self):
        with pytest.raises(ValueError):
            LedgerSettings(storage_key=" billRecords", _env_file=None)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()
