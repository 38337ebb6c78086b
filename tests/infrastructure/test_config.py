"""Tests for settings read from the environment."""

from decimal import Decimal
from pathlib import Path

from orderflow.infrastructure.config import Settings


class TestSettingsFromEnv:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.default_tax_rate == Decimal("0.15")
        assert settings.default_currency == "USD"
        assert settings.base_shipping_fee == Decimal("3.5")
        assert settings.max_shipping_fee == Decimal("20")
        assert settings.smtp_host is None
        assert settings.app_base_url == "http://localhost:4000"
        assert settings.email_from == "no-reply@localhost"
        assert settings.report_timezone is None

    def test_overrides(self):
        settings = Settings.from_env({
            "ORDERFLOW_DATA_DIR": "/srv/orderflow",
            "DEFAULT_TAX_RATE": "0.12",
            "DEFAULT_CURRENCY": "eur",
            "SMTP_HOST": "smtp.example.com",
            "SMTP_PORT": "465",
            "SMTP_SECURE": "true",
            "APP_BASE_URL": "https://shop.example.com",
            "NOTIFY_WORKERS": "4",
            "LOG_LEVEL": "debug",
            "REPORT_TIMEZONE": "Europe/Madrid",
        })
        assert settings.data_dir == Path("/srv/orderflow")
        assert settings.default_tax_rate == Decimal("0.12")
        assert settings.default_currency == "EUR"
        assert settings.smtp_port == 465
        assert settings.smtp_secure is True
        assert settings.app_base_url == "https://shop.example.com"
        assert settings.notify_workers == 4
        assert settings.log_level == "DEBUG"
        assert settings.report_timezone == "Europe/Madrid"

    def test_unparseable_numbers_fall_back(self):
        settings = Settings.from_env({"DEFAULT_TAX_RATE": "lots", "SMTP_PORT": "x"})
        assert settings.default_tax_rate == Decimal("0.15")
        assert settings.smtp_port == 587

    def test_with_data_dir(self, tmp_path):
        assert Settings.from_env({}).with_data_dir(tmp_path).data_dir == tmp_path
