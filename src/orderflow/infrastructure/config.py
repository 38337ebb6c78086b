"""Runtime settings, read from environment variables.

Every value has a default so the CLI works out of the box against a local
``data`` directory.  Unparseable numbers fall back to their defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from pathlib import Path

from orderflow.domain.model.numeric import to_number

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _decimal(env: Mapping[str, str], key: str, default: str) -> Decimal:
    return to_number(env.get(key), Decimal(default))


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    value = to_number(env.get(key), None)
    return int(value) if value is not None else default


def _flag(env: Mapping[str, str], key: str) -> bool:
    return env.get(key, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    default_tax_rate: Decimal = Decimal("0.15")
    default_currency: str = "USD"
    base_shipping_fee: Decimal = Decimal("3.5")
    per_item_shipping_fee: Decimal = Decimal("0.5")
    max_shipping_fee: Decimal = Decimal("20")
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_secure: bool = False
    smtp_timeout: float = 20.0
    email_from: str = "no-reply@localhost"
    app_base_url: str = "http://localhost:4000"
    report_timezone: str | None = None
    notify_workers: int = 2
    log_level: str = "INFO"

    def with_data_dir(self, data_dir: Path) -> Settings:
        return replace(self, data_dir=data_dir)

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if env is None else env
        app_host = env.get("APP_HOST", "localhost")
        return Settings(
            data_dir=Path(env["ORDERFLOW_DATA_DIR"]) if env.get("ORDERFLOW_DATA_DIR") else _DEFAULT_DATA_DIR,
            default_tax_rate=_decimal(env, "DEFAULT_TAX_RATE", "0.15"),
            default_currency=(env.get("DEFAULT_CURRENCY") or "USD").strip().upper(),
            base_shipping_fee=_decimal(env, "BASE_SHIPPING_FEE", "3.5"),
            per_item_shipping_fee=_decimal(env, "PER_ITEM_SHIPPING_FEE", "0.5"),
            max_shipping_fee=_decimal(env, "MAX_SHIPPING_FEE", "20"),
            smtp_host=env.get("SMTP_HOST") or None,
            smtp_port=_int(env, "SMTP_PORT", 587),
            smtp_user=env.get("SMTP_USER") or None,
            smtp_password=env.get("SMTP_PASS") or None,
            smtp_secure=_flag(env, "SMTP_SECURE"),
            smtp_timeout=float(_decimal(env, "SMTP_TIMEOUT", "20")),
            email_from=env.get("EMAIL_FROM") or f"no-reply@{app_host}",
            app_base_url=env.get("APP_BASE_URL") or f"http://localhost:{env.get('PORT', '4000')}",
            report_timezone=env.get("REPORT_TIMEZONE") or None,
            notify_workers=max(1, _int(env, "NOTIFY_WORKERS", 2)),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
