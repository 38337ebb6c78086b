"""Tests for the GenerateReport use case."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from orderflow.application.create_order import CreateOrderHandler
from orderflow.application.generate_report import GenerateReportHandler, local_now
from orderflow.application.normalize import normalize_checkout
from orderflow.domain.exceptions import ServerError
from tests.application.seed import BALLOON_ID

NOW = datetime(2024, 5, 15, 18, 0, tzinfo=timezone.utc)


def _place_orders(committer) -> None:
    handler = CreateOrderHandler(committer)
    handler.handle(normalize_checkout({"items": [{"productId": "1042", "quantity": 2}]}))
    handler.handle(normalize_checkout({"items": [{"productId": "SKU-9", "quantity": 1}]}))


class TestGenerateReport:

    def test_builds_and_saves_snapshot(self, db, committer):
        _place_orders(committer)
        snapshot = GenerateReportHandler(db.unit_of_work, clock=lambda: NOW).handle()

        assert snapshot.total_orders == 2
        assert snapshot.total_units_sold == 3
        assert snapshot.orders_today == 2
        assert snapshot.top_products[0].product_id == BALLOON_ID
        assert snapshot.sales_by_category == {"party": Decimal("18.00"), "decor": Decimal("5.00")}

        assert len(db.reports) == 1
        record = db.reports[0]
        assert record.type == "snapshot"
        assert record.payload["total_orders"] == 2
        assert record.created_at == NOW

    def test_no_save(self, db, committer):
        _place_orders(committer)
        GenerateReportHandler(db.unit_of_work, clock=lambda: NOW).handle(save=False)
        assert db.reports == []

    def test_empty_store(self, db):
        snapshot = GenerateReportHandler(db.unit_of_work, clock=lambda: NOW).handle(save=False)
        assert snapshot.total_orders == 0
        assert snapshot.top_products == ()

    def test_storage_failure_is_a_server_error(self, db):
        db.fail_on_commit = OSError("read-only")
        with pytest.raises(ServerError, match="generate the report"):
            GenerateReportHandler(db.unit_of_work, clock=lambda: NOW).handle()


class TestLocalClock:

    def test_named_zone_carries_its_rules(self):
        now = local_now("Europe/Madrid")
        assert now.tzinfo == ZoneInfo("Europe/Madrid")

    def test_system_zone_is_aware(self):
        now = local_now()
        assert now.tzinfo is not None
        assert abs(now - datetime.now(timezone.utc)) < timedelta(minutes=1)
