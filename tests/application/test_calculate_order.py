"""Tests for the CalculateOrder use case (price preview)."""

from decimal import Decimal

from orderflow.application.calculate_order import CalculateOrderHandler
from orderflow.application.normalize import normalize_checkout
from orderflow.domain.service.pricing import PricingEngine
from tests.application.seed import BALLOON_ID, CANDLE_ID


def _handler(db) -> CalculateOrderHandler:
    return CalculateOrderHandler(db.unit_of_work, PricingEngine())


class TestCalculateOrder:

    def test_prices_worked_example(self, db):
        request = normalize_checkout({
            "items": [
                {"productId": BALLOON_ID, "quantity": 2},
                {"productId": "SKU-9", "quantity": 1},
            ],
        })
        dto = _handler(db).handle(request)
        assert dto.totals.subtotal == "$23.00"
        assert dto.totals.shipping == "$4.50"
        assert dto.totals.taxes == "$3.45"
        assert dto.totals.total == "$30.95"
        assert dto.total_units == 3
        assert [line.product_name for line in dto.items] == ["Balloon", "Candle"]

    def test_does_not_touch_stock_or_orders(self, db):
        request = normalize_checkout({"items": [{"productId": "1042", "quantity": 3}]})
        _handler(db).handle(request)
        assert db.product(BALLOON_ID).stock == 10
        assert db.orders == {}
        assert db.commits == 0

    def test_is_idempotent(self, db):
        request = normalize_checkout({"items": [{"productId": "1042", "quantity": 3}]})
        handler = _handler(db)
        assert handler.handle(request) == handler.handle(request)

    def test_unknown_product_priced_from_client_values(self, db):
        request = normalize_checkout({
            "items": [{"productId": "777", "quantity": 2, "name": "Streamer", "price": "1.25"}],
            "shipping": {"cost": 0},
            "taxRate": 0,
        })
        dto = _handler(db).handle(request)
        line = dto.items[0]
        assert not line.resolved
        assert line.product_name == "Streamer"
        assert dto.totals.total == "$2.50"

    def test_quantity_above_stock_is_not_checked(self, db):
        request = normalize_checkout({"items": [{"productId": CANDLE_ID, "quantity": 99}]})
        dto = _handler(db).handle(request)
        assert dto.items[0].quantity == 99

    def test_discount_and_overrides(self, db):
        request = normalize_checkout({
            "items": [{"productId": CANDLE_ID, "quantity": 1}],
            "taxRate": "0.10",
            "discount": "1.00",
        })
        dto = _handler(db).handle(request)
        assert dto.totals.tax_rate == str(Decimal("0.10"))
        assert dto.totals.total == "$8.00"
