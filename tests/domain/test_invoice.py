"""Unit tests for invoice numbers and invoices derived from orders."""

import random
import re
from datetime import datetime, timezone
from decimal import Decimal

from orderflow.domain.model.invoice import Invoice, build_invoice_number
from orderflow.domain.model.order import (
    BuyerSnapshot,
    Order,
    OrderLineItem,
    OrderSummary,
    OrderTotals,
    ShippingInfo,
)
from orderflow.domain.model.value_objects import Money, Quantity

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def _order() -> Order:
    items = [
        OrderLineItem(
            product_id="a" * 24,
            product_name="Balloon",
            quantity=Quantity(2),
            unit_price=Money.of("9.00"),
            list_price=Money.of("10.00"),
            discount_pct=Decimal("10"),
        )
    ]
    totals = OrderTotals.compute(
        Money.of("18.00"), Decimal("0.12"), Money.of("4.00"), discount=Decimal("1.00")
    )
    order = Order.create(
        items=items,
        summary=OrderSummary(
            totals=totals,
            shipping=ShippingInfo(cost=totals.shipping),
            buyer=BuyerSnapshot(name="Ana", last_name="Paz", email="ana@example.com"),
            invoice_number="INV-1-001",
        ),
    )
    order.key = "f" * 24
    order.code = "31"
    return order


class TestInvoiceNumber:

    def test_format(self):
        number = build_invoice_number(NOW, random.Random(1))
        assert re.fullmatch(r"INV-\d+-\d{3}", number)
        assert number.startswith(f"INV-{int(NOW.timestamp() * 1000)}-")

    def test_suffix_is_zero_padded(self):
        class _Zero(random.Random):
            def randrange(self, *args, **kwargs):
                return 7

        assert build_invoice_number(NOW, _Zero()).endswith("-007")


class TestInvoiceFromOrder:

    def test_totals_use_the_recorded_rate(self):
        order = _order()
        invoice = Invoice.from_order(order, number="INV-1-001", issued_at=NOW)
        assert invoice.totals == order.totals
        assert invoice.totals.tax_rate == Decimal("0.12")
        assert invoice.totals.total == Money.of("23.16")

    def test_lines_and_references(self):
        invoice = Invoice.from_order(_order(), number="INV-1-001", issued_at=NOW)
        line = invoice.items[0]
        assert (line.name, line.quantity) == ("Balloon", 2)
        assert line.line_total == Money.of("18.00")
        assert invoice.order_key == "f" * 24
        assert invoice.order_code == "31"
        assert invoice.buyer.display_name == "Ana Paz"

    def test_regenerating_gives_the_same_totals(self):
        order = _order()
        first = Invoice.from_order(order, number="INV-1-001", issued_at=NOW)
        second = Invoice.from_order(order, number="INV-1-001", issued_at=NOW)
        assert first == second
