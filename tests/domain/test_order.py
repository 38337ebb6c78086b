"""Unit tests for the Order aggregate, its totals and the order history."""

from decimal import Decimal

import pytest

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    OrderSummary,
    OrderTotals,
    ShippingInfo,
)
from orderflow.domain.model.user import User
from orderflow.domain.model.value_objects import Money, Quantity


def _make_item(name: str = "Widget", qty: int = 1, price: str = "15.00") -> OrderLineItem:
    """Helper to build a valid line item."""
    return OrderLineItem(
        product_id="a" * 24,
        product_name=name,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


def _summary(subtotal: str, shipping: str = "3.50", rate: str = "0.15") -> OrderSummary:
    totals = OrderTotals.compute(Money.of(subtotal), Decimal(rate), Money.of(shipping))
    return OrderSummary(totals=totals, shipping=ShippingInfo(cost=totals.shipping))


class TestOrderTotals:

    def test_compute(self):
        totals = OrderTotals.compute(Money.of("23.00"), Decimal("0.15"), Money.of("4.50"))
        assert totals.taxes == Money.of("3.45")
        assert totals.total == Money.of("30.95")
        assert totals.reconciles()

    def test_negative_discount_clamped(self):
        totals = OrderTotals.compute(
            Money.of("10.00"), Decimal("0"), Money.of("0"), discount=Decimal("-5")
        )
        assert totals.discount == Money.of("0.00")
        assert totals.total == Money.of("10.00")

    def test_tampered_total_does_not_reconcile(self):
        totals = OrderTotals.compute(Money.of("10.00"), Decimal("0"), Money.of("0"))
        tampered = OrderTotals(
            subtotal=totals.subtotal,
            taxes=totals.taxes,
            shipping=totals.shipping,
            discount=totals.discount,
            total=Money.of("11.00"),
            tax_rate=totals.tax_rate,
        )
        assert not tampered.reconciles()


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(items=[_make_item(qty=2, price="10.00")], summary=_summary("20.00"))
        assert order.status == OrderStatus.CONFIRMED
        assert order.subtotal == Money.of("20.00")
        assert order.total == Money.of("26.50")
        assert order.total_units == 2

    def test_key_and_code_are_none_for_new_orders(self):
        order = Order.create([_make_item()], _summary("15.00"))
        assert order.key is None  # assigned by repository
        assert order.code is None  # assigned by the code allocator

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create(items=[], summary=_summary("0"))

    def test_subtotal_must_match_lines(self):
        with pytest.raises(ValidationError, match="does not match"):
            Order.create([_make_item(price="15.00")], _summary("14.00"))

    def test_line_total_is_rounded(self):
        item = _make_item(qty=3, price="0.335")
        assert item.line_total == Money.of("1.01")


class TestOrderHistory:

    def test_record_order_appends_and_clears_cart(self):
        user = User(id="u" * 24, name="Ana", cart=[{"productId": "1042", "quantity": 1}])
        order = Order.create([_make_item()], _summary("15.00"))
        order.key = "k" * 24
        order.code = "30"

        user.record_order(order)

        assert user.cart == []
        assert len(user.orders) == 1
        entry = user.orders[0]
        assert entry.order_key == "k" * 24
        assert entry.order_code == "30"
        assert entry.summary is order.summary

    def test_unsaved_order_cannot_be_recorded(self):
        user = User(id="u" * 24, name="Ana")
        order = Order.create([_make_item()], _summary("15.00"))
        with pytest.raises(ValueError):
            user.record_order(order)
