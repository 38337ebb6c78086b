"""Tests for checkout payload normalisation."""

from decimal import Decimal

import pytest

from orderflow.application.normalize import normalize_checkout, normalize_items, pick
from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.value_objects import AlternateCode, CanonicalId


class TestPick:

    def test_first_present_alias_wins(self):
        assert pick({"price": 2, "precio": 1}, ("precio", "price")) == 1

    def test_skips_empty_values(self):
        assert pick({"precio": "", "price": 2}, ("precio", "price")) == 2

    def test_default(self):
        assert pick({}, ("a",), "x") == "x"
        assert pick(None, ("a",), "x") == "x"


class TestNormalizeItems:

    def test_alias_spellings(self):
        items = normalize_items([
            {"codigo": "1042", "cantidad": "2", "nombre": "Globo", "precio": "1.5"},
            {"_id": "64b7f0c2a1d3e4f5a6b7c8d9", "qty": 1},
        ])
        assert items[0].ref == AlternateCode(value=1042, raw="1042")
        assert items[0].quantity == 2
        assert items[0].name == "Globo"
        assert items[0].price == Decimal("1.5")
        assert isinstance(items[1].ref, CanonicalId)

    def test_fractional_quantity_is_truncated(self):
        assert normalize_items([{"productId": "1", "quantity": 2.7}])[0].quantity == 2

    @pytest.mark.parametrize("raw", [None, [], {}, "items"])
    def test_no_items(self, raw):
        with pytest.raises(ValidationError, match="No items provided"):
            normalize_items(raw)

    def test_missing_reference_names_the_item(self):
        with pytest.raises(ValidationError, match="Item #2 must include productId"):
            normalize_items([{"productId": "1", "quantity": 1}, {"quantity": 1}])

    @pytest.mark.parametrize("qty", [0, -1, "abc", None, 0.4])
    def test_invalid_quantity_names_the_product(self, qty):
        with pytest.raises(ValidationError, match=r"Invalid quantity for product 1042 \(item #1\)"):
            normalize_items([{"productId": "1042", "quantity": qty}])


class TestNormalizeCheckout:

    def test_full_payload(self):
        request = normalize_checkout({
            "productos": [{"productId": "1042", "quantity": 1}],
            "taxRate": "0.12",
            "currency": "eur",
            "totals": {"discount": "2.555"},
            "userId": "5F1E2D3C4B5A69788796A5B4",
            "entrega": {"costo": "0", "direccion": "Av. Siempre Viva 742"},
            "pago": {"metodo": "card", "referencia": "tx-1"},
        })
        assert request.tax_rate == Decimal("0.12")
        assert request.currency == "EUR"
        assert request.discount == Decimal("2.56")
        assert request.user_id == "5f1e2d3c4b5a69788796a5b4"
        assert request.shipping.cost == Decimal("0")
        assert request.shipping.address == "Av. Siempre Viva 742"
        assert request.payment.method == "card"
        assert request.payment.method_name == "card"
        assert request.payment.reference == "tx-1"

    def test_defaults(self):
        request = normalize_checkout({"items": [{"productId": "1", "quantity": 1}]})
        assert request.tax_rate is None
        assert request.currency is None
        assert request.discount == Decimal("0")
        assert request.buyer is None
        assert request.shipping.cost is None
        assert request.payment.method == "unspecified"
        assert request.payment.status == "paid"

    def test_inline_buyer(self):
        request = normalize_checkout({
            "items": [{"productId": "1", "quantity": 1}],
            "cliente": {"nombre": "Luis", "apellido": "Mora", "email": "luis@example.com"},
        })
        assert request.buyer.name == "Luis"
        assert request.buyer.last_name == "Mora"

    def test_top_level_fallbacks(self):
        request = normalize_checkout({
            "items": [{"productId": "1", "quantity": 1}],
            "metodoPago": "cash",
            "comentarios": "ring twice",
        })
        assert request.payment.method == "cash"
        assert request.shipping.instructions == "ring twice"

    def test_negative_discount_clamped(self):
        request = normalize_checkout({"items": [{"productId": "1", "quantity": 1}], "discount": -4})
        assert request.discount == Decimal("0")

    @pytest.mark.parametrize("rate", ["-0.1", "abc"])
    def test_invalid_tax_rate(self, rate):
        with pytest.raises(ValidationError, match="Invalid tax rate"):
            normalize_checkout({"items": [{"productId": "1", "quantity": 1}], "taxRate": rate})

    def test_invalid_user_id(self):
        with pytest.raises(ValidationError, match="Invalid userId format"):
            normalize_checkout({"items": [{"productId": "1", "quantity": 1}], "userId": "bob"})

    def test_payload_must_be_an_object(self):
        with pytest.raises(ValidationError, match="must be an object"):
            normalize_checkout(["items"])
