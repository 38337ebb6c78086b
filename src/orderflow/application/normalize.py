"""Boundary normalisation of checkout payloads.

Clients send the same concept under several spellings (``precio`` /
``price`` / ``unitPrice``...).  Each alias table below maps those
spellings to one canonical field; the first present alias wins.  This
runs once, before any handler, and rejects malformed carts before any
read or write happens.  Nothing past this module sees raw payloads.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from orderflow.application.dto import BuyerSpec, CheckoutRequest, PaymentSpec, ShippingSpec
from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.cart import CartItem
from orderflow.domain.model.numeric import round_money, to_number, truncate_quantity
from orderflow.domain.model.value_objects import is_canonical_id, parse_product_ref

ITEMS = ("items", "products", "productos")
ITEM_REF = ("productId", "product_id", "id", "_id", "codigo", "code")
ITEM_QUANTITY = ("quantity", "cantidad", "qty")
ITEM_NAME = ("nombre", "name", "productName")
ITEM_PRICE = ("precio", "price", "unitPrice")

TAX_RATE = ("taxRate", "tax_rate")
USER_ID = ("userId", "user_id")
BUYER = ("user", "cliente")
BUYER_NAME = ("nombre", "firstName", "name")
BUYER_LAST_NAME = ("apellido", "lastName")
BUYER_EMAIL = ("email",)
BUYER_PHONE = ("telefono", "phone")
BUYER_DOCUMENT = ("cedula", "document")

SHIPPING = ("shipping", "entrega")
SHIPPING_COST = ("costo", "cost", "shippingFee")
SHIPPING_ADDRESS = ("direccion", "address")
SHIPPING_REFERENCES = ("referencias", "reference")
SHIPPING_CONTACT = ("contacto", "contact")
SHIPPING_INSTRUCTIONS = ("instrucciones", "instructions")
SHIPPING_ESTIMATED_DATE = ("fechaEstimada", "estimatedDate")
SHIPPING_LOCATION = ("location", "latLong")

PAYMENT = ("payment", "pago")
PAYMENT_METHOD = ("metodo", "method")
PAYMENT_METHOD_NAME = ("metodoPagoNombre", "methodName")
PAYMENT_REFERENCE = ("referencia", "reference")
PAYMENT_STATUS = ("estado", "status")


def pick(source: Mapping[str, Any] | None, aliases: Sequence[str], default: Any = None) -> Any:
    """Return the value of the first alias present and not None/empty."""
    if not source:
        return default
    for key in aliases:
        value = source.get(key)
        if value is not None and value != "":
            return value
    return default


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def normalize_items(raw_items: Any) -> tuple[CartItem, ...]:
    if not isinstance(raw_items, (list, tuple)) or not raw_items:
        raise ValidationError("No items provided")

    items: list[CartItem] = []
    for position, raw in enumerate(raw_items, start=1):
        if not isinstance(raw, Mapping):
            raise ValidationError(f"Item #{position} must be an object")
        raw_ref = pick(raw, ITEM_REF)
        if raw_ref is None or not _text(raw_ref):
            raise ValidationError(f"Item #{position} must include productId")
        ref = parse_product_ref(raw_ref)

        quantity = truncate_quantity(pick(raw, ITEM_QUANTITY))
        if quantity is None or quantity <= 0:
            raise ValidationError(
                f"Invalid quantity for product {ref.raw} (item #{position})"
            )

        price = to_number(pick(raw, ITEM_PRICE), None)
        items.append(
            CartItem(
                ref=ref,
                quantity=quantity,
                name=_text(pick(raw, ITEM_NAME)) or None,
                price=price,
            )
        )
    return tuple(items)


def normalize_buyer(raw: Mapping[str, Any]) -> BuyerSpec | None:
    source = pick(raw, BUYER)
    if not isinstance(source, Mapping):
        return None
    name = _text(pick(source, BUYER_NAME))
    email = _text(pick(source, BUYER_EMAIL))
    if not name and not email:
        return None
    return BuyerSpec(
        name=name,
        email=email,
        last_name=_text(pick(source, BUYER_LAST_NAME)),
        phone=_text(pick(source, BUYER_PHONE)),
        document=_text(pick(source, BUYER_DOCUMENT)),
    )


def normalize_shipping(raw: Mapping[str, Any]) -> ShippingSpec:
    source = pick(raw, SHIPPING)
    if not isinstance(source, Mapping):
        source = {}
    cost = to_number(pick(source, SHIPPING_COST), None)
    return ShippingSpec(
        cost=cost if cost is not None and cost >= 0 else None,
        address=_text(pick(source, SHIPPING_ADDRESS)),
        references=_text(pick(source, SHIPPING_REFERENCES)),
        contact=_text(pick(source, SHIPPING_CONTACT)),
        instructions=_text(pick(source, SHIPPING_INSTRUCTIONS) or raw.get("comentarios")),
        estimated_date=_text(pick(source, SHIPPING_ESTIMATED_DATE)) or None,
        location=pick(source, SHIPPING_LOCATION),
    )


def normalize_payment(raw: Mapping[str, Any]) -> PaymentSpec:
    source = pick(raw, PAYMENT)
    if not isinstance(source, Mapping):
        source = {}
    method = _text(pick(source, PAYMENT_METHOD) or raw.get("metodoPago")) or "unspecified"
    method_name = _text(pick(source, PAYMENT_METHOD_NAME)) or method
    return PaymentSpec(
        method=method,
        method_name=method_name,
        reference=_text(pick(source, PAYMENT_REFERENCE)),
        status=_text(pick(source, PAYMENT_STATUS)) or "paid",
    )


def normalize_checkout(raw: Mapping[str, Any]) -> CheckoutRequest:
    """Map a raw checkout payload onto a CheckoutRequest.

    Raises ValidationError naming the offending item or field.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("Checkout payload must be an object")

    items = normalize_items(pick(raw, ITEMS))

    tax_rate = None
    raw_rate = pick(raw, TAX_RATE)
    if raw_rate is not None:
        tax_rate = to_number(raw_rate, None)
        if tax_rate is None or tax_rate < 0:
            raise ValidationError(f"Invalid tax rate: {raw_rate!r}")

    currency = _text(raw.get("currency")).upper() or None

    raw_discount = raw.get("discount")
    if raw_discount is None and isinstance(raw.get("totals"), Mapping):
        raw_discount = raw["totals"].get("discount")
    discount = max(Decimal("0"), round_money(to_number(raw_discount, Decimal("0"))))

    user_id = _text(pick(raw, USER_ID)) or None
    if user_id is not None and not is_canonical_id(user_id):
        raise ValidationError(f"Invalid userId format: {user_id}")

    return CheckoutRequest(
        items=items,
        tax_rate=tax_rate,
        currency=currency,
        discount=discount,
        user_id=user_id.lower() if user_id else None,
        buyer=normalize_buyer(raw),
        shipping=normalize_shipping(raw),
        payment=normalize_payment(raw),
    )
