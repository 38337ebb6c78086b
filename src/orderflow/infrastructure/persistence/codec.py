"""Record <-> domain conversion for the JSON store.

Money is stored as a decimal string plus a currency code so values
survive the round trip exactly.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from orderflow.domain.model.order import (
    BuyerSnapshot,
    OrderLineItem,
    OrderSummary,
    OrderTotals,
    PaymentInfo,
    ShippingInfo,
)
from orderflow.domain.model.product import DEFAULT_CATEGORY
from orderflow.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity


def money(raw: Any, currency: str = DEFAULT_CURRENCY) -> Money:
    return Money(Decimal(str(raw)), currency)


def parse_datetime(raw: str) -> datetime:
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


# --- Line items -------------------------------------------------------------


def line_to_raw(item: OrderLineItem) -> dict:
    return {
        "product_id": item.product_id,
        "product_code": item.product_code,
        "product_name": item.product_name,
        "category": item.category,
        "quantity": item.quantity.value,
        "unit_price": str(item.unit_price.amount),
        "list_price": str(item.list_price.amount) if item.list_price else None,
        "discount_pct": str(item.discount_pct),
        "line_total": str(item.line_total.amount),
        "currency": item.currency,
    }


def line_from_raw(raw: dict) -> OrderLineItem:
    currency = raw.get("currency", DEFAULT_CURRENCY)
    list_price = raw.get("list_price")
    return OrderLineItem(
        product_id=raw["product_id"],
        product_name=raw.get("product_name", ""),
        quantity=Quantity(raw["quantity"]),
        unit_price=money(raw["unit_price"], currency),
        list_price=money(list_price, currency) if list_price is not None else None,
        discount_pct=Decimal(raw.get("discount_pct", "0")),
        category=raw.get("category") or DEFAULT_CATEGORY,
        product_code=raw.get("product_code"),
    )


# --- Summary ----------------------------------------------------------------


def totals_to_raw(totals: OrderTotals) -> dict:
    return {
        "subtotal": str(totals.subtotal.amount),
        "taxes": str(totals.taxes.amount),
        "shipping": str(totals.shipping.amount),
        "discount": str(totals.discount.amount),
        "total": str(totals.total.amount),
        "tax_rate": str(totals.tax_rate),
        "currency": totals.total.currency,
    }


def totals_from_raw(raw: dict) -> OrderTotals:
    currency = raw.get("currency", DEFAULT_CURRENCY)
    return OrderTotals(
        subtotal=money(raw["subtotal"], currency),
        taxes=money(raw["taxes"], currency),
        shipping=money(raw["shipping"], currency),
        discount=money(raw["discount"], currency),
        total=money(raw["total"], currency),
        tax_rate=Decimal(raw["tax_rate"]),
    )


def buyer_to_raw(buyer: BuyerSnapshot | None) -> dict | None:
    if buyer is None:
        return None
    return {
        "id": buyer.id,
        "name": buyer.name,
        "last_name": buyer.last_name,
        "email": buyer.email,
        "phone": buyer.phone,
        "document": buyer.document,
    }


def buyer_from_raw(raw: dict | None) -> BuyerSnapshot | None:
    if raw is None:
        return None
    return BuyerSnapshot(
        id=raw.get("id"),
        name=raw.get("name", ""),
        last_name=raw.get("last_name", ""),
        email=raw.get("email", ""),
        phone=raw.get("phone", ""),
        document=raw.get("document", ""),
    )


def summary_to_raw(summary: OrderSummary) -> dict:
    shipping = summary.shipping
    payment = summary.payment
    return {
        "buyer": buyer_to_raw(summary.buyer),
        "totals": totals_to_raw(summary.totals),
        "shipping": {
            "cost": str(shipping.cost.amount),
            "address": shipping.address,
            "references": shipping.references,
            "contact": shipping.contact,
            "instructions": shipping.instructions,
            "estimated_date": shipping.estimated_date,
            "location": shipping.location,
        },
        "payment": {
            "method": payment.method,
            "method_name": payment.method_name,
            "reference": payment.reference,
            "status": payment.status,
        },
        "invoice_number": summary.invoice_number,
    }


def summary_from_raw(raw: dict) -> OrderSummary:
    totals = totals_from_raw(raw["totals"])
    shipping = raw.get("shipping") or {}
    payment = raw.get("payment") or {}
    return OrderSummary(
        totals=totals,
        shipping=ShippingInfo(
            cost=money(shipping.get("cost", totals.shipping.amount), totals.total.currency),
            address=shipping.get("address", ""),
            references=shipping.get("references", ""),
            contact=shipping.get("contact", ""),
            instructions=shipping.get("instructions", ""),
            estimated_date=shipping.get("estimated_date"),
            location=shipping.get("location"),
        ),
        payment=PaymentInfo(
            method=payment.get("method", "unspecified"),
            method_name=payment.get("method_name", "unspecified"),
            reference=payment.get("reference", ""),
            status=payment.get("status", "paid"),
        ),
        buyer=buyer_from_raw(raw.get("buyer")),
        invoice_number=raw.get("invoice_number"),
    )
