"""Data Transfer Objects: plain containers that cross layer boundaries.

Input DTOs carry an already-normalised checkout request into the
handlers; output DTOs carry formatted results back to the CLI without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from orderflow.domain.model.cart import CartItem
from orderflow.domain.model.invoice import Invoice
from orderflow.domain.model.order import Order, OrderTotals
from orderflow.domain.service.pricing import PricingBreakdown

# --- Input --------------------------------------------------------------------


@dataclass(frozen=True)
class BuyerSpec:
    """Inline buyer details, used when no user account is attached."""

    name: str
    email: str
    last_name: str = ""
    phone: str = ""
    document: str = ""


@dataclass(frozen=True)
class ShippingSpec:
    cost: Decimal | None = None  # explicit cost overrides the computed fee
    address: str = ""
    references: str = ""
    contact: str = ""
    instructions: str = ""
    estimated_date: str | None = None
    location: Any = None


@dataclass(frozen=True)
class PaymentSpec:
    method: str = "unspecified"
    method_name: str = "unspecified"
    reference: str = ""
    status: str = "paid"


@dataclass(frozen=True)
class CheckoutRequest:
    """Input: a cart plus optional buyer, shipping, payment and overrides."""

    items: tuple[CartItem, ...]
    tax_rate: Decimal | None = None
    currency: str | None = None
    discount: Decimal = Decimal("0")
    user_id: str | None = None
    buyer: BuyerSpec | None = None
    shipping: ShippingSpec = field(default_factory=ShippingSpec)
    payment: PaymentSpec = field(default_factory=PaymentSpec)


# --- Output -------------------------------------------------------------------


@dataclass(frozen=True)
class TotalsDTO:
    subtotal: str  # formatted, e.g. "$23.00"
    taxes: str
    shipping: str
    discount: str
    total: str
    tax_rate: str


@dataclass(frozen=True)
class PricedLineDTO:
    product_ref: str
    product_id: str | None
    product_name: str
    quantity: int
    list_price: str
    discount_pct: str
    unit_price: str
    line_total: str
    resolved: bool


@dataclass(frozen=True)
class PricingBreakdownDTO:
    items: list[PricedLineDTO]
    totals: TotalsDTO
    discount_total: str
    total_units: int
    currency: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    key: str
    code: str | None
    status: str
    customer_name: str
    user_id: str | None
    items: list[OrderLineItemDTO]
    totals: TotalsDTO
    total: str
    currency: str
    created_at: str
    invoice_number: str | None = None


@dataclass(frozen=True)
class InvoiceLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    discount_pct: str
    line_total: str


@dataclass(frozen=True)
class InvoiceDTO:
    number: str
    issued_at: str
    currency: str
    buyer_name: str
    buyer_email: str
    items: list[InvoiceLineDTO]
    totals: TotalsDTO
    order_key: str | None
    order_code: str | None


@dataclass(frozen=True)
class InvoiceResultDTO:
    order: OrderDTO
    invoice: InvoiceDTO


# --- Mapping ------------------------------------------------------------------


def totals_to_dto(totals: OrderTotals) -> TotalsDTO:
    return TotalsDTO(
        subtotal=str(totals.subtotal),
        taxes=str(totals.taxes),
        shipping=str(totals.shipping),
        discount=str(totals.discount),
        total=str(totals.total),
        tax_rate=str(totals.tax_rate),
    )


def breakdown_to_dto(breakdown: PricingBreakdown) -> PricingBreakdownDTO:
    return PricingBreakdownDTO(
        items=[
            PricedLineDTO(
                product_ref=line.ref,
                product_id=line.product_id,
                product_name=line.name,
                quantity=line.quantity,
                list_price=str(line.list_price),
                discount_pct=str(line.discount_pct),
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
                resolved=line.resolved,
            )
            for line in breakdown.lines
        ],
        totals=totals_to_dto(breakdown.totals),
        discount_total=str(breakdown.discount_total),
        total_units=breakdown.total_units,
        currency=breakdown.currency,
    )


def order_to_dto(order: Order) -> OrderDTO:
    buyer = order.summary.buyer
    return OrderDTO(
        key=order.key,  # type: ignore[arg-type]
        code=order.code,
        status=order.status.value,
        customer_name=buyer.display_name if buyer else "",
        user_id=order.user_id,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        totals=totals_to_dto(order.totals),
        total=str(order.total),
        currency=order.currency,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M %Z").strip(),
        invoice_number=order.summary.invoice_number,
    )


def invoice_to_dto(invoice: Invoice) -> InvoiceDTO:
    buyer = invoice.buyer
    return InvoiceDTO(
        number=invoice.number,
        issued_at=invoice.issued_at.isoformat(),
        currency=invoice.currency,
        buyer_name=buyer.display_name if buyer else "",
        buyer_email=buyer.email if buyer else "",
        items=[
            InvoiceLineDTO(
                product_id=line.product_id,
                product_name=line.name,
                quantity=line.quantity,
                unit_price=str(line.unit_price),
                discount_pct=str(line.discount_pct),
                line_total=str(line.line_total),
            )
            for line in invoice.items
        ],
        totals=totals_to_dto(invoice.totals),
        order_key=invoice.order_key,
        order_code=invoice.order_code,
    )
