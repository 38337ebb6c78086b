"""Invoice, derived from a committed order, never stored on its own.

Only the invoice number is kept, on the order summary.  Everything else is
recomputed from the order, so regenerating an invoice always yields the
same totals, including the tax rate that was actually applied.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from orderflow.domain.model.order import BuyerSnapshot, Order, OrderTotals
from orderflow.domain.model.value_objects import Money


def build_invoice_number(now: datetime, rng: random.Random | None = None) -> str:
    """``INV-<epoch-ms>-<3 digits>``.

    Best-effort unique only: nothing checks for earlier use.
    """
    rng = rng or random.Random()
    epoch_ms = int(now.timestamp() * 1000)
    return f"INV-{epoch_ms}-{rng.randrange(1000):03d}"


@dataclass(frozen=True)
class InvoiceLine:
    product_id: str
    name: str
    quantity: int
    unit_price: Money
    discount_pct: Decimal
    line_total: Money

    @property
    def currency(self) -> str:
        return self.unit_price.currency


@dataclass(frozen=True)
class Invoice:
    number: str
    issued_at: datetime
    currency: str
    buyer: BuyerSnapshot | None
    items: tuple[InvoiceLine, ...]
    totals: OrderTotals
    order_key: str | None
    order_code: str | None

    @staticmethod
    def from_order(order: Order, number: str, issued_at: datetime) -> Invoice:
        lines = tuple(
            InvoiceLine(
                product_id=item.product_id,
                name=item.product_name,
                quantity=item.quantity.value,
                unit_price=item.unit_price,
                discount_pct=item.discount_pct,
                line_total=item.line_total,
            )
            for item in order.items
        )
        recorded = order.totals
        subtotal = Money.zero(order.currency)
        for line in lines:
            subtotal = subtotal + line.line_total
        totals = OrderTotals.compute(
            subtotal=subtotal,
            tax_rate=recorded.tax_rate,
            shipping=recorded.shipping,
            discount=recorded.discount.amount,
        )
        return Invoice(
            number=number,
            issued_at=issued_at,
            currency=order.currency,
            buyer=order.summary.buyer,
            items=lines,
            totals=totals,
            order_key=order.key,
            order_code=order.code,
        )
