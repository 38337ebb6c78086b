"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items and a denormalised
summary (buyer snapshot, totals, shipping, payment).  Totals invariants are
enforced by ``Order.create``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.numeric import round_money
from orderflow.domain.model.product import DEFAULT_CATEGORY
from orderflow.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pendiente"
    CONFIRMED = "confirmado"
    CANCELLED = "cancelado"


@dataclass(frozen=True)
class BuyerSnapshot:
    """Who the order was for, copied at commit time."""

    id: str | None = None
    name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    document: str = ""

    @property
    def display_name(self) -> str:
        full = f"{self.name} {self.last_name}".strip()
        return full or self.email


@dataclass(frozen=True)
class ShippingInfo:
    cost: Money
    address: str = ""
    references: str = ""
    contact: str = ""
    instructions: str = ""
    estimated_date: str | None = None
    location: Any = None


@dataclass(frozen=True)
class PaymentInfo:
    """Recorded payment details.  Nothing is charged."""

    method: str = "unspecified"
    method_name: str = "unspecified"
    reference: str = ""
    status: str = "paid"


@dataclass
class OrderLineItem:
    """Captures the price snapshot of a product at commit time.

    ``unit_price`` is the price after the catalog discount and never
    follows later price changes on the product.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at commit time
    list_price: Money | None = None
    discount_pct: Decimal = Decimal("0")
    category: str = DEFAULT_CATEGORY
    product_code: int | str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price.times(Decimal(self.quantity.value))

    @property
    def currency(self) -> str:
        return self.unit_price.currency


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Money
    taxes: Money
    shipping: Money
    discount: Money
    total: Money
    tax_rate: Decimal

    @staticmethod
    def compute(
        subtotal: Money,
        tax_rate: Decimal,
        shipping: Money,
        discount: Decimal = Decimal("0"),
    ) -> OrderTotals:
        """Apply tax, shipping and discount to a subtotal.

        The discount is clamped to >= 0 and the total to >= 0.
        """
        if tax_rate < 0:
            raise ValidationError(f"Tax rate cannot be negative, got {tax_rate}")
        currency = subtotal.currency
        subtotal = subtotal.rounded()
        taxes = subtotal.times(tax_rate)
        shipping = shipping.rounded().in_currency(currency)
        discount_amount = max(Decimal("0"), round_money(discount))
        raw_total = subtotal.amount + taxes.amount + shipping.amount - discount_amount
        return OrderTotals(
            subtotal=subtotal,
            taxes=taxes,
            shipping=shipping,
            discount=Money(discount_amount, currency),
            total=Money(round_money(max(Decimal("0"), raw_total)), currency),
            tax_rate=tax_rate,
        )

    def reconciles(self) -> bool:
        expected = round_money(
            max(
                Decimal("0"),
                self.subtotal.amount + self.taxes.amount
                + self.shipping.amount - self.discount.amount,
            )
        )
        return self.total.amount == expected


@dataclass(frozen=True)
class OrderSummary:
    totals: OrderTotals
    shipping: ShippingInfo
    payment: PaymentInfo = field(default_factory=PaymentInfo)
    buyer: BuyerSnapshot | None = None
    invoice_number: str | None = None


@dataclass
class Order:
    """Aggregate root for committed purchases.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.

    ``key`` is the persistent identity assigned by the store on insert;
    ``code`` is the sequential, human-readable order number.
    """

    key: str | None
    code: str | None
    items: list[OrderLineItem]
    summary: OrderSummary
    user_id: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        items: list[OrderLineItem],
        summary: OrderSummary,
        user_id: str | None = None,
        status: OrderStatus = OrderStatus.CONFIRMED,
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        totals = summary.totals
        line_sum = sum((item.line_total.amount for item in items), Decimal("0"))
        if totals.subtotal.amount != round_money(line_sum):
            raise ValidationError(
                f"Order subtotal {totals.subtotal} does not match its lines "
                f"({round_money(line_sum)})"
            )
        if not totals.reconciles():
            raise ValidationError(f"Order total {totals.total} does not reconcile")

        return Order(
            key=None,
            code=None,
            items=list(items),
            summary=summary,
            user_id=user_id,
            status=status,
            created_at=created_at or datetime.now(timezone.utc),
        )

    # --- Flat convenience fields ----------------------------------------------

    @property
    def totals(self) -> OrderTotals:
        return self.summary.totals

    @property
    def subtotal(self) -> Money:
        return self.summary.totals.subtotal

    @property
    def taxes(self) -> Money:
        return self.summary.totals.taxes

    @property
    def shipping(self) -> Money:
        return self.summary.totals.shipping

    @property
    def discount(self) -> Money:
        return self.summary.totals.discount

    @property
    def total(self) -> Money:
        return self.summary.totals.total

    @property
    def currency(self) -> str:
        return self.summary.totals.total.currency

    @property
    def total_units(self) -> int:
        return sum(item.quantity.value for item in self.items)
