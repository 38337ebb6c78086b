"""Domain service: Pricing.

Turns cart items and a product lookup table into priced lines and order
totals.  The catalog always wins over client-supplied prices: a client
name or price is only used when a product cannot be resolved, which is
acceptable for a preview and rejected for a committed order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.cart import CartItem
from orderflow.domain.model.numeric import round_money
from orderflow.domain.model.order import OrderLineItem, OrderTotals
from orderflow.domain.model.product import DEFAULT_CATEGORY, Product
from orderflow.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity


@dataclass(frozen=True)
class ShippingPolicy:
    base: Decimal = Decimal("3.5")
    per_unit: Decimal = Decimal("0.5")
    maximum: Decimal = Decimal("20")

    def cost_for(self, total_units: int, explicit: Decimal | None = None) -> Decimal:
        """Shipping cost for an order of *total_units* units.

        An explicit non-negative cost is used as given (rounded); otherwise
        the base fee plus a per-unit increment after the first unit, capped.
        """
        if explicit is not None and explicit >= 0:
            return round_money(explicit)
        incremental = max(0, total_units - 1) * self.per_unit
        return round_money(min(self.maximum, self.base + incremental))


@dataclass(frozen=True)
class PricingPolicy:
    tax_rate: Decimal = Decimal("0.15")
    currency: str = DEFAULT_CURRENCY
    shipping: ShippingPolicy = field(default_factory=ShippingPolicy)


@dataclass(frozen=True)
class PricedLine:
    product_id: str | None
    product_code: int | str | None
    ref: str
    name: str
    category: str
    quantity: int
    list_price: Money
    discount_pct: Decimal
    unit_price: Money  # after discount
    line_total: Money
    resolved: bool

    def to_order_line(self) -> OrderLineItem:
        if self.product_id is None:
            raise ValidationError(f"Product not resolved: {self.ref}")
        return OrderLineItem(
            product_id=self.product_id,
            product_name=self.name,
            quantity=Quantity(self.quantity),
            unit_price=self.unit_price,
            list_price=self.list_price,
            discount_pct=self.discount_pct,
            category=self.category,
            product_code=self.product_code,
        )


@dataclass(frozen=True)
class PricingBreakdown:
    lines: tuple[PricedLine, ...]
    totals: OrderTotals
    discount_total: Money  # catalog discounts already included in the lines
    total_units: int
    currency: str


def price_product_line(
    product: Product, quantity: int, currency: str, ref: str | None = None
) -> PricedLine:
    """Price one line from a catalog product (canonical values only)."""
    list_price = product.price.in_currency(currency)
    unit_price = product.price_after_discount.in_currency(currency)
    return PricedLine(
        product_id=product.id,
        product_code=product.code,
        ref=ref or product.id,
        name=product.name,
        category=product.category,
        quantity=quantity,
        list_price=list_price,
        discount_pct=product.discount_pct,
        unit_price=unit_price,
        line_total=unit_price.times(Decimal(quantity)),
        resolved=True,
    )


def _price_unresolved_line(item: CartItem, currency: str) -> PricedLine:
    price = item.price if item.price is not None and item.price >= 0 else Decimal("0")
    unit_price = Money(round_money(price), currency)
    return PricedLine(
        product_id=None,
        product_code=None,
        ref=item.ref.raw,
        name=item.name or "",
        category=DEFAULT_CATEGORY,
        quantity=item.quantity,
        list_price=unit_price,
        discount_pct=Decimal("0"),
        unit_price=unit_price,
        line_total=unit_price.times(Decimal(item.quantity)),
        resolved=False,
    )


class PricingEngine:

    def __init__(self, policy: PricingPolicy | None = None) -> None:
        self._policy = policy or PricingPolicy()

    @property
    def policy(self) -> PricingPolicy:
        return self._policy

    def price(
        self,
        items: Sequence[CartItem],
        catalog: Mapping[str, Product],
        tax_rate: Decimal | None = None,
        shipping_cost: Decimal | None = None,
        discount: Decimal | None = None,
        currency: str | None = None,
    ) -> PricingBreakdown:
        """Price a cart against a lookup table keyed by ``ref.raw``."""
        if not items:
            raise ValidationError("No items provided")
        currency = currency or self._policy.currency
        lines: list[PricedLine] = []
        for item in items:
            product = catalog.get(item.ref.raw)
            if product is not None:
                lines.append(price_product_line(product, item.quantity, currency, item.ref.raw))
            else:
                lines.append(_price_unresolved_line(item, currency))
        return self.summarize(
            lines,
            tax_rate=tax_rate,
            shipping_cost=shipping_cost,
            discount=discount,
            currency=currency,
        )

    def summarize(
        self,
        lines: Sequence[PricedLine],
        tax_rate: Decimal | None = None,
        shipping_cost: Decimal | None = None,
        discount: Decimal | None = None,
        currency: str | None = None,
    ) -> PricingBreakdown:
        """Compute totals for already-priced lines."""
        currency = currency or self._policy.currency
        rate = self._policy.tax_rate if tax_rate is None else tax_rate

        subtotal = Decimal("0")
        discount_total = Decimal("0")
        total_units = 0
        for line in lines:
            subtotal += line.line_total.amount
            discount_total += (line.list_price.amount - line.unit_price.amount) * line.quantity
            total_units += line.quantity

        shipping = self._policy.shipping.cost_for(total_units, shipping_cost)
        totals = OrderTotals.compute(
            subtotal=Money(round_money(subtotal), currency),
            tax_rate=rate,
            shipping=Money(shipping, currency),
            discount=discount or Decimal("0"),
        )
        return PricingBreakdown(
            lines=tuple(lines),
            totals=totals,
            discount_total=Money(round_money(max(Decimal("0"), discount_total)), currency),
            total_units=total_units,
            currency=currency,
        )
