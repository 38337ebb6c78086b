"""CartItem: one requested line of a checkout, before pricing.

Ephemeral: it is consumed to build an OrderLineItem and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.value_objects import ProductRef


@dataclass(frozen=True)
class CartItem:
    ref: ProductRef
    quantity: int
    # Client-supplied values, only used when the product does not resolve
    # in a price preview.  Never used for committed orders.
    name: str | None = None
    price: Decimal | None = None

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValidationError(
                f"Invalid quantity for product {self.ref.raw}: must be a positive integer"
            )
