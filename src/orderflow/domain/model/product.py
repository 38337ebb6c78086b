"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock goes down as orders are committed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from orderflow.domain.exceptions import InsufficientStockError, ValidationError
from orderflow.domain.model.numeric import round_money
from orderflow.domain.model.value_objects import Money

DEFAULT_CATEGORY = "other"


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock`` is an integer and never drops below zero
    - ``discount_pct`` lies in [0, 100]
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    discount_pct: Decimal = Decimal("0")
    category: str = DEFAULT_CATEGORY
    code: int | str | None = None

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(f"Stock for {self.name} cannot be negative")
        if not Decimal("0") <= self.discount_pct <= Decimal("100"):
            raise ValidationError(
                f"Discount for {self.name} must be between 0 and 100, "
                f"got {self.discount_pct}"
            )

    @property
    def price_after_discount(self) -> Money:
        factor = Decimal("1") - self.discount_pct / Decimal("100")
        return Money(round_money(self.price.amount * factor), self.price.currency)

    def decrement_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises InsufficientStockError rather than letting stock go negative.
        """
        if quantity <= 0:
            raise ValidationError("Stock decrement must be positive")
        if quantity > self.stock:
            raise InsufficientStockError(self.name or self.id, quantity, self.stock)
        self.stock -= quantity
