"""User aggregate, as far as ordering is concerned.

Credentials and profiles belong to the auth collaborator; the order flow
only reads the buyer's contact details, clears the cart and appends to
the order history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from orderflow.domain.model.order import BuyerSnapshot, Order, OrderLineItem, OrderSummary


@dataclass(frozen=True)
class OrderHistoryEntry:
    order_key: str
    order_code: str | None
    date: datetime
    summary: OrderSummary
    items: tuple[OrderLineItem, ...] = ()

    @staticmethod
    def for_order(order: Order) -> OrderHistoryEntry:
        if order.key is None:
            raise ValueError("Order must be saved before it can be recorded")
        return OrderHistoryEntry(
            order_key=order.key,
            order_code=order.code,
            date=order.created_at,
            summary=order.summary,
            items=tuple(order.items),
        )


@dataclass
class User:
    id: str
    name: str
    email: str = ""
    last_name: str = ""
    phone: str = ""
    document: str = ""
    cart: list[dict[str, Any]] = field(default_factory=list)
    orders: list[OrderHistoryEntry] = field(default_factory=list)

    def snapshot(self) -> BuyerSnapshot:
        return BuyerSnapshot(
            id=self.id,
            name=self.name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
            document=self.document,
        )

    def record_order(self, order: Order) -> None:
        """Append the order to the history (never removed) and empty the cart."""
        self.orders.append(OrderHistoryEntry.for_order(order))
        self.cart = []
