"""JSON-backed implementation of OrderRepository."""

from __future__ import annotations

from orderflow.domain.model.order import Order, OrderStatus
from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.infrastructure.persistence.codec import (
    line_from_raw,
    line_to_raw,
    parse_datetime,
    summary_from_raw,
    summary_to_raw,
)
from orderflow.infrastructure.persistence.json_store import new_object_id


class JsonOrderRepository(OrderRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records
        self.dirty = False

    @property
    def records(self) -> list[dict]:
        return self._records

    # --- OrderRepository interface --------------------------------------------

    def get_by_key(self, key: str) -> Order | None:
        for raw in self._records:
            if raw["key"] == key:
                return self._to_domain(raw)
        return None

    def get_by_code(self, code: str) -> Order | None:
        for raw in self._records:
            if raw.get("code") == code:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._records]

    def list_by_user(self, user_id: str) -> list[Order]:
        return [
            self._to_domain(raw) for raw in self._records if raw.get("user_id") == user_id
        ]

    def save(self, order: Order) -> None:
        if order.key is None:
            order.key = new_object_id()

        new_raw = self._to_raw(order)
        for i, raw in enumerate(self._records):
            if raw["key"] == order.key:
                self._records[i] = new_raw
                break
        else:
            self._records.append(new_raw)
        self.dirty = True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        totals = order.totals
        return {
            "key": order.key,
            "code": order.code,
            "user_id": order.user_id,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "items": [line_to_raw(item) for item in order.items],
            "summary": summary_to_raw(order.summary),
            # Flat copies for readers that do not walk the summary
            "subtotal": str(totals.subtotal.amount),
            "taxes": str(totals.taxes.amount),
            "shipping": str(totals.shipping.amount),
            "discount": str(totals.discount.amount),
            "total": str(totals.total.amount),
            "currency": order.currency,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            key=raw["key"],
            code=raw.get("code"),
            items=[line_from_raw(item) for item in raw.get("items", [])],
            summary=summary_from_raw(raw["summary"]),
            user_id=raw.get("user_id"),
            status=OrderStatus(raw.get("status", OrderStatus.CONFIRMED.value)),
            created_at=parse_datetime(raw["created_at"]),
        )
