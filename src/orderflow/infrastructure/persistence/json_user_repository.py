"""JSON-backed implementation of UserRepository."""

from __future__ import annotations

from orderflow.domain.model.user import OrderHistoryEntry, User
from orderflow.domain.repository.user_repository import UserRepository
from orderflow.infrastructure.persistence.codec import (
    line_from_raw,
    line_to_raw,
    parse_datetime,
    summary_from_raw,
    summary_to_raw,
)


class JsonUserRepository(UserRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records
        self.dirty = False

    @property
    def records(self) -> list[dict]:
        return self._records

    def get_by_id(self, user_id: str) -> User | None:
        for raw in self._records:
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def save(self, user: User) -> None:
        new_raw = self._to_raw(user)
        for i, raw in enumerate(self._records):
            if raw["id"] == user.id:
                # Keep fields this module does not own (credentials, profile...)
                self._records[i] = {**raw, **new_raw}
                break
        else:
            self._records.append(new_raw)
        self.dirty = True

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "name": user.name,
            "last_name": user.last_name,
            "email": user.email,
            "phone": user.phone,
            "document": user.document,
            "cart": list(user.cart),
            "orders": [
                {
                    "order_key": entry.order_key,
                    "order_code": entry.order_code,
                    "date": entry.date.isoformat(),
                    "summary": summary_to_raw(entry.summary),
                    "items": [line_to_raw(item) for item in entry.items],
                }
                for entry in user.orders
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            name=raw.get("name", ""),
            email=raw.get("email", ""),
            last_name=raw.get("last_name", ""),
            phone=raw.get("phone", ""),
            document=raw.get("document", ""),
            cart=list(raw.get("cart", [])),
            orders=[
                OrderHistoryEntry(
                    order_key=entry["order_key"],
                    order_code=entry.get("order_code"),
                    date=parse_datetime(entry["date"]),
                    summary=summary_from_raw(entry["summary"]),
                    items=tuple(line_from_raw(item) for item in entry.get("items", [])),
                )
                for entry in raw.get("orders", [])
            ],
        )
