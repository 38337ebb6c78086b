"""JSON-backed implementation of ProductRepository.

Works on the record list loaded by ``JsonUnitOfWork``; nothing is
written until the unit of work commits.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from orderflow.domain.model.product import DEFAULT_CATEGORY, Product
from orderflow.domain.model.value_objects import DEFAULT_CURRENCY
from orderflow.domain.repository.product_repository import ProductRepository
from orderflow.infrastructure.persistence.codec import money
from orderflow.infrastructure.persistence.json_store import new_object_id


class JsonProductRepository(ProductRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records
        self.dirty = False

    @property
    def records(self) -> list[dict]:
        return self._records

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._records:
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_code(self, code: int | str) -> Product | None:
        wanted = str(code)
        for raw in self._records:
            if raw.get("code") is not None and str(raw["code"]) == wanted:
                return self._to_domain(raw)
        return None

    def find_by_ids(self, product_ids: Iterable[str]) -> list[Product]:
        wanted = set(product_ids)
        return [self._to_domain(raw) for raw in self._records if raw["id"] in wanted]

    def find_by_codes(self, codes: Iterable[int | str]) -> list[Product]:
        wanted = {str(code) for code in codes}
        return [
            self._to_domain(raw)
            for raw in self._records
            if raw.get("code") is not None and str(raw["code"]) in wanted
        ]

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._records]

    def save(self, product: Product) -> None:
        # Upsert: replace if exists, otherwise append
        new_raw = self._to_raw(product)
        for i, raw in enumerate(self._records):
            if raw["id"] == product.id:
                self._records[i] = new_raw
                break
        else:
            self._records.append(new_raw)
        self.dirty = True

    def next_id(self) -> str:
        return new_object_id()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "code": product.code,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "discount_pct": str(product.discount_pct),
            "category": product.category,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw.get("name", ""),
            price=money(raw.get("price", "0"), raw.get("currency", DEFAULT_CURRENCY)),
            stock=int(raw.get("stock", 0)),
            discount_pct=Decimal(str(raw.get("discount_pct", "0"))),
            category=raw.get("category") or DEFAULT_CATEGORY,
            code=raw.get("code"),
        )
