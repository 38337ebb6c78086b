"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from orderflow.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its canonical identity, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: int | str) -> Product | None:
        """Return a product by its alternate catalog code, or None."""

    @abstractmethod
    def find_by_ids(self, product_ids: Iterable[str]) -> list[Product]:
        """Return every product whose canonical identity is in the set."""

    @abstractmethod
    def find_by_codes(self, codes: Iterable[int | str]) -> list[Product]:
        """Return every product whose alternate code is in the set."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new canonical identity for a product about to be added."""
