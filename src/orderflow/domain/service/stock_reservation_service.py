"""Domain service: Stock Reservation.

Reserves stock for one cart line at a time, inside the caller's unit of
work.  The product is always re-fetched through the unit of work's own
repository (never taken from an earlier snapshot) and the decrement is
saved immediately, so a concurrent unit of work that reads the product
afterwards sees the reduced stock and fails its own check.
"""

from __future__ import annotations

from orderflow.domain.exceptions import EntityNotFoundError
from orderflow.domain.model.product import Product
from orderflow.domain.model.value_objects import ProductRef
from orderflow.domain.repository.product_repository import ProductRepository
from orderflow.domain.service.product_resolver import fetch_product


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, ref: ProductRef, quantity: int) -> Product:
        """Take *quantity* units of the referenced product out of stock.

        Returns the freshly fetched product, already decremented and saved.

        Raises:
            EntityNotFoundError: the reference does not resolve.
            InsufficientStockError: fewer than *quantity* units are left.
        """
        product = fetch_product(self._product_repo, ref)
        if product is None:
            raise EntityNotFoundError(f"Product not found: {ref.raw}")
        product.decrement_stock(quantity)
        self._product_repo.save(product)
        return product
