"""Application service: Add Product use case (catalog seeding)."""

from __future__ import annotations

from decimal import Decimal

from orderflow.application.order_commit import UnitOfWorkFactory
from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.numeric import to_number
from orderflow.domain.model.product import DEFAULT_CATEGORY, Product
from orderflow.domain.model.value_objects import AlternateCode, Money, parse_product_ref


class AddProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        discount_pct: str = "0",
        category: str = DEFAULT_CATEGORY,
        code: str | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        discount = to_number(discount_pct, None)
        if discount is None:
            raise ValidationError(f"Invalid discount: {discount_pct!r}")

        alternate = None
        if code is not None and code.strip():
            ref = parse_product_ref(code)
            if not isinstance(ref, AlternateCode):
                raise ValidationError("Product code cannot look like a canonical id")
            alternate = ref.value

        with self._uow_factory() as uow:
            if alternate is not None and uow.products.get_by_code(alternate) is not None:
                raise ValidationError(f"Product code '{code}' already exists")

            product = Product(
                id=uow.products.next_id(),
                name=name.strip(),
                price=Money.of(price),
                stock=stock,
                discount_pct=Decimal(discount),
                category=category.strip() or DEFAULT_CATEGORY,
                code=alternate,
            )
            uow.products.save(product)
            uow.commit()
        return product
