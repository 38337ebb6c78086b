"""Application service: Calculate Order use case (price preview).

Pure read: resolves the cart against the catalog and prices it.  No
stock is touched and nothing is persisted.  Products that do not resolve
are priced from the client-supplied fallback values.
"""

from __future__ import annotations

import logging

from orderflow.application.dto import CheckoutRequest, PricingBreakdownDTO, breakdown_to_dto
from orderflow.application.errors import classified_failures
from orderflow.application.order_commit import UnitOfWorkFactory
from orderflow.domain.service.pricing import PricingEngine
from orderflow.domain.service.product_resolver import ProductResolver

logger = logging.getLogger(__name__)


class CalculateOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory, engine: PricingEngine) -> None:
        self._uow_factory = uow_factory
        self._engine = engine

    def handle(self, request: CheckoutRequest) -> PricingBreakdownDTO:
        with classified_failures(logger, "calculate the order"):
            with self._uow_factory() as uow:
                catalog = ProductResolver(uow.products).resolve(
                    item.ref for item in request.items
                )
            breakdown = self._engine.price(
                request.items,
                catalog,
                tax_rate=request.tax_rate,
                shipping_cost=request.shipping.cost,
                discount=request.discount,
                currency=request.currency,
            )

        unresolved = [line.ref for line in breakdown.lines if not line.resolved]
        if unresolved:
            logger.debug("Priced with client fallbacks: %s", ", ".join(unresolved))
        return breakdown_to_dto(breakdown)
