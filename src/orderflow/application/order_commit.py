"""Application service: commit a checkout as an order.

This is the only place that coordinates several aggregates in one
transaction: product stock, the new order and the buyer's history.
Everything runs in a single unit of work, and ``commit()`` is only
reached after every line has been reserved and the order has been
built.  Any exception before that point rolls the whole thing back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from orderflow.application.dto import CheckoutRequest
from orderflow.application.errors import classified_failures
from orderflow.domain.exceptions import EntityNotFoundError
from orderflow.domain.model.order import (
    BuyerSnapshot,
    Order,
    OrderSummary,
    PaymentInfo,
    ShippingInfo,
)
from orderflow.domain.repository.unit_of_work import UnitOfWork
from orderflow.domain.service.order_code_allocator import OrderCodeAllocator
from orderflow.domain.service.pricing import PricedLine, PricingEngine, price_product_line
from orderflow.domain.service.stock_reservation_service import StockReservationService

logger = logging.getLogger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderCommitter:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        codes: OrderCodeAllocator,
        engine: PricingEngine,
        clock: Clock = utc_now,
    ) -> None:
        self._uow_factory = uow_factory
        self._codes = codes
        self._engine = engine
        self._clock = clock

    @property
    def clock(self) -> Clock:
        return self._clock

    def commit(self, request: CheckoutRequest, invoice_number: str | None = None) -> Order:
        """Reserve stock, persist the order and update the buyer, atomically.

        Raises:
            EntityNotFoundError: unknown product or user.
            InsufficientStockError: a line asks for more than is in stock.
            ValidationError: the resulting order breaks an invariant.
            ServerError: anything unexpected (already logged).
        """
        with classified_failures(logger, "commit the order"):
            order = self._commit(request, invoice_number)
        logger.info(
            "Order %s committed (key=%s, lines=%d, total=%s)",
            order.code, order.key, len(order.items), order.total,
        )
        return order

    def _commit(self, request: CheckoutRequest, invoice_number: str | None) -> Order:
        currency = request.currency or self._engine.policy.currency

        with self._uow_factory() as uow:
            user = None
            if request.user_id:
                user = uow.users.get_by_id(request.user_id)
                if user is None:
                    raise EntityNotFoundError(f"User not found: {request.user_id}")

            # Re-fetch, check and decrement each product inside this unit of work
            reservations = StockReservationService(uow.products)
            lines: list[PricedLine] = []
            for item in request.items:
                product = reservations.reserve(item.ref, item.quantity)
                lines.append(price_product_line(product, item.quantity, currency, item.ref.raw))

            breakdown = self._engine.summarize(
                lines,
                tax_rate=request.tax_rate,
                shipping_cost=request.shipping.cost,
                discount=request.discount,
                currency=currency,
            )
            summary = OrderSummary(
                totals=breakdown.totals,
                shipping=ShippingInfo(
                    cost=breakdown.totals.shipping,
                    address=request.shipping.address,
                    references=request.shipping.references,
                    contact=request.shipping.contact,
                    instructions=request.shipping.instructions,
                    estimated_date=request.shipping.estimated_date,
                    location=request.shipping.location,
                ),
                payment=PaymentInfo(
                    method=request.payment.method,
                    method_name=request.payment.method_name,
                    reference=request.payment.reference,
                    status=request.payment.status,
                ),
                buyer=user.snapshot() if user is not None else self._inline_buyer(request),
                invoice_number=invoice_number,
            )
            order = Order.create(
                items=[line.to_order_line() for line in lines],
                summary=summary,
                user_id=user.id if user is not None else None,
                created_at=self._clock(),
            )

            # The counter is not part of the unit of work: a rollback below
            # burns this code.
            if order.code is None:
                order.code = self._codes.next_code()
            uow.orders.save(order)

            if user is not None:
                user.record_order(order)
                uow.users.save(user)

            uow.commit()
        return order

    @staticmethod
    def _inline_buyer(request: CheckoutRequest) -> BuyerSnapshot | None:
        buyer = request.buyer
        if buyer is None:
            return None
        return BuyerSnapshot(
            id=None,
            name=buyer.name,
            last_name=buyer.last_name,
            email=buyer.email,
            phone=buyer.phone,
            document=buyer.document,
        )
