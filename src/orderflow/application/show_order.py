"""Application service: order queries (show one, list, top by total)."""

from __future__ import annotations

from orderflow.application.dto import OrderDTO, order_to_dto
from orderflow.application.order_commit import UnitOfWorkFactory
from orderflow.domain.exceptions import EntityNotFoundError
from orderflow.domain.model.value_objects import is_canonical_id

MAX_LISTED = 200
MAX_TOP = 100


class ShowOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_ref: str) -> OrderDTO:
        """Find an order by persistent key or by sequential code."""
        ref = order_ref.strip()
        with self._uow_factory() as uow:
            order = None
            if is_canonical_id(ref):
                order = uow.orders.get_by_key(ref.lower())
            if order is None:
                order = uow.orders.get_by_code(ref)
        if order is None:
            raise EntityNotFoundError(f"Order {order_ref} not found")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, user_id: str | None = None, limit: int = MAX_LISTED) -> list[OrderDTO]:
        """Most recent orders first, optionally only one user's."""
        with self._uow_factory() as uow:
            orders = uow.orders.list_by_user(user_id) if user_id else uow.orders.list_all()
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [order_to_dto(o) for o in orders[: max(0, limit)]]


class TopOrdersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, limit: int = 10) -> list[OrderDTO]:
        """Largest orders by total; *limit* is clamped to 1..100."""
        limit = max(1, min(MAX_TOP, limit))
        with self._uow_factory() as uow:
            orders = uow.orders.list_all()
        orders.sort(key=lambda o: o.total.amount, reverse=True)
        return [order_to_dto(o) for o in orders[:limit]]
