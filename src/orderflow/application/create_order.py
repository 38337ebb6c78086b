"""Application service: Create Order use case.

Commits the cart as a confirmed order: stock is reserved, the order is
stored with its sequential code and the buyer's history is updated, all
in one transaction.
"""

from __future__ import annotations

from orderflow.application.dto import CheckoutRequest, OrderDTO, order_to_dto
from orderflow.application.order_commit import OrderCommitter


class CreateOrderHandler:

    def __init__(self, committer: OrderCommitter) -> None:
        self._committer = committer

    def handle(self, request: CheckoutRequest) -> OrderDTO:
        order = self._committer.commit(request)
        return order_to_dto(order)
