"""Abstract unit of work: the transaction boundary of the order flow.

Everything done through the repositories of one unit of work is applied
together on ``commit()`` or not at all.  Leaving the ``with`` block
without committing rolls back.  Implementations must isolate concurrent
units of work so that a stock read always sees the latest committed
decrement (no lost updates).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.domain.repository.product_repository import ProductRepository
from orderflow.domain.repository.report_repository import ReportRepository
from orderflow.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    users: UserRepository
    reports: ReportRepository

    def __enter__(self) -> UnitOfWork:
        self.begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.rollback()
        finally:
            self.end()

    @abstractmethod
    def begin(self) -> None:
        """Start the transaction and open the repositories."""

    @abstractmethod
    def commit(self) -> None:
        """Make every change of this unit of work durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes.  A no-op after ``commit()``."""

    @abstractmethod
    def end(self) -> None:
        """Release whatever ``begin()`` acquired."""
