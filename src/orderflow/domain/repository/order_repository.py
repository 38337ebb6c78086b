"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_key(self, key: str) -> Order | None:
        """Return an order by its persistent key, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Order | None:
        """Return an order by its sequential code, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, in insertion order."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return the orders placed by one user."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order.

        Assigns ``order.key`` on first insert.
        """
