"""Abstract repository for User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identity, or None if not found."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user."""
