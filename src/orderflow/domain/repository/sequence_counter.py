"""Abstract named counter used for sequential order codes.

Lives outside the unit of work: an increment is never rolled back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SequenceCounter(ABC):

    @abstractmethod
    def increment(self, name: str) -> int:
        """Atomically add one (creating the counter at 0) and return the new value."""

    @abstractmethod
    def set(self, name: str, value: int) -> int:
        """Overwrite the counter and return the stored value."""
