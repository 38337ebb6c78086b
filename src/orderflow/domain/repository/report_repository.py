"""Abstract repository for persisted report snapshots."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.report import ReportRecord


class ReportRepository(ABC):

    @abstractmethod
    def save(self, record: ReportRecord) -> None:
        """Persist an audit record.  Assigns ``record.id`` on insert."""

    @abstractmethod
    def list_all(self) -> list[ReportRecord]:
        """Return every stored record, oldest first."""
