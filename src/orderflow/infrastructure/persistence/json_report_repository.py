"""JSON-backed implementation of ReportRepository."""

from __future__ import annotations

from orderflow.domain.model.report import ReportRecord
from orderflow.domain.repository.report_repository import ReportRepository
from orderflow.infrastructure.persistence.codec import parse_datetime
from orderflow.infrastructure.persistence.json_store import new_object_id


class JsonReportRepository(ReportRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records
        self.dirty = False

    @property
    def records(self) -> list[dict]:
        return self._records

    def save(self, record: ReportRecord) -> None:
        if record.id is None:
            record.id = new_object_id()
        self._records.append(
            {
                "id": record.id,
                "type": record.type,
                "payload": record.payload,
                "created_at": record.created_at.isoformat(),
            }
        )
        self.dirty = True

    def list_all(self) -> list[ReportRecord]:
        return [
            ReportRecord(
                type=raw["type"],
                payload=raw["payload"],
                created_at=parse_datetime(raw["created_at"]),
                id=raw["id"],
            )
            for raw in self._records
        ]
