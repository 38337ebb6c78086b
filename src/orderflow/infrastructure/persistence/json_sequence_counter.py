"""Named counters stored in ``counters.json``.

Increments are written straight away under their own lock (a thread
lock plus an OS-level lock on ``counters.json.lock``); they are not part
of any unit of work.
"""

from __future__ import annotations

from pathlib import Path

from orderflow.domain.repository.sequence_counter import SequenceCounter
from orderflow.infrastructure.persistence.json_store import JsonFile, lock_for


class JsonSequenceCounter(SequenceCounter):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = lock_for(file_path.with_name(file_path.name + ".lock"))

    def increment(self, name: str) -> int:
        with self._lock:
            counters = self._open().load()
            value = int(counters.get(name, 0)) + 1
            counters[name] = value
            self._open().write(counters)
            return value

    def set(self, name: str, value: int) -> int:
        with self._lock:
            counters = self._open().load()
            counters[name] = value
            self._open().write(counters)
            return value

    def _open(self) -> JsonFile:
        # Only called under the lock, so creating the file cannot race.
        return JsonFile(self._file_path, empty={})
