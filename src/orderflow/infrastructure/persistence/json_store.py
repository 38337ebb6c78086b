"""JSON file helpers shared by the JSON-backed repositories.

Each collection lives in its own ``<name>.json`` file holding a list of
records.  Writes go to a uniquely named temporary file first and are
moved into place with ``os.replace`` so a reader never sees a
half-written file.  ``StoreLock`` serialises access across threads and
across processes sharing the same data directory.
"""

from __future__ import annotations

import json
import os
import secrets
import tempfile
import threading
from pathlib import Path
from typing import Any

from filelock import FileLock

_locks: dict[Path, StoreLock] = {}
_locks_guard = threading.Lock()


class StoreLock:
    """Re-entrant lock backed by an OS-level lock on *lock_path*.

    The thread lock is taken first so only one thread per process ever
    touches the file lock.
    """

    def __init__(self, lock_path: Path) -> None:
        self._thread_lock = threading.RLock()
        self._file_lock = FileLock(str(lock_path), thread_local=False)

    def acquire(self) -> None:
        self._thread_lock.acquire()
        try:
            self._file_lock.acquire()
        except BaseException:
            self._thread_lock.release()
            raise

    def release(self) -> None:
        try:
            self._file_lock.release()
        finally:
            self._thread_lock.release()

    def __enter__(self) -> StoreLock:
        self.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


def lock_for(lock_path: Path) -> StoreLock:
    """Return the process-wide lock guarding *lock_path*."""
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    key = lock_path.resolve()
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = StoreLock(key)
        return lock


def new_object_id() -> str:
    """A fresh 24-hex-character identity."""
    return secrets.token_hex(12)


class JsonFile:

    def __init__(self, file_path: Path, empty: Any = None) -> None:
        self._file_path = file_path
        self._empty = [] if empty is None else empty
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> Any:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def stage(self, data: Any) -> Path:
        """Write *data* next to the file; ``publish`` moves it into place."""
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._file_path.parent,
            prefix=self._file_path.name + ".",
            suffix=".tmp",
            delete=False,
        ) as handle:
            handle.write(json.dumps(data, indent=2) + "\n")
        return Path(handle.name)

    def publish(self, temp_path: Path) -> None:
        os.replace(temp_path, self._file_path)

    def discard(self, temp_path: Path) -> None:
        temp_path.unlink(missing_ok=True)

    def write(self, data: Any) -> None:
        self.publish(self.stage(data))

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self.write(self._empty)
