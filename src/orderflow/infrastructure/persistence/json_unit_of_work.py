"""Unit of work over the JSON data directory.

``begin()`` takes the directory lock and loads every collection into
memory; repositories then work on those copies.  ``commit()`` writes the
collections that changed (all temp files first, then the renames), and
leaving without a commit simply drops the copies.  The lock is held for
the whole unit of work and is also an OS-level lock on ``store.lock``,
so checkouts from other threads or other processes always see the
previous checkout's decrement.
"""

from __future__ import annotations

import logging
from pathlib import Path

from orderflow.domain.repository.unit_of_work import UnitOfWork
from orderflow.infrastructure.persistence.json_order_repository import JsonOrderRepository
from orderflow.infrastructure.persistence.json_product_repository import JsonProductRepository
from orderflow.infrastructure.persistence.json_report_repository import JsonReportRepository
from orderflow.infrastructure.persistence.json_store import JsonFile, lock_for
from orderflow.infrastructure.persistence.json_user_repository import JsonUserRepository

logger = logging.getLogger(__name__)


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._lock = lock_for(data_dir / "store.lock")
        self._files: dict[str, JsonFile] = {}
        self._repos: dict = {}
        self._committed = False

    def begin(self) -> None:
        self._lock.acquire()
        try:
            self._files = {
                name: JsonFile(self._data_dir / f"{name}.json")
                for name in ("products", "orders", "users", "reports")
            }
            self.products = JsonProductRepository(self._files["products"].load())
            self.orders = JsonOrderRepository(self._files["orders"].load())
            self.users = JsonUserRepository(self._files["users"].load())
            self.reports = JsonReportRepository(self._files["reports"].load())
        except BaseException:
            self._lock.release()
            raise
        self._repos = {
            "products": self.products,
            "orders": self.orders,
            "users": self.users,
            "reports": self.reports,
        }
        self._committed = False

    def commit(self) -> None:
        changed = [name for name, repo in self._repos.items() if repo.dirty]
        staged = []
        try:
            for name in changed:
                json_file = self._files[name]
                staged.append((json_file, json_file.stage(self._repos[name].records)))
        except BaseException:
            for json_file, temp_path in staged:
                json_file.discard(temp_path)
            raise
        for json_file, temp_path in staged:
            json_file.publish(temp_path)
        for repo in self._repos.values():
            repo.dirty = False
        self._committed = True
        logger.debug("Committed %s to %s", ", ".join(changed) or "nothing", self._data_dir)

    def rollback(self) -> None:
        if self._committed:
            return
        if any(repo.dirty for repo in self._repos.values()):
            logger.debug("Discarding uncommitted changes in %s", self._data_dir)
        self._repos = {}

    def end(self) -> None:
        self._lock.release()
