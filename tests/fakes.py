"""In-memory fakes for testing.

``FakeDatabase`` plays the role of the data store.  Each
``FakeUnitOfWork`` takes the database lock, works on deep copies of the
stored objects and only swaps them in on commit, so the fakes keep the
same transactional behavior as the JSON store.  No file I/O.
"""

from __future__ import annotations

import copy
import itertools
import threading
from collections.abc import Iterable
from datetime import datetime, timezone

from orderflow.application.notifications import (
    EmailNotification,
    EmailSender,
    MailResult,
    PostCommitNotifier,
)
from orderflow.domain.model.order import Order
from orderflow.domain.model.product import Product
from orderflow.domain.model.report import ReportRecord
from orderflow.domain.model.user import User
from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.domain.repository.product_repository import ProductRepository
from orderflow.domain.repository.report_repository import ReportRepository
from orderflow.domain.repository.sequence_counter import SequenceCounter
from orderflow.domain.repository.unit_of_work import UnitOfWork
from orderflow.domain.repository.user_repository import UserRepository

_ids = itertools.count(1)


def next_hex_id() -> str:
    return f"{next(_ids):024x}"


FIXED_NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


# --- Repositories -------------------------------------------------------------


class FakeProductRepository(ProductRepository):

    def __init__(self, products: Iterable[Product] | dict[str, Product] = ()) -> None:
        if isinstance(products, dict):
            self._store = products
        else:
            self._store = {p.id: p for p in products}
        self.batch_calls: list[str] = []

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_code(self, code: int | str) -> Product | None:
        for p in self._store.values():
            if p.code is not None and str(p.code) == str(code):
                return p
        return None

    def find_by_ids(self, product_ids: Iterable[str]) -> list[Product]:
        self.batch_calls.append("ids")
        wanted = set(product_ids)
        return [p for p in self._store.values() if p.id in wanted]

    def find_by_codes(self, codes: Iterable[int | str]) -> list[Product]:
        self.batch_calls.append("codes")
        wanted = {str(c) for c in codes}
        return [p for p in self._store.values() if p.code is not None and str(p.code) in wanted]

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product

    def next_id(self) -> str:
        return next_hex_id()


class FakeOrderRepository(OrderRepository):

    def __init__(self, store: dict[str, Order] | None = None) -> None:
        self._store = {} if store is None else store

    def get_by_key(self, key: str) -> Order | None:
        return self._store.get(key)

    def get_by_code(self, code: str) -> Order | None:
        for order in self._store.values():
            if order.code == code:
                return order
        return None

    def list_all(self) -> list[Order]:
        return list(self._store.values())

    def list_by_user(self, user_id: str) -> list[Order]:
        return [o for o in self._store.values() if o.user_id == user_id]

    def save(self, order: Order) -> None:
        if order.key is None:
            order.key = next_hex_id()
        self._store[order.key] = order


class FakeUserRepository(UserRepository):

    def __init__(self, store: dict[str, User] | None = None) -> None:
        self._store = {} if store is None else store

    def get_by_id(self, user_id: str) -> User | None:
        return self._store.get(user_id)

    def save(self, user: User) -> None:
        self._store[user.id] = user


class FakeReportRepository(ReportRepository):

    def __init__(self, store: list[ReportRecord] | None = None) -> None:
        self._store = [] if store is None else store

    def save(self, record: ReportRecord) -> None:
        if record.id is None:
            record.id = next_hex_id()
        self._store.append(record)

    def list_all(self) -> list[ReportRecord]:
        return list(self._store)


# --- Unit of work -------------------------------------------------------------


class FakeDatabase:

    def __init__(
        self,
        products: Iterable[Product] = (),
        users: Iterable[User] = (),
    ) -> None:
        self.lock = threading.RLock()
        self.products: dict[str, Product] = {p.id: p for p in products}
        self.orders: dict[str, Order] = {}
        self.users: dict[str, User] = {u.id: u for u in users}
        self.reports: list[ReportRecord] = []
        self.commits = 0
        self.fail_on_commit: Exception | None = None

    def unit_of_work(self) -> FakeUnitOfWork:
        return FakeUnitOfWork(self)

    # Read helpers for assertions

    def product(self, product_id: str) -> Product:
        return self.products[product_id]

    def user(self, user_id: str) -> User:
        return self.users[user_id]


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db
        self._committed = False

    def begin(self) -> None:
        self._db.lock.acquire()
        self._products = copy.deepcopy(self._db.products)
        self._orders = copy.deepcopy(self._db.orders)
        self._users = copy.deepcopy(self._db.users)
        self._reports = copy.deepcopy(self._db.reports)
        self.products = FakeProductRepository(self._products)
        self.orders = FakeOrderRepository(self._orders)
        self.users = FakeUserRepository(self._users)
        self.reports = FakeReportRepository(self._reports)
        self._committed = False

    def commit(self) -> None:
        if self._db.fail_on_commit is not None:
            raise self._db.fail_on_commit
        self._db.products = self._products
        self._db.orders = self._orders
        self._db.users = self._users
        self._db.reports = self._reports
        self._db.commits += 1
        self._committed = True

    def rollback(self) -> None:
        pass

    def end(self) -> None:
        self._db.lock.release()


class FakeSequenceCounter(SequenceCounter):

    def __init__(self, start: int = 0) -> None:
        self.values: dict[str, int] = {}
        self._start = start
        self._lock = threading.Lock()

    def increment(self, name: str) -> int:
        with self._lock:
            self.values[name] = self.values.get(name, self._start) + 1
            return self.values[name]

    def set(self, name: str, value: int) -> int:
        with self._lock:
            self.values[name] = value
            return value


# --- Notifications ------------------------------------------------------------


class RecordingNotifier(PostCommitNotifier):

    def __init__(self) -> None:
        self.submitted: list[EmailNotification] = []

    def submit(self, notification: EmailNotification) -> None:
        self.submitted.append(notification)


class ExplodingNotifier(PostCommitNotifier):

    def submit(self, notification: EmailNotification) -> None:
        raise RuntimeError("queue is full")


class RecordingEmailSender(EmailSender):

    def __init__(self, result: MailResult | None = None) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self._result = result or MailResult(ok=True)
        self.delivered = threading.Event()

    def send_mail(self, to: str, subject: str, html: str) -> MailResult:
        self.sent.append((to, subject, html))
        self.delivered.set()
        return self._result


class CrashingEmailSender(EmailSender):

    def send_mail(self, to: str, subject: str, html: str) -> MailResult:
        raise ConnectionError("SMTP server went away")
