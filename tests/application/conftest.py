from decimal import Decimal

import pytest

from orderflow.application.order_commit import OrderCommitter
from orderflow.domain.model.product import Product
from orderflow.domain.model.user import User
from orderflow.domain.model.value_objects import Money
from orderflow.domain.service.order_code_allocator import OrderCodeAllocator
from orderflow.domain.service.pricing import PricingEngine, PricingPolicy
from tests.application.seed import BALLOON_ID, CANDLE_ID, LAST_ONE_ID, USER_ID
from tests.fakes import FakeDatabase, FakeSequenceCounter, fixed_clock


@pytest.fixture
def db() -> FakeDatabase:
    return FakeDatabase(
        products=[
            Product(id=BALLOON_ID, name="Balloon", price=Money.of("10.00"), stock=10,
                    discount_pct=Decimal("10"), category="party", code=1042),
            Product(id=CANDLE_ID, name="Candle", price=Money.of("5.00"), stock=4,
                    category="decor", code="SKU-9"),
            Product(id=LAST_ONE_ID, name="Piñata", price=Money.of("20.00"), stock=1),
        ],
        users=[
            User(id=USER_ID, name="Ana", last_name="Paz", email="ana@example.com",
                 cart=[{"productId": "1042", "quantity": 2}]),
        ],
    )


@pytest.fixture
def counter() -> FakeSequenceCounter:
    return FakeSequenceCounter()


@pytest.fixture
def committer(db: FakeDatabase, counter: FakeSequenceCounter) -> OrderCommitter:
    return OrderCommitter(
        uow_factory=db.unit_of_work,
        codes=OrderCodeAllocator(counter),
        engine=PricingEngine(PricingPolicy(tax_rate=Decimal("0.15"))),
        clock=fixed_clock,
    )
