"""Unit tests for product reference resolution and stock reservation."""

import pytest

from orderflow.domain.exceptions import EntityNotFoundError, InsufficientStockError
from orderflow.domain.model.product import Product
from orderflow.domain.model.value_objects import Money, parse_product_ref
from orderflow.domain.service.product_resolver import ProductResolver, fetch_product
from orderflow.domain.service.stock_reservation_service import StockReservationService
from tests.fakes import FakeProductRepository

BALLOON_ID = "64b7f0c2a1d3e4f5a6b7c8d9"

HEX_CODE = "ab" * 12


def _repo() -> FakeProductRepository:
    return FakeProductRepository([
        Product(id=BALLOON_ID, name="Balloon", price=Money.of("1.00"), stock=3, code=1042),
        Product(id="c" * 24, name="Candle", price=Money.of("2.00"), stock=1, code="SKU-9"),
        Product(id="d" * 24, name="Streamer", price=Money.of("3.00"), stock=2, code=HEX_CODE),
    ])


class TestFetchProduct:

    def test_by_canonical_id(self):
        assert fetch_product(_repo(), parse_product_ref(BALLOON_ID)).name == "Balloon"

    def test_by_numeric_code(self):
        assert fetch_product(_repo(), parse_product_ref("1042")).name == "Balloon"

    def test_by_text_code(self):
        assert fetch_product(_repo(), parse_product_ref("SKU-9")).name == "Candle"

    def test_missing(self):
        assert fetch_product(_repo(), parse_product_ref("404")) is None

    def test_unknown_identity_falls_back_to_code(self):
        assert fetch_product(_repo(), parse_product_ref(HEX_CODE)).name == "Streamer"


class TestProductResolver:

    def test_keys_results_by_raw_reference(self):
        refs = [parse_product_ref(BALLOON_ID.upper()), parse_product_ref("SKU-9")]
        found = ProductResolver(_repo()).resolve(refs)
        assert found[BALLOON_ID.upper()].name == "Balloon"
        assert found["SKU-9"].name == "Candle"

    def test_uses_one_batch_per_reference_kind(self):
        repo = _repo()
        refs = [parse_product_ref(r) for r in (BALLOON_ID, "1042", "SKU-9", "1042")]
        ProductResolver(repo).resolve(refs)
        assert repo.batch_calls == ["ids", "codes"]

    def test_unknown_identity_retried_in_code_batch(self):
        repo = _repo()
        found = ProductResolver(repo).resolve([parse_product_ref(HEX_CODE), parse_product_ref(BALLOON_ID)])
        assert found[HEX_CODE].name == "Streamer"
        assert found[BALLOON_ID].name == "Balloon"
        assert repo.batch_calls == ["ids", "codes"]

    def test_unresolved_references_are_absent(self):
        found = ProductResolver(_repo()).resolve([parse_product_ref("777")])
        assert found == {}


class TestStockReservation:

    def test_reserve_decrements_and_saves(self):
        repo = _repo()
        StockReservationService(repo).reserve(parse_product_ref("1042"), 2)
        assert repo.get_by_id(BALLOON_ID).stock == 1

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError, match="Product not found: 777"):
            StockReservationService(_repo()).reserve(parse_product_ref("777"), 1)

    def test_insufficient_stock(self):
        with pytest.raises(InsufficientStockError):
            StockReservationService(_repo()).reserve(parse_product_ref("SKU-9"), 2)
