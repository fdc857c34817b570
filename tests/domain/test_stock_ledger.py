"""Unit tests for the StockLedger domain service."""

import pytest

from backoffice.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from backoffice.domain.service.stock_ledger import StockLedger
from tests.fakes import FakeProductRepository, make_product


def _ledger(*stocks: tuple[str, int]) -> tuple[StockLedger, FakeProductRepository]:
    """Create a ledger over products given as (product_id, stock) tuples."""
    repo = FakeProductRepository([make_product(pid, f"Item {pid}", stock=s) for pid, s in stocks])
    return StockLedger(repo), repo


class TestSingleProduct:

    def test_check_availability(self):
        ledger, _ = _ledger(("P1", 5))
        assert ledger.check_availability("P1", 5)
        assert not ledger.check_availability("P1", 6)

    def test_unknown_product_is_unavailable(self):
        ledger, _ = _ledger()
        assert not ledger.check_availability("nope", 1)

    def test_deduct_persists(self):
        ledger, repo = _ledger(("P1", 5))
        ledger.deduct("P1", 2)
        assert repo.stock_of("P1") == 3

    def test_deduct_unknown_product(self):
        ledger, _ = _ledger()
        with pytest.raises(ProductNotFoundError):
            ledger.deduct("nope", 1)

    def test_deduct_insufficient_leaves_stock(self):
        ledger, repo = _ledger(("P1", 1))
        with pytest.raises(InsufficientStockError):
            ledger.deduct("P1", 2)
        assert repo.stock_of("P1") == 1

    def test_restore_and_restock(self):
        ledger, repo = _ledger(("P1", 0))
        ledger.restore("P1", 2)
        ledger.restock("P1", 10)
        assert repo.stock_of("P1") == 12


class TestDeductMany:

    def test_deducts_every_product(self):
        ledger, repo = _ledger(("P1", 10), ("P2", 5))
        ledger.deduct_many({"P1": 3, "P2": 5})
        assert repo.stock_of("P1") == 7
        assert repo.stock_of("P2") == 0

    def test_one_short_product_blocks_all(self):
        ledger, repo = _ledger(("P1", 10), ("P2", 1))
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.deduct_many({"P1": 3, "P2": 2})
        assert exc_info.value.product_id == "P2"
        assert repo.stock_of("P1") == 10
        assert repo.stock_of("P2") == 1

    def test_missing_product_blocks_all(self):
        ledger, repo = _ledger(("P1", 10))
        with pytest.raises(ProductNotFoundError):
            ledger.deduct_many({"P1": 3, "gone": 1})
        assert repo.stock_of("P1") == 10

    def test_non_positive_quantity_rejected(self):
        ledger, repo = _ledger(("P1", 10))
        with pytest.raises(ValidationError):
            ledger.deduct_many({"P1": 0})
        assert repo.stock_of("P1") == 10


class TestRestoreMany:

    def test_restores_every_product(self):
        ledger, repo = _ledger(("P1", 0), ("P2", 1))
        ledger.restore_many({"P1": 3, "P2": 2})
        assert repo.stock_of("P1") == 3
        assert repo.stock_of("P2") == 3

    def test_skips_products_that_left_the_catalog(self):
        ledger, repo = _ledger(("P1", 0))
        changed = ledger.restore_many({"P1": 3, "gone": 2})
        assert [p.id for p in changed] == ["P1"]
        assert repo.stock_of("P1") == 3
