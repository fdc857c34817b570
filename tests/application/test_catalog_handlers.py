"""Integration tests for catalog management use cases."""

from decimal import Decimal

import pytest

from backoffice.application.add_product import AddProductHandler
from backoffice.application.create_order import CreateDirectOrderHandler
from backoffice.application.delete_product import DeleteProductHandler
from backoffice.application.restock_product import RestockProductHandler
from backoffice.application.show_stock import SearchProductsHandler, ShowStockHandler
from backoffice.application.update_product import UpdateProductPriceHandler
from backoffice.domain.exceptions import ProductNotFoundError, ValidationError
from tests.fakes import FakeOrderRepository, FakeProductRepository, make_product


class TestAddProduct:

    def test_assigns_id_and_saves(self):
        repo = FakeProductRepository()
        product = AddProductHandler(repo).handle("Keyboard", "30000", stock=4, category="pc")
        assert product.id.startswith("PRD")
        assert repo.get_by_id(product.id).price.amount == Decimal("30000")
        assert repo.stock_of(product.id) == 4

    def test_duplicate_name_rejected_case_insensitively(self):
        repo = FakeProductRepository([make_product("P1", "Keyboard")])
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(repo).handle("keyboard", "1")

    def test_bad_price_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            AddProductHandler(FakeProductRepository()).handle("Mouse", "cheap")


class TestUpdateAndRestock:

    def test_update_price(self):
        repo = FakeProductRepository([make_product("P1", price="1000")])
        UpdateProductPriceHandler(repo).handle("P1", "1500")
        assert repo.get_by_id("P1").price.amount == Decimal("1500")

    def test_update_unknown(self):
        with pytest.raises(ProductNotFoundError):
            UpdateProductPriceHandler(FakeProductRepository()).handle("nope", "1")

    def test_restock(self):
        repo = FakeProductRepository([make_product("P1", stock=1)])
        RestockProductHandler(repo).handle("P1", 9)
        assert repo.stock_of("P1") == 10

    def test_restock_non_positive_rejected(self):
        repo = FakeProductRepository([make_product("P1", stock=1)])
        with pytest.raises(ValidationError):
            RestockProductHandler(repo).handle("P1", 0)


class TestDeleteProduct:

    def test_delete_unreferenced(self):
        products = FakeProductRepository([make_product("P1")])
        DeleteProductHandler(products, FakeOrderRepository()).handle("P1")
        assert products.get_by_id("P1") is None

    def test_delete_referenced_rejected(self):
        products = FakeProductRepository([make_product("P1")])
        orders = FakeOrderRepository()
        CreateDirectOrderHandler(orders, products).handle("u1", "P1", 1, "Seoul")
        with pytest.raises(ValidationError, match="referenced by order"):
            DeleteProductHandler(products, orders).handle("P1")
        assert products.get_by_id("P1") is not None

    def test_delete_unknown(self):
        with pytest.raises(ProductNotFoundError):
            DeleteProductHandler(FakeProductRepository(), FakeOrderRepository()).handle("P1")


class TestStockQueries:

    def _repo(self):
        return FakeProductRepository([
            make_product("P1", "Keyboard", stock=50, category="pc"),
            make_product("P2", "Mouse", stock=5, category="pc"),
            make_product("P3", "Desk lamp", stock=0, category="home"),
        ])

    def test_low_stock_uses_threshold_inclusively(self):
        lines = ShowStockHandler(self._repo(), low_stock_threshold=5).handle(only_low=True)
        assert [line.product_id for line in lines] == ["P2", "P3"]

    def test_full_stock_listing_flags_low(self):
        lines = ShowStockHandler(self._repo(), low_stock_threshold=5).handle()
        assert [line.low for line in lines] == [False, True, True]

    def test_search_by_keyword_and_category(self):
        handler = SearchProductsHandler(self._repo())
        assert [p.id for p in handler.handle(keyword="MOU")] == ["P2"]
        assert [p.id for p in handler.handle(category="PC")] == ["P1", "P2"]
        assert [p.id for p in handler.handle(keyword="lamp", category="home")] == ["P3"]
