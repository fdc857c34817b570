"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from backoffice.domain.exceptions import InsufficientStockError, ValidationError
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from tests.fakes import make_product


class TestProductCreation:

    def test_happy_path_strips_text(self):
        product = Product.create("P1", "  Keyboard ", Money.of("30000"), stock=3, category=" pc ")
        assert product.name == "Keyboard"
        assert product.category == "pc"
        assert product.stock == 3

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create("P1", "   ", Money.of("1"))

    def test_negative_initial_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Product.create("P1", "Mouse", Money.of("1"), stock=-1)


class TestStock:

    def test_deduct_reduces_stock(self):
        product = make_product(stock=10)
        product.deduct_stock(4)
        assert product.stock == 6

    def test_deduct_to_exactly_zero(self):
        product = make_product(stock=3)
        product.deduct_stock(3)
        assert product.stock == 0
        assert not product.is_available

    def test_deduct_more_than_stock_rejected_and_unchanged(self):
        product = make_product(stock=2)
        with pytest.raises(InsufficientStockError) as exc_info:
            product.deduct_stock(3)
        assert exc_info.value.requested == 3
        assert exc_info.value.available == 2
        assert product.stock == 2

    @pytest.mark.parametrize("bad", [0, -1])
    def test_non_positive_deduction_rejected(self, bad):
        product = make_product(stock=5)
        with pytest.raises(ValidationError, match="must be positive"):
            product.deduct_stock(bad)
        assert product.stock == 5

    def test_restore_adds_without_upper_bound(self):
        product = make_product(stock=0)
        product.restore_stock(5000)
        assert product.stock == 5000

    def test_non_positive_restore_rejected(self):
        product = make_product(stock=5)
        with pytest.raises(ValidationError, match="Restore quantity must be positive"):
            product.restore_stock(0)

    def test_has_stock(self):
        product = make_product(stock=5)
        assert product.has_stock(5)
        assert not product.has_stock(6)


class TestPrice:

    def test_update_price(self):
        product = make_product(price="1000")
        product.update_price(Money.of("1200"))
        assert product.price.amount == Decimal("1200")

    def test_currency_change_rejected(self):
        product = make_product()
        with pytest.raises(ValidationError, match="currency must stay KRW"):
            product.update_price(Money(Decimal("5"), "USD"))
