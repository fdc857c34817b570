"""Integration tests for the Cancel Order use case."""

import pytest

from backoffice.application.cancel_order import CancelOrderHandler
from backoffice.application.create_order import CreateDirectOrderHandler
from backoffice.application.update_order_status import UpdateOrderStatusHandler
from backoffice.domain.exceptions import (
    InvalidTransitionError,
    OrderNotFoundError,
    UnauthorizedError,
)
from backoffice.domain.model.order import OrderStatus
from tests.fakes import FakeOrderRepository, FakeProductRepository, make_product


def _setup(*advance: OrderStatus):
    """u1 orders 4×P1 (moved through ``advance``); u2 orders 1×P2."""
    orders = FakeOrderRepository()
    products = FakeProductRepository([
        make_product("P1", "Keyboard", stock=10),
        make_product("P2", "Mouse", stock=5),
    ])
    order = CreateDirectOrderHandler(orders, products).handle("u1", "P1", 4, "Seoul")
    order2 = CreateDirectOrderHandler(orders, products).handle("u2", "P2", 1, "Busan")

    status = UpdateOrderStatusHandler(orders, products)
    for target in advance:
        status.handle(order.id, target)
    return CancelOrderHandler(orders, products), orders, products, order.id, order2.id


class TestCancelOrder:

    def test_cancel_pending_restores_stock(self):
        handler, orders, products, order_id, _ = _setup()
        assert products.stock_of("P1") == 6

        cancelled = handler.handle(order_id, "u1")

        assert cancelled.status == OrderStatus.CANCELLED
        assert products.stock_of("P1") == 10
        assert orders.get_by_id(order_id).status == OrderStatus.CANCELLED

    def test_second_cancel_rejected(self):
        handler, _, products, order_id, _ = _setup()
        handler.handle(order_id, "u1")
        with pytest.raises(InvalidTransitionError):
            handler.handle(order_id, "u1")
        assert products.stock_of("P1") == 10

    def test_cancel_paid_order(self):
        handler, _, products, order_id, _ = _setup(OrderStatus.PAID)
        handler.handle(order_id, "u1")
        assert products.stock_of("P1") == 10

    def test_cancel_shipping_order_rejected(self):
        handler, _, products, order_id, _ = _setup(OrderStatus.PAID, OrderStatus.SHIPPING)
        with pytest.raises(InvalidTransitionError, match="SHIPPING to CANCELLED"):
            handler.handle(order_id, "u1")
        assert products.stock_of("P1") == 6

    def test_other_user_cannot_cancel(self):
        handler, orders, products, order_id, _ = _setup()
        with pytest.raises(UnauthorizedError):
            handler.handle(order_id, "u2")
        assert orders.get_by_id(order_id).status == OrderStatus.PENDING
        assert products.stock_of("P1") == 6

    def test_other_orders_untouched(self):
        handler, orders, products, order_id, other_id = _setup()
        handler.handle(order_id, "u1")
        assert orders.get_by_id(other_id).status == OrderStatus.PENDING
        assert products.stock_of("P2") == 4

    def test_unknown_order(self):
        handler, _, _, _, _ = _setup()
        with pytest.raises(OrderNotFoundError):
            handler.handle("nope", "u1")
