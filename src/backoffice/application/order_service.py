"""Order orchestration service.

The single entry point that may change carts, product stock and orders
together.  Each method runs one use-case handler under a shared lock and
returns a Result instead of raising domain errors, so callers always get
either the updated aggregate or the typed failure.

The lock gives a single-writer discipline around every full-collection
read-modify-write cycle: two order creations for the same product cannot
both pass the stock check.  Share one lock between this service and
CartService when both are used in the same process.
"""

from __future__ import annotations

import threading

from backoffice.application.cancel_order import CancelOrderHandler
from backoffice.application.create_order import (
    CreateDirectOrderHandler,
    CreateOrderFromCartHandler,
)
from backoffice.application.dto import OrderStatistics
from backoffice.application.order_statistics import OrderStatisticsHandler
from backoffice.application.result import Result
from backoffice.application.show_order import ListOrdersHandler, ShowOrderHandler
from backoffice.application.update_order_status import UpdateOrderStatusHandler
from backoffice.domain.model.order import Order, OrderStatus
from backoffice.domain.repository.cart_repository import CartRepository
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository


class OrderService:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
        lock: threading.RLock | None = None,
    ) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._from_cart = CreateOrderFromCartHandler(order_repo, product_repo, cart_repo)
        self._direct = CreateDirectOrderHandler(order_repo, product_repo)
        self._show = ShowOrderHandler(order_repo)
        self._list = ListOrdersHandler(order_repo)
        self._status = UpdateOrderStatusHandler(order_repo, product_repo)
        self._cancel = CancelOrderHandler(order_repo, product_repo)
        self._stats = OrderStatisticsHandler(order_repo)

    # --- Commands -------------------------------------------------------------

    def create_order_from_cart(
        self,
        user_id: str,
        shipping_address: str,
        phone_number: str = "",
    ) -> Result[Order]:
        with self._lock:
            return Result.capture(
                lambda: self._from_cart.handle(user_id, shipping_address, phone_number)
            )

    def create_direct_order(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        shipping_address: str,
        phone_number: str = "",
    ) -> Result[Order]:
        with self._lock:
            return Result.capture(
                lambda: self._direct.handle(
                    user_id, product_id, quantity, shipping_address, phone_number
                )
            )

    def update_order_status(self, order_id: str, new_status: OrderStatus) -> Result[Order]:
        with self._lock:
            return Result.capture(lambda: self._status.handle(order_id, new_status))

    def cancel_order(self, order_id: str, requesting_user_id: str) -> Result[Order]:
        with self._lock:
            return Result.capture(lambda: self._cancel.handle(order_id, requesting_user_id))

    # --- Queries --------------------------------------------------------------

    def get_order_by_id(
        self,
        order_id: str,
        requesting_user_id: str | None = None,
    ) -> Result[Order]:
        with self._lock:
            return Result.capture(lambda: self._show.handle(order_id, requesting_user_id))

    def get_orders_by_user_id(self, user_id: str) -> Result[list[Order]]:
        with self._lock:
            return Result.capture(lambda: self._list.handle(user_id))

    def get_all_orders(self) -> Result[list[Order]]:
        with self._lock:
            return Result.capture(lambda: self._list.handle(None))

    def get_statistics(self, user_id: str | None = None) -> Result[OrderStatistics]:
        with self._lock:
            return Result.capture(lambda: self._stats.handle(user_id))
