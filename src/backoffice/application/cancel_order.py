"""Application service: Cancel Order use case.

A customer may cancel only their own order, and only while it is
PENDING or PAID.  The actual cancellation, including restoring every
item's stock, goes through the status-transition path.
"""

from __future__ import annotations

from backoffice.application.update_order_status import UpdateOrderStatusHandler
from backoffice.domain.exceptions import (
    InvalidTransitionError,
    OrderNotFoundError,
    UnauthorizedError,
)
from backoffice.domain.model.order import Order, OrderStatus
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._transition = UpdateOrderStatusHandler(order_repo, product_repo)

    def handle(self, order_id: str, requesting_user_id: str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if order.user_id != requesting_user_id:
            raise UnauthorizedError(
                f"User '{requesting_user_id}' may not cancel order '{order_id}'"
            )

        if not order.is_cancellable:
            raise InvalidTransitionError(order.status, OrderStatus.CANCELLED)

        return self._transition.apply(order, OrderStatus.CANCELLED)
