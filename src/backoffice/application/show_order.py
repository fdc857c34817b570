"""Application service: order queries."""

from __future__ import annotations

from backoffice.domain.exceptions import OrderNotFoundError, UnauthorizedError
from backoffice.domain.model.order import Order
from backoffice.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, requesting_user_id: str | None = None) -> Order:
        """Return one order.

        When ``requesting_user_id`` is given the order must belong to that
        user; administrative callers pass None.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if requesting_user_id is not None and order.user_id != requesting_user_id:
            raise UnauthorizedError(
                f"User '{requesting_user_id}' may not view order '{order_id}'"
            )
        return order


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str | None = None) -> list[Order]:
        """Orders of one user, or of everyone when ``user_id`` is None."""
        if user_id is None:
            return self._order_repo.list_all()
        if not user_id.strip():
            return []
        return self._order_repo.list_by_user_id(user_id)
