"""Application service: Order Statistics use case (query)."""

from __future__ import annotations

from decimal import Decimal

from backoffice.application.dto import OrderStatistics
from backoffice.application.show_order import ListOrdersHandler
from backoffice.domain.model.order import OrderStatus
from backoffice.domain.repository.order_repository import OrderRepository


class OrderStatisticsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._orders = ListOrdersHandler(order_repo)

    def handle(self, user_id: str | None = None) -> OrderStatistics:
        """Summarise orders of one user, or all orders when ``user_id`` is None.

        Revenue only counts DELIVERED orders; PENDING, PAID and SHIPPING
        are all reported as pending.
        """
        orders = self._orders.handle(user_id)

        pending = completed = cancelled = 0
        revenue = Decimal("0")
        for order in orders:
            if order.status is OrderStatus.DELIVERED:
                completed += 1
                revenue += order.total_amount.amount
            elif order.status is OrderStatus.CANCELLED:
                cancelled += 1
            else:
                pending += 1

        average = revenue / completed if completed else Decimal("0")
        return OrderStatistics(
            total_orders=len(orders),
            pending_orders=pending,
            completed_orders=completed,
            cancelled_orders=cancelled,
            total_revenue=revenue,
            average_order_value=average,
        )
