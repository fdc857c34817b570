"""Application service: Update Order Status use case.

Validates the requested change against the order state machine, restores
stock when the target is CANCELLED, then applies the transition (which
stamps payment/shipping/delivery dates) and persists the order.
"""

from __future__ import annotations

import logging

from backoffice.domain.exceptions import (
    DomainException,
    InvalidTransitionError,
    OrderNotFoundError,
    PersistenceError,
)
from backoffice.domain.model.order import Order, OrderStatus
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: str, new_status: OrderStatus) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return self.apply(order, new_status)

    def apply(self, order: Order, new_status: OrderStatus) -> Order:
        """Transition an already loaded order."""
        previous = order.status
        if not previous.can_transition_to(new_status):
            raise InvalidTransitionError(previous, new_status)

        ledger = StockLedger(self._product_repo)
        restored: dict[str, int] = {}
        if new_status is OrderStatus.CANCELLED:
            restored = order.quantities_by_product()
            ledger.restore_many(restored)

        order.transition_to(new_status)

        try:
            self._order_repo.save(order)
        except PersistenceError:
            if restored:
                self._undo_restore(ledger, order.id, restored)
            raise

        logger.info("Order %s: %s -> %s", order.id, previous.value, new_status.value)
        return order

    @staticmethod
    def _undo_restore(ledger: StockLedger, order_id: str, restored: dict[str, int]) -> None:
        # The order is still live on disk, so its stock must stay deducted.
        try:
            ledger.deduct_many(restored)
        except DomainException:
            logger.exception(
                "Could not re-deduct stock for order %s after a failed save", order_id
            )
