"""Application service: Delete Product use case.

A product that any order still refers to stays in the catalog, so order
history and stock restoration on cancellation keep working.
"""

from __future__ import annotations

import logging

from backoffice.domain.exceptions import ProductNotFoundError, ValidationError
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(self, product_id: str) -> None:
        if self._product_repo.get_by_id(product_id) is None:
            raise ProductNotFoundError(product_id)

        for order in self._order_repo.list_all():
            if order.find_item(product_id) is not None:
                raise ValidationError(
                    f"Product '{product_id}' is referenced by order '{order.id}'"
                )

        self._product_repo.delete(product_id)
        logger.info("Product %s deleted", product_id)
