"""Application service: Restock Product use case."""

from __future__ import annotations

from backoffice.domain.model.product import Product
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.service.stock_ledger import StockLedger


class RestockProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._ledger = StockLedger(product_repo)

    def handle(self, product_id: str, quantity: int) -> Product:
        return self._ledger.restock(product_id, quantity)
