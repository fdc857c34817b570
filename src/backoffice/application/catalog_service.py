"""Catalog service: Result-returning facade over the product use cases.

Restocking and deleting write the same product collection that order
placement rewrites, so this service must hold the lock shared with
OrderService and CartService.
"""

from __future__ import annotations

import threading

from backoffice.application.add_product import AddProductHandler
from backoffice.application.delete_product import DeleteProductHandler
from backoffice.application.restock_product import RestockProductHandler
from backoffice.application.result import Result
from backoffice.application.show_stock import (
    SearchProductsHandler,
    ShowStockHandler,
    StockLineDTO,
)
from backoffice.application.update_product import UpdateProductPriceHandler
from backoffice.domain.model.product import Product
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository


class CatalogService:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        low_stock_threshold: int,
        lock: threading.RLock | None = None,
    ) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._add = AddProductHandler(product_repo)
        self._price = UpdateProductPriceHandler(product_repo)
        self._restock = RestockProductHandler(product_repo)
        self._delete = DeleteProductHandler(product_repo, order_repo)
        self._stock = ShowStockHandler(product_repo, low_stock_threshold)
        self._search = SearchProductsHandler(product_repo)

    def add_product(
        self,
        name: str,
        price: str,
        stock: int = 0,
        category: str = "",
        description: str = "",
    ) -> Result[Product]:
        with self._lock:
            return Result.capture(
                lambda: self._add.handle(
                    name=name,
                    price=price,
                    stock=stock,
                    category=category,
                    description=description,
                )
            )

    def update_price(self, product_id: str, new_price: str) -> Result[Product]:
        with self._lock:
            return Result.capture(lambda: self._price.handle(product_id, new_price))

    def restock(self, product_id: str, quantity: int) -> Result[Product]:
        with self._lock:
            return Result.capture(lambda: self._restock.handle(product_id, quantity))

    def delete_product(self, product_id: str) -> Result[None]:
        with self._lock:
            return Result.capture(lambda: self._delete.handle(product_id))

    def search_products(self, keyword: str = "", category: str = "") -> Result[list[Product]]:
        with self._lock:
            return Result.capture(lambda: self._search.handle(keyword, category))

    def list_stock(self, only_low: bool = False) -> Result[list[StockLineDTO]]:
        with self._lock:
            return Result.capture(lambda: self._stock.handle(only_low=only_low))
