"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Everything is built once per process by ``build_services`` and handed to
callers explicitly; there are no module-level singletons.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from backoffice.application.cart_service import CartService
from backoffice.application.catalog_service import CatalogService
from backoffice.application.order_service import OrderService
from backoffice.infrastructure.config import Settings
from backoffice.infrastructure.persistence.flat_file_cart_repository import (
    FlatFileCartRepository,
)
from backoffice.infrastructure.persistence.flat_file_order_repository import (
    FlatFileOrderRepository,
)
from backoffice.infrastructure.persistence.flat_file_product_repository import (
    FlatFileProductRepository,
)
from backoffice.infrastructure.persistence.record_store import FileRecordStore, RecordStore


@dataclass
class Services:
    settings: Settings
    products: FlatFileProductRepository
    orders: FlatFileOrderRepository
    carts: FlatFileCartRepository
    order_service: OrderService
    cart_service: CartService
    catalog_service: CatalogService


def build_services(settings: Settings, store: RecordStore | None = None) -> Services:
    """Build repositories and services over ``store`` (files by default)."""
    if store is None:
        store = FileRecordStore(settings.data_dir)

    products = FlatFileProductRepository(store)
    orders = FlatFileOrderRepository(store)
    carts = FlatFileCartRepository(store)

    # One writer at a time across the catalog, carts, stock and orders.
    lock = threading.RLock()
    return Services(
        settings=settings,
        products=products,
        orders=orders,
        carts=carts,
        order_service=OrderService(orders, products, carts, lock=lock),
        cart_service=CartService(carts, products, lock=lock),
        catalog_service=CatalogService(
            products, orders, settings.low_stock_threshold, lock=lock
        ),
    )
