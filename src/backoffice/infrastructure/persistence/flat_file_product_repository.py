"""Flat-file implementation of ProductRepository.

Every call loads the whole ``products`` collection; every write rewrites
it.  That is O(catalog size) per call, which is fine for a back-office
catalog.
"""

from __future__ import annotations

import uuid

from backoffice.domain.model.product import Product
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.infrastructure.persistence.record_store import RecordStore
from backoffice.infrastructure.persistence.records import (
    product_from_record,
    product_to_record,
)

PRODUCTS = "products"


class FlatFileProductRepository(ProductRepository):

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        existing = {p.id for p in self.list_all()}
        while True:
            candidate = "PRD" + uuid.uuid4().hex[:8].upper()
            if candidate not in existing:
                return candidate

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        self.save_many([product])

    def save_many(self, products: list[Product]) -> None:
        catalog = self._load()
        for product in products:
            catalog[product.id] = product
        self._persist(catalog)

    def delete(self, product_id: str) -> bool:
        catalog = self._load()
        if catalog.pop(product_id, None) is None:
            return False
        self._persist(catalog)
        return True

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        products = (product_from_record(r) for r in self._store.load_all(PRODUCTS))
        return {p.id: p for p in products}

    def _persist(self, catalog: dict[str, Product]) -> None:
        self._store.save_all(PRODUCTS, [product_to_record(p) for p in catalog.values()])
