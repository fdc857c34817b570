"""Domain service: Stock Ledger.

Every change to a product's on-hand stock goes through this service.
It lives in the domain layer because "stock never goes negative" is a
core business rule, not just orchestration.

Multi-product changes use a two-phase approach (validate-then-mutate) and
a single collection write, so a failure on one product can never leave
the others already deducted.
"""

from __future__ import annotations

import logging

from backoffice.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from backoffice.domain.model.product import Product
from backoffice.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    # --- Single product -------------------------------------------------------

    def check_availability(self, product_id: str, quantity: int) -> bool:
        """True if the product exists and has at least ``quantity`` in stock."""
        product = self._product_repo.get_by_id(product_id)
        return product is not None and product.has_stock(quantity)

    def deduct(self, product_id: str, quantity: int) -> Product:
        product = self._require_product(product_id)
        product.deduct_stock(quantity)
        self._product_repo.save(product)
        logger.debug("Deducted %d of %s (stock now %d)", quantity, product_id, product.stock)
        return product

    def restore(self, product_id: str, quantity: int) -> Product:
        product = self._require_product(product_id)
        product.restore_stock(quantity)
        self._product_repo.save(product)
        logger.debug("Restored %d of %s (stock now %d)", quantity, product_id, product.stock)
        return product

    def restock(self, product_id: str, quantity: int) -> Product:
        """Manual stock increase by an administrator."""
        product = self.restore(product_id, quantity)
        logger.info("Restocked %s by %d (stock now %d)", product_id, quantity, product.stock)
        return product

    # --- Whole orders ---------------------------------------------------------

    def deduct_many(self, quantities: dict[str, int]) -> list[Product]:
        """Deduct stock for several products, all or nothing.

        Phase 1 loads and validates: every product must exist and hold
        enough stock.  It fails fast before any mutation.
        Phase 2 mutates and persists in one collection write.
        """
        catalog = {p.id: p for p in self._product_repo.list_all()}

        # Phase 1: validate every line
        staged: list[tuple[Product, int]] = []
        for product_id, qty in quantities.items():
            if not isinstance(qty, int) or qty <= 0:
                raise ValidationError("Deduction quantity must be positive")
            product = catalog.get(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            if not product.has_stock(qty):
                raise InsufficientStockError(product_id, qty, product.stock)
            staged.append((product, qty))

        # Phase 2: mutate and persist
        for product, qty in staged:
            product.deduct_stock(qty)
        changed = [product for product, _ in staged]
        self._product_repo.save_many(changed)
        return changed

    def restore_many(self, quantities: dict[str, int]) -> list[Product]:
        """Put stock back for several products in one collection write.

        Products that have since left the catalog are skipped.
        """
        catalog = {p.id: p for p in self._product_repo.list_all()}

        changed: list[Product] = []
        for product_id, qty in quantities.items():
            product = catalog.get(product_id)
            if product is None:
                logger.warning(
                    "Cannot restore %d of %s: product no longer exists", qty, product_id
                )
                continue
            product.restore_stock(qty)
            changed.append(product)

        if changed:
            self._product_repo.save_many(changed)
        return changed

    # --- Internal helpers -----------------------------------------------------

    def _require_product(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product
