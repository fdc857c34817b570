"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        category: str = "",
        description: str = "",
    ) -> Product:
        """Register a new product. Names are unique, case-insensitively."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        product = Product.create(
            product_id=self._product_repo.next_id(),
            name=name,
            price=Money.of(price),
            stock=stock,
            category=category,
            description=description,
        )
        self._product_repo.save(product)
        logger.info("Product %s '%s' added with stock %d", product.id, product.name, product.stock)
        return product
