"""Application services: catalog and stock queries (query)."""

from __future__ import annotations

from dataclasses import dataclass

from backoffice.domain.model.product import Product
from backoffice.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class StockLineDTO:
    product_id: str
    product_name: str
    category: str
    stock: int
    low: bool


class ShowStockHandler:

    def __init__(self, product_repo: ProductRepository, low_stock_threshold: int) -> None:
        self._product_repo = product_repo
        self._threshold = low_stock_threshold

    def handle(self, only_low: bool = False) -> list[StockLineDTO]:
        lines = [
            StockLineDTO(
                product_id=p.id,
                product_name=p.name,
                category=p.category,
                stock=p.stock,
                low=p.stock <= self._threshold,
            )
            for p in self._product_repo.list_all()
        ]
        if only_low:
            lines = [line for line in lines if line.low]
        return lines


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, keyword: str = "", category: str = "") -> list[Product]:
        """Case-insensitive name substring and exact category filters."""
        keyword = keyword.strip().lower()
        category = category.strip().lower()
        return [
            p
            for p in self._product_repo.list_all()
            if keyword in p.name.lower()
            and (not category or p.category.lower() == category)
        ]
