"""Product aggregate.

Products live independently of orders. Prices change and stock moves up
and down, but existing orders keep the price snapshot taken when they
were created.  ``stock`` is only ever changed through the methods below,
which is what keeps it from going negative.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from backoffice.domain.exceptions import InsufficientStockError, ValidationError
from backoffice.domain.model.value_objects import Money, utc_now


@dataclass
class Product:
    """A catalog entry together with its on-hand stock.

    Invariant: ``stock >= 0``.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    category: str = ""
    description: str = ""
    created_at: datetime = field(default_factory=utc_now)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        product_id: str,
        name: str,
        price: Money,
        stock: int = 0,
        category: str = "",
        description: str = "",
    ) -> Product:
        """Register a new catalog entry, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(stock, int) or stock < 0:
            raise ValidationError("Initial stock cannot be negative")
        return Product(
            id=product_id,
            name=name.strip(),
            price=price,
            stock=stock,
            category=category.strip(),
            description=description.strip(),
        )

    # --- Stock ----------------------------------------------------------------

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    @property
    def is_available(self) -> bool:
        return self.stock > 0

    def deduct_stock(self, quantity: int) -> None:
        """Take ``quantity`` units out of stock for an order."""
        _require_positive(quantity, "Deduction")
        if not self.has_stock(quantity):
            raise InsufficientStockError(self.id, quantity, self.stock)
        self.stock -= quantity

    def restore_stock(self, quantity: int) -> None:
        """Put ``quantity`` units back, e.g. when an order is cancelled.

        No upper bound is enforced.
        """
        _require_positive(quantity, "Restore")
        self.stock += quantity

    # --- Catalog --------------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders are unaffected because each order item holds its
        own unit price snapshot.
        """
        if new_price.currency != self.price.currency:
            raise ValidationError(
                f"Price currency must stay {self.price.currency}, got {new_price.currency}"
            )
        self.price = new_price


def _require_positive(quantity: int, action: str) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise ValidationError(f"{action} quantity must be positive")
