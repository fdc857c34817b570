"""Cart aggregate, one per user, created lazily on first access.

The cart itself never looks at stock: it is a reservation-free wish list.
Availability is checked by the cart use cases when lines are added or
changed, and again for every line when the cart is turned into an order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.value_objects import MAX_ORDER_QUANTITY, Quantity, utc_now

MAX_CART_ITEMS = 50


@dataclass
class CartItem:
    product_id: str
    quantity: int


@dataclass
class Cart:
    """Aggregate root for a user's shopping cart.

    Invariant: at most one CartItem per ``product_id``.
    """

    user_id: str
    items: list[CartItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    modified_at: datetime = field(default_factory=utc_now)

    def add_item(self, product_id: str, quantity: int) -> CartItem:
        """Add ``quantity`` of a product, merging into an existing line."""
        Quantity(quantity)
        existing = self.find_item(product_id)
        if existing is not None:
            merged = existing.quantity + quantity
            if merged > MAX_ORDER_QUANTITY:
                raise ValidationError(
                    f"Quantity {merged} exceeds the maximum of {MAX_ORDER_QUANTITY}"
                )
            existing.quantity = merged
            self._touch()
            return existing

        if len(self.items) >= MAX_CART_ITEMS:
            raise ValidationError(f"Maximum {MAX_CART_ITEMS} items per cart")
        item = CartItem(product_id=product_id, quantity=quantity)
        self.items.append(item)
        self._touch()
        return item

    def remove_item(self, product_id: str) -> bool:
        """Remove the line for a product. Returns False if there was none."""
        item = self.find_item(product_id)
        if item is None:
            return False
        self.items.remove(item)
        self._touch()
        return True

    def update_quantity(self, product_id: str, new_quantity: int) -> None:
        Quantity(new_quantity)
        item = self.find_item(product_id)
        if item is None:
            raise ValidationError(f"Product '{product_id}' is not in the cart")
        item.quantity = new_quantity
        self._touch()

    def clear(self) -> None:
        self.items.clear()
        self._touch()

    def find_item(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def _touch(self) -> None:
        self.modified_at = utc_now()
