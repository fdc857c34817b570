"""Application service: Add To Cart use case.

Checks the *merged* line quantity against current stock before the cart
is changed.  Nothing is reserved: stock can still run out between adding
to the cart and checking out, which is why checkout validates again.
"""

from __future__ import annotations

from backoffice.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from backoffice.domain.model.cart import Cart
from backoffice.domain.model.value_objects import Quantity
from backoffice.domain.repository.cart_repository import CartRepository
from backoffice.domain.repository.product_repository import ProductRepository


def load_or_create_cart(cart_repo: CartRepository, user_id: str) -> Cart:
    """Return the user's cart, creating an empty one on first access."""
    if not user_id or not user_id.strip():
        raise ValidationError("User ID is required")
    cart = cart_repo.get_by_user_id(user_id)
    return cart if cart is not None else Cart(user_id=user_id)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str, product_id: str, quantity: int) -> Cart:
        Quantity(quantity)
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        cart = load_or_create_cart(self._cart_repo, user_id)
        existing = cart.find_item(product_id)
        wanted = quantity + (existing.quantity if existing is not None else 0)
        if not product.has_stock(wanted):
            raise InsufficientStockError(product_id, wanted, product.stock)

        cart.add_item(product_id, quantity)
        self._cart_repo.save(cart)
        return cart
