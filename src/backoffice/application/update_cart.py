"""Application services: change or empty an existing cart."""

from __future__ import annotations

from backoffice.application.add_to_cart import load_or_create_cart
from backoffice.domain.exceptions import InsufficientStockError, ProductNotFoundError
from backoffice.domain.model.cart import Cart
from backoffice.domain.model.value_objects import Quantity
from backoffice.domain.repository.cart_repository import CartRepository
from backoffice.domain.repository.product_repository import ProductRepository


class UpdateCartQuantityHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str, product_id: str, new_quantity: int) -> Cart:
        """Replace a line's quantity after re-checking current stock."""
        Quantity(new_quantity)
        cart = load_or_create_cart(self._cart_repo, user_id)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        if not product.has_stock(new_quantity):
            raise InsufficientStockError(product_id, new_quantity, product.stock)

        cart.update_quantity(product_id, new_quantity)
        self._cart_repo.save(cart)
        return cart


class RemoveFromCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, user_id: str, product_id: str) -> bool:
        """Drop a line. Returns False (and writes nothing) if it was absent."""
        cart = load_or_create_cart(self._cart_repo, user_id)
        if not cart.remove_item(product_id):
            return False
        self._cart_repo.save(cart)
        return True


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, user_id: str) -> Cart:
        cart = load_or_create_cart(self._cart_repo, user_id)
        if not cart.is_empty:
            cart.clear()
            self._cart_repo.save(cart)
        return cart
