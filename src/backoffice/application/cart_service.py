"""Cart service: Result-returning facade over the cart use cases."""

from __future__ import annotations

import threading
from decimal import Decimal

from backoffice.application.add_to_cart import AddToCartHandler, load_or_create_cart
from backoffice.application.dto import CartSummary, CartValidationReport
from backoffice.application.result import Result
from backoffice.application.show_cart import ShowCartHandler, ValidateCartHandler
from backoffice.application.update_cart import (
    ClearCartHandler,
    RemoveFromCartHandler,
    UpdateCartQuantityHandler,
)
from backoffice.domain.model.cart import Cart
from backoffice.domain.repository.cart_repository import CartRepository
from backoffice.domain.repository.product_repository import ProductRepository


class CartService:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        lock: threading.RLock | None = None,
    ) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._cart_repo = cart_repo
        self._add = AddToCartHandler(cart_repo, product_repo)
        self._update = UpdateCartQuantityHandler(cart_repo, product_repo)
        self._remove = RemoveFromCartHandler(cart_repo)
        self._clear = ClearCartHandler(cart_repo)
        self._show = ShowCartHandler(cart_repo, product_repo)
        self._validate = ValidateCartHandler(cart_repo, product_repo)

    def get_cart(self, user_id: str) -> Result[Cart]:
        with self._lock:
            return Result.capture(lambda: load_or_create_cart(self._cart_repo, user_id))

    def add_to_cart(self, user_id: str, product_id: str, quantity: int) -> Result[Cart]:
        with self._lock:
            return Result.capture(lambda: self._add.handle(user_id, product_id, quantity))

    def update_quantity(self, user_id: str, product_id: str, new_quantity: int) -> Result[Cart]:
        with self._lock:
            return Result.capture(
                lambda: self._update.handle(user_id, product_id, new_quantity)
            )

    def remove_from_cart(self, user_id: str, product_id: str) -> Result[bool]:
        with self._lock:
            return Result.capture(lambda: self._remove.handle(user_id, product_id))

    def clear_cart(self, user_id: str) -> Result[Cart]:
        with self._lock:
            return Result.capture(lambda: self._clear.handle(user_id))

    def summarize(self, user_id: str) -> Result[CartSummary]:
        with self._lock:
            return Result.capture(lambda: self._show.handle(user_id))

    def cart_total(self, user_id: str) -> Result[Decimal]:
        with self._lock:
            return Result.capture(lambda: self._show.handle(user_id).total)

    def validate_cart(self, user_id: str) -> Result[CartValidationReport]:
        with self._lock:
            return Result.capture(lambda: self._validate.handle(user_id))
