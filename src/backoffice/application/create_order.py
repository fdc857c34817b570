"""Application service: Create Order use cases.

Two entry points share one placement routine:

- ``CreateOrderFromCartHandler`` turns a user's whole cart into an order
  and clears the cart afterwards.
- ``CreateDirectOrderHandler`` orders a single product without touching
  the cart.

Placement order matters.  The Order aggregate validates its inputs first,
then the stock ledger validates *every* line before deducting any of
them, and only then is the order persisted.  If persisting fails the
deducted stock is put back before the error is re-raised.
"""

from __future__ import annotations

import logging

from backoffice.application.dto import OrderLineSpec
from backoffice.domain.exceptions import (
    EmptyCartError,
    PersistenceError,
    ProductNotFoundError,
    ValidationError,
)
from backoffice.domain.model.order import Order, OrderItem
from backoffice.domain.model.value_objects import Quantity
from backoffice.domain.repository.cart_repository import CartRepository
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class _OrderPlacement:
    """Shared steps of both creation flows."""

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def place(
        self,
        user_id: str,
        specs: list[OrderLineSpec],
        shipping_address: str,
        phone_number: str = "",
    ) -> Order:
        order_id = self._order_repo.next_id()
        items: list[OrderItem] = []

        for spec in specs:
            quantity = Quantity(spec.quantity)
            product = self._product_repo.get_by_id(spec.product_id)
            if product is None:
                raise ProductNotFoundError(spec.product_id)

            items.append(
                OrderItem(
                    order_id=order_id,
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=product.price,  # <-- price snapshot
                )
            )

        order = Order.create(
            order_id=order_id,
            user_id=user_id,
            items=items,
            shipping_address=shipping_address,
            phone_number=phone_number,
        )

        ledger = StockLedger(self._product_repo)
        deducted = order.quantities_by_product()
        ledger.deduct_many(deducted)

        try:
            self._order_repo.save(order)
        except PersistenceError:
            logger.error("Saving order %s failed; restoring deducted stock", order.id)
            ledger.restore_many(deducted)
            raise

        logger.info(
            "Order %s created for %s: %d item(s), total %s",
            order.id, order.user_id, len(order.items), order.total_amount,
        )
        return order


class CreateOrderFromCartHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
    ) -> None:
        self._placement = _OrderPlacement(order_repo, product_repo)
        self._cart_repo = cart_repo

    def handle(
        self,
        user_id: str,
        shipping_address: str,
        phone_number: str = "",
    ) -> Order:
        """Convert the user's cart into a PENDING order.

        Steps:
        1. Load the cart (fail with EmptyCartError if it has no lines).
        2. Snapshot current prices and validate stock for every line.
        3. Deduct stock, persist the order, then clear the cart.

        Once the order is saved it is returned even if clearing the cart
        fails; the leftover lines are only logged.
        """
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")

        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError(user_id)

        specs = [OrderLineSpec(item.product_id, item.quantity) for item in cart.items]
        order = self._placement.place(user_id, specs, shipping_address, phone_number)

        cart.clear()
        try:
            self._cart_repo.save(cart)
        except PersistenceError as exc:
            logger.warning(
                "Order %s placed but the cart of %s could not be cleared: %s",
                order.id, user_id, exc,
            )
        return order


class CreateDirectOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._placement = _OrderPlacement(order_repo, product_repo)

    def handle(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        shipping_address: str,
        phone_number: str = "",
    ) -> Order:
        """Order ``quantity`` units of one product, bypassing the cart."""
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        return self._placement.place(
            user_id,
            [OrderLineSpec(product_id.strip(), quantity)],
            shipping_address,
            phone_number,
        )
