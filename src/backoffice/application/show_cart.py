"""Application services: cart queries (query)."""

from __future__ import annotations

from decimal import Decimal

from backoffice.application.add_to_cart import load_or_create_cart
from backoffice.application.dto import CartLineDTO, CartSummary, CartValidationReport
from backoffice.domain.repository.cart_repository import CartRepository
from backoffice.domain.repository.product_repository import ProductRepository


class ShowCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str) -> CartSummary:
        """Price every line at the current catalog price.

        Lines whose product has left the catalog are omitted; use
        ``ValidateCartHandler`` to report them.
        """
        cart = load_or_create_cart(self._cart_repo, user_id)
        catalog = {p.id: p for p in self._product_repo.list_all()}

        lines: list[CartLineDTO] = []
        for item in cart.items:
            product = catalog.get(item.product_id)
            if product is None:
                continue
            lines.append(
                CartLineDTO(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=item.quantity,
                    unit_price=product.price.amount,
                    subtotal=(product.price * item.quantity).amount,
                )
            )

        return CartSummary(
            user_id=cart.user_id,
            lines=lines,
            total=sum((line.subtotal for line in lines), Decimal("0")),
            total_quantity=cart.total_quantity,
        )


class ValidateCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str) -> CartValidationReport:
        """Check whether every line could be ordered right now."""
        cart = load_or_create_cart(self._cart_repo, user_id)
        catalog = {p.id: p for p in self._product_repo.list_all()}

        issues: list[str] = []
        for item in cart.items:
            product = catalog.get(item.product_id)
            if product is None:
                issues.append(f"Product '{item.product_id}' is no longer sold")
            elif not product.has_stock(item.quantity):
                issues.append(
                    f"Not enough '{product.name}' in stock "
                    f"(in cart {item.quantity}, available {product.stock})"
                )
        return CartValidationReport(valid=not issues, issues=issues)
