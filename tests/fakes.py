"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the flat-file
repositories but keep everything in a dict. No file I/O, no side effects.
Stored aggregates are copied on the way in and out, so a handler that
mutates an object it loaded has changed nothing until it saves.
"""

from __future__ import annotations

import copy

from backoffice.domain.exceptions import PersistenceError
from backoffice.domain.model.cart import Cart
from backoffice.domain.model.order import Order
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.cart_repository import CartRepository
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository


def make_product(
    product_id: str = "P1",
    name: str = "Widget",
    price: str = "1000",
    stock: int = 10,
    category: str = "",
) -> Product:
    return Product(
        id=product_id,
        name=name,
        price=Money.of(price),
        stock=stock,
        category=category,
    )


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[str, Order] = {}
        self._counter = 0
        self.fail_on_save = False

    def next_id(self) -> str:
        self._counter += 1
        return f"ORD{self._counter:04d}"

    def get_by_id(self, order_id: str) -> Order | None:
        return copy.deepcopy(self._store.get(order_id))

    def list_by_user_id(self, user_id: str) -> list[Order]:
        return [copy.deepcopy(o) for o in self._store.values() if o.user_id == user_id]

    def list_all(self) -> list[Order]:
        return [copy.deepcopy(o) for o in self._store.values()]

    def save(self, order: Order) -> None:
        if self.fail_on_save:
            raise PersistenceError("order store unavailable")
        self._store[order.id] = copy.deepcopy(order)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._counter = 0
        for p in products or []:
            self._store[p.id] = copy.deepcopy(p)

    def next_id(self) -> str:
        self._counter += 1
        return f"PRD{self._counter:08d}"

    def get_by_id(self, product_id: str) -> Product | None:
        return copy.deepcopy(self._store.get(product_id))

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return copy.deepcopy(p)
        return None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.values()]

    def save(self, product: Product) -> None:
        self._store[product.id] = copy.deepcopy(product)

    def save_many(self, products: list[Product]) -> None:
        for product in products:
            self.save(product)

    def delete(self, product_id: str) -> bool:
        return self._store.pop(product_id, None) is not None

    def stock_of(self, product_id: str) -> int:
        return self._store[product_id].stock


class FakeCartRepository(CartRepository):

    def __init__(self) -> None:
        self._store: dict[str, Cart] = {}
        self.fail_on_save = False

    def get_by_user_id(self, user_id: str) -> Cart | None:
        return copy.deepcopy(self._store.get(user_id))

    def save(self, cart: Cart) -> None:
        if self.fail_on_save:
            raise PersistenceError("cart store unavailable")
        self._store[cart.user_id] = copy.deepcopy(cart)
