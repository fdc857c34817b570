"""Flat-file implementation of CartRepository.

All carts share the ``cart_items`` collection, one record per cart line.
An empty cart has no records, so it reads back as "no cart" and is
recreated lazily on the next access.
"""

from __future__ import annotations

from backoffice.domain.model.cart import Cart
from backoffice.domain.repository.cart_repository import CartRepository
from backoffice.infrastructure.persistence.record_store import RecordStore
from backoffice.infrastructure.persistence.records import (
    cart_to_records,
    carts_from_records,
    record_key,
)

CART_ITEMS = "cart_items"


class FlatFileCartRepository(CartRepository):

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def get_by_user_id(self, user_id: str) -> Cart | None:
        records = [r for r in self._store.load_all(CART_ITEMS) if record_key(r) == user_id]
        return carts_from_records(records).get(user_id)

    def save(self, cart: Cart) -> None:
        # Other users' lines are preserved as-is.
        records = [
            r for r in self._store.load_all(CART_ITEMS) if record_key(r) != cart.user_id
        ]
        self._store.save_all(CART_ITEMS, records + cart_to_records(cart))
