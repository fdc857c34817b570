"""Flat-file implementation of OrderRepository.

Order headers live in ``orders`` and their lines in ``order_items``, so
saving one order touches two collections.  ``save`` first writes the
header and item records to ``order_journal``; that single write is the
commit point.  Both collections are then updated and the journal is
emptied.  If updating the collections fails, the order is still saved:
the pending journal entry is applied before the next read or write and
when the repository is constructed.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections import defaultdict

from backoffice.domain.exceptions import PersistenceError
from backoffice.domain.model.order import Order, OrderItem
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.infrastructure.persistence.record_store import RecordStore
from backoffice.infrastructure.persistence.records import (
    order_from_record,
    order_item_from_record,
    order_item_to_record,
    order_to_record,
    record_key,
)

logger = logging.getLogger(__name__)

ORDERS = "orders"
ORDER_ITEMS = "order_items"
ORDER_JOURNAL = "order_journal"


class FlatFileOrderRepository(OrderRepository):

    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self.recover()

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        millis = time.time_ns() // 1_000_000
        return f"ORD{millis:013d}{uuid.uuid4().hex[:4].upper()}"

    def get_by_id(self, order_id: str) -> Order | None:
        for order in self._load():
            if order.id == order_id:
                return order
        return None

    def list_by_user_id(self, user_id: str) -> list[Order]:
        return [order for order in self._load() if order.user_id == user_id]

    def list_all(self) -> list[Order]:
        return self._load()

    def save(self, order: Order) -> None:
        header = order_to_record(order)
        items = [order_item_to_record(item) for item in order.items]

        # An earlier pending entry must land before it is overwritten.
        self.recover()
        self._store.save_all(ORDER_JOURNAL, [header, *items])

        try:
            self._apply(order.id, header, items)
            self._store.save_all(ORDER_JOURNAL, [])
        except PersistenceError as exc:
            logger.warning(
                "Order %s is journalled but not yet applied (%s); "
                "it will be applied on the next access",
                order.id, exc,
            )

    # --- Journal --------------------------------------------------------------

    def recover(self) -> bool:
        """Finish a journalled write that was interrupted or failed.

        Returns True if a pending write was replayed.
        """
        journal = self._store.load_all(ORDER_JOURNAL)
        if not journal:
            return False

        header, items = journal[0], journal[1:]
        order_id = record_key(header)
        logger.warning("Replaying interrupted write of order %s", order_id)
        self._apply(order_id, header, items)
        self._store.save_all(ORDER_JOURNAL, [])
        return True

    def _apply(self, order_id: str, header: str, items: list[str]) -> None:
        # Items first: a header must never be visible without its lines.
        item_records = [
            r for r in self._store.load_all(ORDER_ITEMS) if record_key(r) != order_id
        ]
        self._store.save_all(ORDER_ITEMS, item_records + items)

        headers = self._store.load_all(ORDERS)
        for i, record in enumerate(headers):
            if record_key(record) == order_id:
                headers[i] = header
                break
        else:
            headers.append(header)
        self._store.save_all(ORDERS, headers)

    # --- Loading --------------------------------------------------------------

    def _load(self) -> list[Order]:
        self.recover()
        items_by_order: dict[str, list[OrderItem]] = defaultdict(list)
        for record in self._store.load_all(ORDER_ITEMS):
            item = order_item_from_record(record)
            items_by_order[item.order_id].append(item)

        return [
            order_from_record(record, items_by_order.get(record_key(record), []))
            for record in self._store.load_all(ORDERS)
        ]
