"""Pipe-delimited record codecs.

One record per line, fields in a fixed order:

- product:    ``id|name|price|category|stock|description|createdAt``
- order:      ``id|userId|totalAmount|shippingAddress|phoneNumber|status|orderDate``
              then ``|paymentDate|shippingDate|deliveryDate`` (empty when unset)
- order item: ``orderId|productId|quantity|unitPrice``
- cart line:  ``userId|productId|quantity|createdAt|modifiedAt``

Timestamps are UTC ``YYYY-MM-DD HH:MM:SS``.  Backslash escapes (``\\|``,
``\\\\``, ``\\n``, ``\\r``) let any field value survive a save/load cycle.
A record that cannot be decoded raises PersistenceError.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Iterator

from backoffice.domain.exceptions import DomainException, PersistenceError
from backoffice.domain.model.cart import Cart, CartItem
from backoffice.domain.model.order import Order, OrderItem, OrderStatus
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money, Quantity

logger = logging.getLogger(__name__)

SEPARATOR = "|"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_ESCAPES = {"\\": "\\\\", SEPARATOR: "\\|", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"n": "\n", "r": "\r"}


# --- Field layer --------------------------------------------------------------


def join_fields(fields: list[str]) -> str:
    return SEPARATOR.join("".join(_ESCAPES.get(ch, ch) for ch in f) for f in fields)


def split_fields(record: str) -> list[str]:
    fields: list[str] = []
    current: list[str] = []
    chars = iter(record)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "")
            if not nxt:
                raise PersistenceError(f"Dangling escape at end of record {record!r}")
            current.append(_UNESCAPES.get(nxt, nxt))
        elif ch == SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


def record_key(record: str) -> str:
    """First field of a record (the id, or the owning id for child records)."""
    return split_fields(record)[0]


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def parse_timestamp(text: str) -> datetime:
    return datetime.strptime(text, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def _format_optional(value: datetime | None) -> str:
    return format_timestamp(value) if value is not None else ""


def _parse_optional(text: str) -> datetime | None:
    return parse_timestamp(text) if text else None


def _money(text: str) -> Money:
    return Money(Decimal(text))


@contextmanager
def _decoding(kind: str, record: str) -> Iterator[None]:
    try:
        yield
    except PersistenceError:
        raise
    except (ValueError, InvalidOperation, DomainException) as exc:
        raise PersistenceError(f"Malformed {kind} record {record!r}: {exc}") from exc


def _expect(kind: str, record: str, fields: list[str], *counts: int) -> None:
    if len(fields) not in counts:
        raise PersistenceError(
            f"Malformed {kind} record {record!r}: expected "
            f"{' or '.join(map(str, counts))} fields, got {len(fields)}"
        )


# --- Product ------------------------------------------------------------------


def product_to_record(product: Product) -> str:
    return join_fields([
        product.id,
        product.name,
        str(product.price.amount),
        product.category,
        str(product.stock),
        product.description,
        format_timestamp(product.created_at),
    ])


def product_from_record(record: str) -> Product:
    fields = split_fields(record)
    _expect("product", record, fields, 7)
    with _decoding("product", record):
        stock = int(fields[4])
        if stock < 0:
            raise ValueError(f"negative stock {stock}")
        return Product(
            id=fields[0],
            name=fields[1],
            price=_money(fields[2]),
            category=fields[3],
            stock=stock,
            description=fields[5],
            created_at=parse_timestamp(fields[6]),
        )


# --- Order items --------------------------------------------------------------


def order_item_to_record(item: OrderItem) -> str:
    return join_fields([
        item.order_id,
        item.product_id,
        str(item.quantity.value),
        str(item.unit_price.amount),
    ])


def order_item_from_record(record: str) -> OrderItem:
    fields = split_fields(record)
    _expect("order item", record, fields, 4)
    with _decoding("order item", record):
        return OrderItem(
            order_id=fields[0],
            product_id=fields[1],
            quantity=Quantity(int(fields[2])),
            unit_price=_money(fields[3]),
        )


# --- Order headers ------------------------------------------------------------


def order_to_record(order: Order) -> str:
    return join_fields([
        order.id,
        order.user_id,
        str(order.total_amount.amount),
        order.shipping_address,
        order.phone_number,
        order.status.value,
        format_timestamp(order.order_date),
        _format_optional(order.payment_date),
        _format_optional(order.shipping_date),
        _format_optional(order.delivery_date),
    ])


def order_from_record(record: str, items: list[OrderItem]) -> Order:
    """Rebuild an order header and attach its already decoded items.

    Seven-field records (no payment/shipping/delivery dates) are accepted.
    The stored total is informational: the total is always recomputed
    from the items, and a disagreement is logged.
    """
    fields = split_fields(record)
    _expect("order", record, fields, 7, 10)
    fields += [""] * (10 - len(fields))
    with _decoding("order", record):
        order = Order(
            id=fields[0],
            user_id=fields[1],
            items=list(items),
            shipping_address=fields[3],
            phone_number=fields[4],
            status=OrderStatus(fields[5]),
            order_date=parse_timestamp(fields[6]),
            payment_date=_parse_optional(fields[7]),
            shipping_date=_parse_optional(fields[8]),
            delivery_date=_parse_optional(fields[9]),
        )
        stored_total = Decimal(fields[2])

    if stored_total != order.total_amount.amount:
        logger.warning(
            "Order %s: stored total %s differs from item total %s",
            order.id, stored_total, order.total_amount.amount,
        )
    return order


# --- Carts --------------------------------------------------------------------


def cart_to_records(cart: Cart) -> list[str]:
    created = format_timestamp(cart.created_at)
    modified = format_timestamp(cart.modified_at)
    return [
        join_fields([cart.user_id, item.product_id, str(item.quantity), created, modified])
        for item in cart.items
    ]


def carts_from_records(records: list[str]) -> dict[str, Cart]:
    """Group cart lines into one Cart per user, preserving line order."""
    carts: dict[str, Cart] = {}
    for record in records:
        fields = split_fields(record)
        _expect("cart", record, fields, 5)
        with _decoding("cart", record):
            user_id = fields[0]
            cart = carts.get(user_id)
            if cart is None:
                cart = Cart(
                    user_id=user_id,
                    created_at=parse_timestamp(fields[3]),
                    modified_at=parse_timestamp(fields[4]),
                )
                carts[user_id] = cart
            cart.items.append(CartItem(product_id=fields[1], quantity=Quantity(int(fields[2])).value))
    return carts
