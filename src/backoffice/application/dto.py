"""Data Transfer Objects: plain containers that cross layer boundaries.

Input specs carry what a caller asked for; the output objects carry
computed views (order display rows, statistics, cart reports) without
exposing domain internals to the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from backoffice.domain.model.order import Order


@dataclass(frozen=True)
class OrderLineSpec:
    """Input: a product id and how many units of it to order."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    quantity: int
    unit_price: str  # formatted, e.g. "1,000 KRW"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    user_id: str
    status: str
    status_description: str
    items: list[OrderItemDTO]
    total: str
    shipping_address: str
    phone_number: str
    order_date: str
    payment_date: str | None = None
    shipping_date: str | None = None
    delivery_date: str | None = None


@dataclass(frozen=True)
class OrderStatistics:
    total_orders: int = 0
    pending_orders: int = 0
    completed_orders: int = 0
    cancelled_orders: int = 0
    total_revenue: Decimal = Decimal("0")
    average_order_value: Decimal = Decimal("0")


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class CartSummary:
    """Output: a cart priced at *current* catalog prices."""

    user_id: str
    lines: list[CartLineDTO]
    total: Decimal
    total_quantity: int


@dataclass(frozen=True)
class CartValidationReport:
    valid: bool
    issues: list[str] = field(default_factory=list)


_DATE_FORMAT = "%Y-%m-%d %H:%M UTC"


def order_to_dto(order: Order) -> OrderDTO:
    def fmt(value):
        return value.strftime(_DATE_FORMAT) if value is not None else None

    return OrderDTO(
        id=order.id,
        user_id=order.user_id,
        status=order.status.value,
        status_description=order.status.description,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in order.items
        ],
        total=str(order.total_amount),
        shipping_address=order.shipping_address,
        phone_number=order.phone_number,
        order_date=fmt(order.order_date),
        payment_date=fmt(order.payment_date),
        shipping_date=fmt(order.shipping_date),
        delivery_date=fmt(order.delivery_date),
    )
