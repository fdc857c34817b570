"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its line items and its status.
The status only moves forward through the table in ``_TRANSITIONS``;
every other change is rejected with InvalidTransitionError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from backoffice.domain.exceptions import InvalidTransitionError, ValidationError
from backoffice.domain.model.value_objects import Money, Quantity, utc_now


class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    SHIPPING = "SHIPPING"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    @property
    def is_cancellable(self) -> bool:
        return OrderStatus.CANCELLED in _TRANSITIONS[self]

    def next_statuses(self) -> frozenset[OrderStatus]:
        return _TRANSITIONS[self]

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPING, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPING: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

_DESCRIPTIONS = {
    OrderStatus.PENDING: "Awaiting payment",
    OrderStatus.PAID: "Payment received",
    OrderStatus.SHIPPING: "In transit",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}


@dataclass(frozen=True)
class OrderItem:
    """One order line with the unit price captured at order time.

    Later catalog price changes never reach an existing order item.
    """

    order_id: str
    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders; it enforces all business
    rules.  The ``__init__`` stays simple so the repository can
    reconstitute persisted orders without re-validating.
    """

    id: str
    user_id: str
    items: list[OrderItem]
    shipping_address: str
    phone_number: str = ""
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime = field(default_factory=utc_now)
    payment_date: datetime | None = None
    shipping_date: datetime | None = None
    delivery_date: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: str,
        user_id: str,
        items: list[OrderItem],
        shipping_address: str,
        phone_number: str = "",
    ) -> Order:
        """Create a PENDING order, enforcing all invariants."""
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")
        if not items:
            raise ValidationError("Order must contain at least one item")
        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")
        for item in items:
            if item.order_id != order_id:
                raise ValidationError(
                    f"Item for product '{item.product_id}' belongs to order "
                    f"'{item.order_id}', not '{order_id}'"
                )

        return Order(
            id=order_id,
            user_id=user_id.strip(),
            items=list(items),
            shipping_address=shipping_address.strip(),
            phone_number=(phone_number or "").strip(),
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, new_status: OrderStatus, at: datetime | None = None) -> None:
        """Move to ``new_status`` and stamp the matching timestamp.

        Stock restoration for CANCELLED must happen *before* calling this
        (coordinated by the application handler via the stock ledger).
        """
        if not self.status.can_transition_to(new_status):
            raise InvalidTransitionError(self.status, new_status)

        when = at or utc_now()
        if new_status is OrderStatus.PAID:
            self.payment_date = when
        elif new_status is OrderStatus.SHIPPING:
            self.shipping_date = when
        elif new_status is OrderStatus.DELIVERED:
            self.delivery_date = when
        self.status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        return Money.total(item.subtotal for item in self.items)

    @property
    def is_cancellable(self) -> bool:
        return self.status.is_cancellable

    @property
    def is_completed(self) -> bool:
        return self.status is OrderStatus.DELIVERED

    @property
    def is_in_progress(self) -> bool:
        return not self.status.is_terminal

    def quantities_by_product(self) -> dict[str, int]:
        """Total ordered quantity per product id, in line order."""
        totals: dict[str, int] = {}
        for item in self.items:
            totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity.value
        return totals

    def find_item(self, product_id: str) -> OrderItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

