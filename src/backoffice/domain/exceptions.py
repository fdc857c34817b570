"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the service facades can turn them into failed results and the CLI can
display them uniformly.  Exceptions that carry context (product ids,
quantities, statuses) keep it as attributes so callers never have to parse
the message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EmptyCartError(ValidationError):
    """Checkout was attempted with no cart lines."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"Cart for user '{user_id}' is empty")


class InvalidTransitionError(ValidationError):
    """A status change is not permitted by the order state machine."""

    def __init__(self, from_status, to_status) -> None:
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot change order status from {from_status.value} to {to_status.value}"
        )


class InsufficientStockError(DomainException):
    """A deduction would drive a product's stock below zero."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(requested {requested}, available {available})"
        )


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: '{product_id}'")


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order not found: '{order_id}'")


class UnauthorizedError(DomainException):
    """The acting user does not own the order being viewed or changed."""


class PersistenceError(DomainException):
    """The underlying record store failed, or a stored record is malformed."""
