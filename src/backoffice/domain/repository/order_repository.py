"""Abstract repository for Order aggregate.

An order is saved together with its items; implementations that keep
headers and items in separate collections are responsible for making
that pair of writes recoverable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique, time-ordered order ID."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order (items included) by its ID, or None."""

    @abstractmethod
    def list_by_user_id(self, user_id: str) -> list[Order]:
        """Return every order placed by a user, oldest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, oldest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order and its items.

        Raises PersistenceError only when nothing was stored, so callers
        can safely undo their own side effects.
        """
