"""Explicit success/failure values returned by the service facades.

Handlers raise DomainException subclasses; the facades catch them at the
boundary and hand back a Result so callers branch on ``is_ok`` instead of
wrapping every call in try/except.  Anything that is not a domain error
(a bug) still propagates as an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from backoffice.domain.exceptions import DomainException

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or the typed domain error that prevented it."""

    value: T | None = None
    error: DomainException | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, error: DomainException) -> Result[T]:
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def capture(cls, operation: Callable[[], T]) -> Result[T]:
        """Run ``operation`` and wrap its outcome."""
        try:
            return cls.ok(operation())
        except DomainException as exc:
            return cls.fail(exc)
