"""Helpers shared by the command modules."""

from __future__ import annotations

from decimal import Decimal
from typing import TypeVar

import click

from backoffice.application.result import Result
from backoffice.domain.model.value_objects import Money
from backoffice.infrastructure.bootstrap import Services

T = TypeVar("T")

# Injects the Services built by the top-level group.
pass_services = click.make_pass_decorator(Services)


def unwrap(result: Result[T]) -> T:
    """Return the value of a successful Result or abort the command."""
    if not result.is_ok:
        raise click.ClickException(str(result.error))
    return result.value  # type: ignore[return-value]


def money(amount: Decimal) -> str:
    return str(Money(amount))
