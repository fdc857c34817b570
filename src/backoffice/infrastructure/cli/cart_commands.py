"""CLI commands for shopping carts."""

from __future__ import annotations

import click

from backoffice.infrastructure.bootstrap import Services
from backoffice.infrastructure.cli.context import money, pass_services, unwrap


@click.command("add")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Units to add.")
@pass_services
def cart_add(services: Services, user_id: str, product_id: str, quantity: int) -> None:
    """Put a product in a user's cart."""
    cart = unwrap(services.cart_service.add_to_cart(user_id, product_id, quantity))
    item = cart.find_item(product_id)
    click.echo(f"{product_id} x{item.quantity} in {user_id}'s cart.")


@click.command("update")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
@pass_services
def cart_update(services: Services, user_id: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a product already in the cart."""
    unwrap(services.cart_service.update_quantity(user_id, product_id, quantity))
    click.echo(f"{product_id} quantity set to {quantity}.")


@click.command("remove")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@pass_services
def cart_remove(services: Services, user_id: str, product_id: str) -> None:
    """Take a product out of the cart."""
    removed = unwrap(services.cart_service.remove_from_cart(user_id, product_id))
    if removed:
        click.echo(f"{product_id} removed from {user_id}'s cart.")
    else:
        click.echo(f"{product_id} was not in {user_id}'s cart.")


@click.command("clear")
@click.option("--user", "user_id", required=True, help="User ID.")
@pass_services
def cart_clear(services: Services, user_id: str) -> None:
    """Empty a user's cart."""
    unwrap(services.cart_service.clear_cart(user_id))
    click.echo(f"Cart of {user_id} cleared.")


@click.command("show")
@click.option("--user", "user_id", required=True, help="User ID.")
@pass_services
def cart_show(services: Services, user_id: str) -> None:
    """Show a cart at current prices, with any stock problems."""
    summary = unwrap(services.cart_service.summarize(user_id))
    report = unwrap(services.cart_service.validate_cart(user_id))

    if not summary.lines and report.valid:
        click.echo(f"Cart of {user_id} is empty.")
        return

    click.echo(f"Cart of {summary.user_id}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>14} {'Subtotal':>14}")
    click.echo(f"  {'-'*56}")
    for line in summary.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} "
            f"{money(line.unit_price):>14} {money(line.subtotal):>14}"
        )
    click.echo(f"  {'-'*56}")
    click.echo(f"  {'Total':<26} {money(summary.total):>29}")

    for issue in report.issues:
        click.echo(f"  ! {issue}")
