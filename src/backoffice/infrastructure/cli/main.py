from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click

from backoffice.infrastructure.bootstrap import build_services
from backoffice.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from backoffice.infrastructure.cli.order_commands import (
    order_buy,
    order_cancel,
    order_checkout,
    order_list,
    order_show,
    order_stats,
    order_status,
)
from backoffice.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_restock,
    product_update,
)
from backoffice.infrastructure.config import Settings, configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the record files (overrides BACKOFFICE_DATA_DIR).",
)
@click.option("-v", "--verbose", count=True, help="-v for INFO, -vv for DEBUG logging.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: int) -> None:
    """Retail back-office: catalog, carts and orders."""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.ClickException(str(exc))

    if data_dir is not None:
        settings = replace(settings, data_dir=data_dir)
    if verbose:
        settings = replace(settings, log_level="DEBUG" if verbose > 1 else "INFO")

    try:
        configure_logging(settings.log_level)
    except ValueError as exc:
        raise click.ClickException(str(exc))

    ctx.obj = build_services(settings)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_buy)
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_stats)
order.add_command(order_status)
