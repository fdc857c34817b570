"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from backoffice.application.dto import OrderDTO, order_to_dto
from backoffice.domain.model.order import OrderStatus
from backoffice.infrastructure.bootstrap import Services
from backoffice.infrastructure.cli.context import money, pass_services, unwrap

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status}, {dto.status_description})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    if dto.phone_number:
        click.echo(f"Phone:    {dto.phone_number}")
    click.echo(f"Ordered:  {dto.order_date}")
    for label, value in (
        ("Paid:    ", dto.payment_date),
        ("Shipped: ", dto.shipping_date),
        ("Delivered:", dto.delivery_date),
    ):
        if value is not None:
            click.echo(f"{label} {value}")
    click.echo()

    click.echo(f"  {'Product':<14} {'Qty':>5} {'Price':>14} {'Subtotal':>14}")
    click.echo(f"  {'-'*50}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<14} {item.quantity:>5} {item.unit_price:>14} {item.subtotal:>14}"
        )
    click.echo(f"  {'-'*50}")
    click.echo(f"  {'Order Total':<20} {dto.total:>29}")


@click.command("checkout")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--phone", default="", help="Contact phone number.")
@pass_services
def order_checkout(services: Services, user_id: str, address: str, phone: str) -> None:
    """Turn a user's cart into an order."""
    order = unwrap(services.order_service.create_order_from_cart(user_id, address, phone))
    click.echo(f"Order {order.id} created  (status={order.status.value})")
    _display_order(order_to_dto(order))


@click.command("buy")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Units to buy.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--phone", default="", help="Contact phone number.")
@pass_services
def order_buy(
    services: Services,
    user_id: str,
    product_id: str,
    quantity: int,
    address: str,
    phone: str,
) -> None:
    """Order a single product without touching the cart."""
    order = unwrap(
        services.order_service.create_direct_order(
            user_id, product_id, quantity, address, phone
        )
    )
    click.echo(f"Order {order.id} created  (status={order.status.value})")
    _display_order(order_to_dto(order))


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.option("--user", "user_id", default=None, help="Only show if owned by this user.")
@pass_services
def order_show(services: Services, order_id: str, user_id: str | None) -> None:
    """Show details of an existing order."""
    order = unwrap(services.order_service.get_order_by_id(order_id, user_id))
    _display_order(order_to_dto(order))


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only orders of this user.")
@pass_services
def order_list(services: Services, user_id: str | None) -> None:
    """List orders, newest last."""
    if user_id is None:
        orders = unwrap(services.order_service.get_all_orders())
    else:
        orders = unwrap(services.order_service.get_orders_by_user_id(user_id))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<22} {'User':<12} {'Status':<10} {'Total':>14}  Ordered")
    click.echo("-" * 80)
    for dto in (order_to_dto(o) for o in orders):
        click.echo(
            f"{dto.id:<22} {dto.user_id:<12} {dto.status:<10} {dto.total:>14}  {dto.order_date}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--to", "new_status", required=True, type=_STATUS_CHOICE, help="Target status.")
@pass_services
def order_status(services: Services, order_id: str, new_status: str) -> None:
    """Move an order to its next status."""
    status = OrderStatus(new_status.upper())
    order = unwrap(services.order_service.update_order_status(order_id, status))
    click.echo(f"Order {order.id} is now {order.status.value} ({order.status.description}).")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--user", "user_id", required=True, help="User requesting the cancellation.")
@pass_services
def order_cancel(services: Services, order_id: str, user_id: str) -> None:
    """Cancel an order and put its stock back."""
    unwrap(services.order_service.cancel_order(order_id, user_id))
    click.echo(f"Order {order_id} cancelled.")


@click.command("stats")
@click.option("--user", "user_id", default=None, help="Only orders of this user.")
@pass_services
def order_stats(services: Services, user_id: str | None) -> None:
    """Summarize order counts and revenue."""
    stats = unwrap(services.order_service.get_statistics(user_id))
    click.echo(f"Total orders:     {stats.total_orders}")
    click.echo(f"  in progress:    {stats.pending_orders}")
    click.echo(f"  delivered:      {stats.completed_orders}")
    click.echo(f"  cancelled:      {stats.cancelled_orders}")
    click.echo(f"Revenue:          {money(stats.total_revenue)}")
    click.echo(f"Average order:    {money(stats.average_order_value)}")
