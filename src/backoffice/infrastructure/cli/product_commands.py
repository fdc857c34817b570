"""CLI commands for the product catalog and its stock."""

from __future__ import annotations

import click

from backoffice.infrastructure.bootstrap import Services
from backoffice.infrastructure.cli.context import pass_services, unwrap


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15000).")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--category", default="", help="Category label.")
@click.option("--description", default="", help="Free-text description.")
@pass_services
def product_add(
    services: Services,
    name: str,
    price: str,
    stock: int,
    category: str,
    description: str,
) -> None:
    """Add a new product to the catalog."""
    product = unwrap(
        services.catalog_service.add_product(
            name=name,
            price=price,
            stock=stock,
            category=category,
            description=description,
        )
    )

    click.echo(
        f"Product {product.id} '{product.name}' added at {product.price} "
        f"(stock {product.stock})"
    )


@click.command("list")
@click.option("--search", "keyword", default="", help="Name contains this text.")
@click.option("--category", default="", help="Only this category.")
@click.option("--low", "only_low", is_flag=True, default=False, help="Only low-stock products.")
@pass_services
def product_list(services: Services, keyword: str, category: str, only_low: bool) -> None:
    """List products with their price and stock."""
    catalog = services.catalog_service
    matches = unwrap(catalog.search_products(keyword=keyword, category=category))
    shown = {line.product_id: line for line in unwrap(catalog.list_stock(only_low=only_low))}
    products = [p for p in matches if p.id in shown]

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<20} {'Category':<12} {'Price':>14} {'Stock':>6}")
    click.echo("-" * 68)
    for p in products:
        marker = " (low)" if shown[p.id].low else ""
        click.echo(
            f"{p.id:<12} {p.name:<20} {p.category:<12} {str(p.price):>14} {p.stock:>6}{marker}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 12000).")
@pass_services
def product_update(services: Services, product_id: str, price: str) -> None:
    """Change a product's price. Existing orders keep their price."""
    product = unwrap(services.catalog_service.update_price(product_id, price))
    click.echo(f"Product {product.id} price updated to {product.price}")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
@pass_services
def product_restock(services: Services, product_id: str, quantity: int) -> None:
    """Add received units to a product's stock."""
    product = unwrap(services.catalog_service.restock(product_id, quantity))
    click.echo(f"Product {product.id} restocked, stock is now {product.stock}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_services
def product_delete(services: Services, product_id: str) -> None:
    """Remove a product that no order refers to."""
    unwrap(services.catalog_service.delete_product(product_id))
    click.echo(f"Product {product_id} deleted.")
