"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from eggstand.application.manage_products import (
    AddProductHandler,
    DeleteProductHandler,
    UpdateProductHandler,
)
from eggstand.domain.exceptions import DomainException
from eggstand.infrastructure.bootstrap import product_repository
from eggstand.infrastructure.cli.errors import to_click_error


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sale-price", required=True, help="Sale price (e.g. 10.00).")
@click.option("--cost-price", required=True, help="Cost price (e.g. 7.50).")
@click.option("--sku", default=None, help="Stock keeping unit.")
@click.option("--upc", default=None, help="Barcode.")
def product_add(name: str, sale_price: str, cost_price: str, sku: str | None, upc: str | None) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name, sale_price=sale_price, cost_price=cost_price, sku=sku, upc=upc
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Product #{product.id} '{product.name}' added at {product.sale_price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Sale':>10} {'Cost':>10} {'SKU':<12} UPC")
    click.echo("-" * 72)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {str(p.sale_price):>10} {str(p.cost_price):>10} "
            f"{p.sku or '':<12} {p.upc or ''}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--sale-price", default=None, help="New sale price.")
@click.option("--cost-price", default=None, help="New cost price.")
@click.option("--sku", default=None, help="New SKU.")
@click.option("--upc", default=None, help="New UPC.")
def product_update(
    product_id: str,
    name: str | None,
    sale_price: str | None,
    cost_price: str | None,
    sku: str | None,
    upc: str | None,
) -> None:
    """Update a product (existing orders keep their prices)."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            product_id, name=name, sale_price=sale_price, cost_price=cost_price, sku=sku, upc=upc
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Product #{product.id} '{product.name}' updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    try:
        DeleteProductHandler(product_repo=product_repository()).handle(product_id)
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Product #{product_id} deleted")
