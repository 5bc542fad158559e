"""CLI commands for orders."""

from __future__ import annotations

from pathlib import Path

import click

from eggstand.application.create_order import CreateOrderHandler
from eggstand.application.delete_order import DeleteOrderHandler
from eggstand.application.dto import ImportResult, OrderDTO
from eggstand.application.order_csv import ExportOrdersHandler, ImportOrdersHandler
from eggstand.application.show_order import ListOrdersHandler, ShowOrderHandler
from eggstand.application.update_order import UpdateOrderHandler
from eggstand.domain.exceptions import DomainException
from eggstand.domain.model.order import OrderStatus
from eggstand.infrastructure.bootstrap import (
    order_detail_repository,
    order_notifier,
    order_repository,
    product_repository,
    stock_repository,
)
from eggstand.infrastructure.cli.errors import to_click_error
from eggstand.infrastructure.settings import get_settings

STATUS_CHOICE = click.Choice([s.value for s in OrderStatus])


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    flag = "  [flagged]" if dto.is_flagged else ""
    click.echo(f"Order {dto.order_number}  (status={dto.status}){flag}")
    click.echo(f"Customer: {dto.customer_name} <{dto.email}> {dto.phone}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    click.echo(f"  {dto.product:<20} {dto.quantity:>5} {dto.unit_price:>10} {dto.total:>10}")


def _display_import(result: ImportResult) -> None:
    click.echo(f"Imported {result.success} row(s).")
    for message in result.errors:
        click.echo(f"  ! {message}", err=True)


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--phone", default="", help="Customer phone.")
@click.option("--quantity", required=True, type=int, help="Cartons to reserve.")
@click.option("--product", default=None, help="Product name or ID (default from settings).")
def order_create(customer: str, email: str, phone: str, quantity: int, product: str | None) -> None:
    """Reserve cartons for a customer."""
    settings = get_settings()
    handler = CreateOrderHandler(
        order_repo=order_repository(),
        detail_repo=order_detail_repository(),
        product_repo=product_repository(),
        stock_repo=stock_repository(),
        notifier=order_notifier(),
        default_product=settings.default_product,
        attempts=settings.stock_update_attempts,
    )

    try:
        dto = handler.handle(
            customer_name=customer, email=email, phone=phone, quantity=quantity, product=product
        )
    except DomainException as exc:
        raise to_click_error(exc)

    _display_order(dto)


@click.command("show")
@click.argument("order_number")
def order_show(order_number: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repository(), order_detail_repository())

    try:
        dto = handler.handle(order_number)
    except DomainException as exc:
        raise to_click_error(exc)

    _display_order(dto)


@click.command("list")
@click.option("--status", type=STATUS_CHOICE, default=None, help="Only orders with this status.")
@click.option("--flagged/--unflagged", default=None, help="Only flagged / unflagged orders.")
def order_list(status: str | None, flagged: bool | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repository(), order_detail_repository())
    orders = handler.handle(
        status=OrderStatus(status) if status else None, flagged=flagged
    )

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<12} {'Customer':<20} {'Qty':>4} {'Status':<9} {'Total':>9}  Created")
    click.echo("-" * 80)
    for dto in orders:
        marker = "*" if dto.is_flagged else " "
        click.echo(
            f"{dto.order_number:<12} {dto.customer_name:<20} {dto.quantity:>4} "
            f"{dto.status:<9} {dto.total:>9} {marker}{dto.created_at}"
        )


@click.command("update")
@click.argument("order_number")
@click.option("--status", type=STATUS_CHOICE, default=None, help="New status.")
@click.option("--quantity", type=int, default=None, help="New carton count.")
@click.option("--flag/--unflag", "is_flagged", default=None, help="Set or clear the flag.")
def order_update(
    order_number: str, status: str | None, quantity: int | None, is_flagged: bool | None
) -> None:
    """Change status, quantity or flag (quantity changes adjust stock)."""
    settings = get_settings()
    handler = UpdateOrderHandler(
        order_repo=order_repository(),
        detail_repo=order_detail_repository(),
        stock_repo=stock_repository(),
        attempts=settings.stock_update_attempts,
    )

    try:
        dto = handler.handle(
            order_number, status=status, quantity=quantity, is_flagged=is_flagged
        )
    except DomainException as exc:
        raise to_click_error(exc)

    _display_order(dto)


@click.command("delete")
@click.argument("order_number")
@click.confirmation_option(prompt="Delete this order and return its cartons to stock?")
def order_delete(order_number: str) -> None:
    """Delete an order (its cartons go back into stock)."""
    settings = get_settings()
    handler = DeleteOrderHandler(
        order_repo=order_repository(),
        detail_repo=order_detail_repository(),
        stock_repo=stock_repository(),
        attempts=settings.stock_update_attempts,
    )

    try:
        handler.handle(order_number)
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Order {order_number} deleted.")


@click.command("export")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write CSV here instead of stdout.")
def order_export(output: Path | None) -> None:
    """Export orders with their line items as CSV."""
    csv_text = ExportOrdersHandler(order_repository(), order_detail_repository()).handle()
    if output is None:
        click.echo(csv_text, nl=False)
    else:
        output.write_text(csv_text, encoding="utf-8")
        click.echo(f"Orders exported to {output}")


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def order_import(csv_file: Path) -> None:
    """Import orders from CSV (does not change stock)."""
    handler = ImportOrdersHandler(
        order_repository(),
        order_detail_repository(),
        default_product=get_settings().default_product,
    )
    _display_import(handler.handle(csv_file.read_text(encoding="utf-8-sig")))
