"""CLI commands for the stock register."""

from __future__ import annotations

import click

from eggstand.application.dto import StockDTO
from eggstand.application.manage_stock import (
    ReplenishStockHandler,
    SetStockHandler,
    ShowStockHandler,
)
from eggstand.domain.exceptions import DomainException
from eggstand.infrastructure.bootstrap import stock_repository
from eggstand.infrastructure.cli.errors import to_click_error
from eggstand.infrastructure.settings import get_settings


def _display_stock(dto: StockDTO) -> None:
    click.echo(f"Stock: {dto.current_quantity} / {dto.max_quantity} ({dto.percent_full:.0f}% full)")
    if dto.updated_at:
        click.echo(f"Updated: {dto.updated_at}")


@click.command("show")
def stock_show() -> None:
    """Show current stock."""
    _display_stock(ShowStockHandler(stock_repository()).handle())


@click.command("set")
@click.option("--quantity", required=True, type=int, help="New stock count.")
def stock_set(quantity: int) -> None:
    """Overwrite the stock count (0 to max)."""
    try:
        dto = SetStockHandler(stock_repository()).handle(quantity)
    except DomainException as exc:
        raise to_click_error(exc)
    _display_stock(dto)


@click.command("replenish")
@click.option("--amount", type=int, default=None, help="Cartons to add (default from settings).")
def stock_replenish(amount: int | None) -> None:
    """Add cartons, capped at the maximum (the daily top-up step)."""
    settings = get_settings()
    handler = ReplenishStockHandler(
        stock_repository(),
        default_amount=settings.replenish_amount,
        attempts=settings.stock_update_attempts,
    )
    try:
        dto = handler.handle(amount)
    except DomainException as exc:
        raise to_click_error(exc)
    _display_stock(dto)
