"""CLI commands for business reporting."""

from __future__ import annotations

from datetime import datetime

import click

from eggstand.application.reporting import BusinessReportHandler
from eggstand.infrastructure.bootstrap import (
    coop_repository,
    expense_repository,
    harvest_repository,
    order_repository,
)
from eggstand.infrastructure.cli.errors import DATE
from eggstand.infrastructure.settings import get_settings


@click.command("business")
@click.option("--from", "start", type=DATE, default=None, help="YYYY-MM-DD")
@click.option("--to", "end", type=DATE, default=None, help="YYYY-MM-DD")
@click.option("--coop", "coop_id", default=None, help="Restrict harvest figures to one coop.")
def report_business(start: datetime | None, end: datetime | None, coop_id: str | None) -> None:
    """Sales, expenses, profit and egg utilization."""
    handler = BusinessReportHandler(
        order_repo=order_repository(),
        expense_repo=expense_repository(),
        harvest_repo=harvest_repository(),
        coop_repo=coop_repository(),
        eggs_per_carton=get_settings().eggs_per_carton,
    )
    report = handler.handle(
        start=start.date() if start else None,
        end=end.date() if end else None,
        coop_id=coop_id,
    )
    m = report.metrics

    click.echo(f"Total sales:        ${m.total_sales:.2f}")
    click.echo(f"Total expenses:     ${m.total_expenses:.2f}")
    click.echo(f"Profit:             ${m.total_profit:.2f}")
    click.echo(f"Avg sale per order: ${m.avg_sale_per_order:.2f}")
    click.echo(f"Pending orders:     {m.pending_orders_count} (${m.pending_orders_value:.2f})")
    click.echo(f"Eggs collected:     {m.total_eggs_collected}")
    click.echo(f"Eggs sold:          {m.total_eggs_sold}")
    click.echo(f"Utilization:        {m.utilization_rate:.1f}%")

    if report.sales_by_month:
        click.echo()
        click.echo("Sales by month:")
        for month, amount in report.sales_by_month.items():
            click.echo(f"  {month:<10} ${amount:>10.2f}")

    if report.expenses_by_category:
        click.echo()
        click.echo("Expenses by category:")
        for name, amount in report.expenses_by_category.items():
            click.echo(f"  {name:<20} ${amount:>10.2f}")
