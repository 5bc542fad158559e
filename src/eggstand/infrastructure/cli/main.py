import click

from eggstand.infrastructure.cli.email_commands import email_set, email_show
from eggstand.infrastructure.cli.farm_commands import (
    coop_add,
    coop_delete,
    coop_list,
    coop_update,
    expense_add,
    expense_delete,
    expense_list,
    expense_update,
    harvest_delete,
    harvest_export,
    harvest_import,
    harvest_list,
    harvest_record,
    harvest_stats,
    harvest_update,
)
from eggstand.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_export,
    order_import,
    order_list,
    order_show,
    order_update,
)
from eggstand.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from eggstand.infrastructure.cli.report_commands import report_business
from eggstand.infrastructure.cli.stock_commands import stock_replenish, stock_set, stock_show
from eggstand.infrastructure.logging_config import configure_logging
from eggstand.infrastructure.settings import get_settings


@click.group()
def cli() -> None:
    """Eggstand — egg stand stock, orders and farm records"""
    configure_logging(get_settings().log_level)


@cli.group()
def stock() -> None:
    """Manage carton stock."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def coop() -> None:
    """Manage coops."""


@cli.group()
def harvest() -> None:
    """Record egg harvests."""


@cli.group()
def expense() -> None:
    """Track expenses."""


@cli.group()
def report() -> None:
    """Business reports."""


@cli.group()
def email() -> None:
    """New-order email notifications."""


# Register subcommands
stock.add_command(stock_show)
stock.add_command(stock_set)
stock.add_command(stock_replenish)
order.add_command(order_create)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_update)
order.add_command(order_delete)
order.add_command(order_export)
order.add_command(order_import)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
product.add_command(product_delete)
coop.add_command(coop_add)
coop.add_command(coop_list)
coop.add_command(coop_update)
coop.add_command(coop_delete)
harvest.add_command(harvest_record)
harvest.add_command(harvest_list)
harvest.add_command(harvest_update)
harvest.add_command(harvest_delete)
harvest.add_command(harvest_export)
harvest.add_command(harvest_import)
harvest.add_command(harvest_stats)
expense.add_command(expense_add)
expense.add_command(expense_list)
expense.add_command(expense_update)
expense.add_command(expense_delete)
report.add_command(report_business)
email.add_command(email_show)
email.add_command(email_set)


if __name__ == "__main__":
    cli()
