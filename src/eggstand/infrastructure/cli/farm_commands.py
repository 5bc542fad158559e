"""CLI commands for coops, harvests and expenses."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click

from eggstand.application.harvest_csv import ExportHarvestsHandler, ImportHarvestsHandler
from eggstand.application.manage_farm import CoopService, ExpenseService, HarvestService
from eggstand.application.reporting import HarvestStatisticsHandler
from eggstand.domain.exceptions import DomainException
from eggstand.infrastructure.bootstrap import (
    coop_repository,
    expense_repository,
    harvest_repository,
)
from eggstand.infrastructure.cli.errors import DATE, to_click_error


def _day(value: datetime | None):
    return value.date() if value else None


# ── Coops ────────────────────────────────────────────────────────────────────


@click.command("add")
@click.option("--name", required=True)
@click.option("--birds", "num_birds", type=int, default=0, show_default=True)
@click.option("--rooster/--no-rooster", default=False)
def coop_add(name: str, num_birds: int, rooster: bool) -> None:
    """Add a coop."""
    try:
        coop = CoopService(coop_repository()).add(name, num_birds, rooster)
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo(f"Coop #{coop.id} '{coop.name}' added")


@click.command("list")
def coop_list() -> None:
    """List coops."""
    coops = CoopService(coop_repository()).list()
    if not coops:
        click.echo("No coops found.")
        return
    click.echo(f"{'ID':<6} {'Name':<20} {'Birds':>6}  Rooster")
    click.echo("-" * 44)
    for c in coops:
        click.echo(f"{c.id:<6} {c.name:<20} {c.num_birds:>6}  {'yes' if c.has_rooster else 'no'}")


@click.command("update")
@click.option("--id", "coop_id", required=True)
@click.option("--name", default=None)
@click.option("--birds", "num_birds", type=int, default=None)
@click.option("--rooster/--no-rooster", default=None)
def coop_update(coop_id: str, name: str | None, num_birds: int | None, rooster: bool | None) -> None:
    """Update a coop."""
    try:
        coop = CoopService(coop_repository()).update(coop_id, name, num_birds, rooster)
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo(f"Coop #{coop.id} '{coop.name}' updated")


@click.command("delete")
@click.option("--id", "coop_id", required=True)
def coop_delete(coop_id: str) -> None:
    """Delete a coop."""
    try:
        CoopService(coop_repository()).delete(coop_id)
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo(f"Coop #{coop_id} deleted")


# ── Harvests ─────────────────────────────────────────────────────────────────


def _harvests() -> HarvestService:
    return HarvestService(harvest_repository(), coop_repository())


@click.command("record")
@click.option("--coop", "coop_id", required=True, help="Coop ID.")
@click.option("--eggs", type=int, required=True)
@click.option("--date", "collected_on", type=DATE, default=None, help="YYYY-MM-DD, default today.")
@click.option("--notes", default="")
def harvest_record(coop_id: str, eggs: int, collected_on: datetime | None, notes: str) -> None:
    """Record eggs collected from a coop."""
    try:
        harvest = _harvests().record(coop_id, eggs, _day(collected_on), notes)
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo(f"Harvest #{harvest.id}: {harvest.eggs_collected} eggs on {harvest.collection_date}")


@click.command("list")
@click.option("--coop", "coop_id", default=None)
@click.option("--from", "start", type=DATE, default=None)
@click.option("--to", "end", type=DATE, default=None)
def harvest_list(coop_id: str | None, start: datetime | None, end: datetime | None) -> None:
    """List harvests, newest first."""
    harvests = _harvests().list(coop_id, _day(start), _day(end))
    if not harvests:
        click.echo("No harvests found.")
        return
    names = {c.id: c.name for c in coop_repository().list_all()}
    click.echo(f"{'ID':<6} {'Date':<11} {'Coop':<20} {'Eggs':>5}  Notes")
    click.echo("-" * 60)
    for h in harvests:
        click.echo(
            f"{h.id:<6} {h.collection_date.isoformat():<11} "
            f"{names.get(h.coop_id, 'Unknown'):<20} {h.eggs_collected:>5}  {h.notes}"
        )


@click.command("update")
@click.option("--id", "harvest_id", required=True)
@click.option("--coop", "coop_id", default=None)
@click.option("--eggs", type=int, default=None)
@click.option("--date", "collected_on", type=DATE, default=None)
@click.option("--notes", default=None)
def harvest_update(
    harvest_id: str,
    coop_id: str | None,
    eggs: int | None,
    collected_on: datetime | None,
    notes: str | None,
) -> None:
    """Update a harvest record."""
    try:
        harvest = _harvests().update(harvest_id, coop_id, eggs, _day(collected_on), notes)
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo(f"Harvest #{harvest.id} updated")


@click.command("delete")
@click.option("--id", "harvest_id", required=True)
def harvest_delete(harvest_id: str) -> None:
    """Delete a harvest record."""
    try:
        _harvests().delete(harvest_id)
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo(f"Harvest #{harvest_id} deleted")


@click.command("export")
@click.option("--coop", "coop_id", default=None)
@click.option("--from", "start", type=DATE, default=None)
@click.option("--to", "end", type=DATE, default=None)
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
def harvest_export(
    coop_id: str | None, start: datetime | None, end: datetime | None, output: Path | None
) -> None:
    """Export harvests as CSV."""
    csv_text = ExportHarvestsHandler(harvest_repository(), coop_repository()).handle(
        coop_id, _day(start), _day(end)
    )
    if output is None:
        click.echo(csv_text, nl=False)
    else:
        output.write_text(csv_text, encoding="utf-8")
        click.echo(f"Harvests exported to {output}")


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def harvest_import(csv_file: Path) -> None:
    """Import harvests from CSV (coops are matched by name)."""
    result = ImportHarvestsHandler(harvest_repository(), coop_repository()).handle(
        csv_file.read_text(encoding="utf-8-sig")
    )
    click.echo(f"Imported {result.success} row(s).")
    for message in result.errors:
        click.echo(f"  ! {message}", err=True)


@click.command("stats")
@click.option("--coop", "coop_id", default=None)
@click.option("--from", "start", type=DATE, default=None)
@click.option("--to", "end", type=DATE, default=None)
def harvest_stats(coop_id: str | None, start: datetime | None, end: datetime | None) -> None:
    """Egg totals by coop and by day."""
    stats = HarvestStatisticsHandler(harvest_repository(), coop_repository()).handle(
        coop_id, _day(start), _day(end)
    )
    click.echo(f"Total eggs: {stats.total_eggs}   Average per day: {stats.average_per_day:.1f}")
    for row in stats.by_coop:
        click.echo(f"  {row.name:<20} {row.total_eggs:>6}")


# ── Expenses ─────────────────────────────────────────────────────────────────


@click.command("add")
@click.option("--name", required=True, help="Category, e.g. Feed.")
@click.option("--quantity", required=True)
@click.option("--cost", required=True, help="Unit cost.")
@click.option("--date", "spent_on", type=DATE, default=None, help="YYYY-MM-DD, default today.")
def expense_add(name: str, quantity: str, cost: str, spent_on: datetime | None) -> None:
    """Book an expense."""
    try:
        expense = ExpenseService(expense_repository()).add(name, quantity, cost, _day(spent_on))
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo(f"Expense #{expense.id} '{expense.name}' {expense.total_cost}")


@click.command("list")
@click.option("--from", "start", type=DATE, default=None)
@click.option("--to", "end", type=DATE, default=None)
def expense_list(start: datetime | None, end: datetime | None) -> None:
    """List expenses, newest first."""
    expenses = ExpenseService(expense_repository()).list(_day(start), _day(end))
    if not expenses:
        click.echo("No expenses found.")
        return
    click.echo(f"{'ID':<6} {'Date':<11} {'Name':<20} {'Qty':>6} {'Cost':>9} {'Total':>10}")
    click.echo("-" * 66)
    for e in expenses:
        click.echo(
            f"{e.id:<6} {e.date.isoformat():<11} {e.name:<20} {str(e.quantity):>6} "
            f"{str(e.cost):>9} {str(e.total_cost):>10}"
        )


@click.command("update")
@click.option("--id", "expense_id", required=True)
@click.option("--name", default=None)
@click.option("--quantity", default=None)
@click.option("--cost", default=None)
@click.option("--date", "spent_on", type=DATE, default=None)
def expense_update(
    expense_id: str,
    name: str | None,
    quantity: str | None,
    cost: str | None,
    spent_on: datetime | None,
) -> None:
    """Update an expense (total is recomputed)."""
    try:
        expense = ExpenseService(expense_repository()).update(
            expense_id, name, quantity, cost, _day(spent_on)
        )
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo(f"Expense #{expense.id} updated: {expense.total_cost}")


@click.command("delete")
@click.option("--id", "expense_id", required=True)
def expense_delete(expense_id: str) -> None:
    """Delete an expense."""
    try:
        ExpenseService(expense_repository()).delete(expense_id)
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo(f"Expense #{expense_id} deleted")
