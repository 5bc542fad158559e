"""Translate domain errors into CLI messages.

Insufficient stock gets its own wording because the fix (order fewer
cartons) differs from every other failure.
"""

from __future__ import annotations

import click

from eggstand.domain.exceptions import (
    CompensationFailure,
    DomainException,
    InsufficientStockError,
)


def to_click_error(exc: DomainException) -> click.ClickException:
    if isinstance(exc, InsufficientStockError):
        return click.ClickException(
            f"Not enough stock: only {exc.available} carton(s) available. "
            f"Reduce the quantity and try again."
        )
    if isinstance(exc, CompensationFailure):
        return click.ClickException(
            f"Stock and orders may be out of sync and need manual review: {exc}"
        )
    return click.ClickException(str(exc))


DATE = click.DateTime(formats=["%Y-%m-%d"])
