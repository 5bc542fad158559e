"""Domain service: Stock Reconciliation.

Keeps the stock counter equal to ``max_quantity`` minus every reserved
order quantity while orders are created, resized and deleted.

Each mutation is a two-step saga:

  Step 1 (stock): compute the delta, validate it against a fresh snapshot
                  and apply it through the repository's compare-and-swap write.
                  A lost race is retried against a new snapshot.
  Step 2 (order): run the caller's order-side commit.  If it raises, the
                  stock delta is reversed and the original error re-raised.  If
                  the reversal fails as well, CompensationFailure is raised and
                  logged under ``STOCK_COMPENSATION_FAILED``.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from eggstand.domain.exceptions import (
    CompensationFailure,
    InsufficientStockError,
    StockConflictError,
)
from eggstand.domain.model.stock import StockLevel
from eggstand.domain.repository.stock_repository import StockRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ATTEMPTS = 3


def reservation_delta(quantity: int) -> int:
    return -quantity


def resize_delta(old_quantity: int, new_quantity: int) -> int:
    """Positive when the order shrinks (stock released), negative when it grows."""
    return old_quantity - new_quantity


def release_delta(quantity: int) -> int:
    return quantity


class StockReconciliationService:

    def __init__(self, stock_repo: StockRepository, attempts: int = DEFAULT_ATTEMPTS) -> None:
        self._stock_repo = stock_repo
        self._attempts = max(1, attempts)

    def apply_delta(self, delta: int) -> StockLevel:
        """Move the counter by *delta* without losing concurrent updates."""

        def target(snapshot: StockLevel) -> int:
            try:
                return snapshot.target_for(delta)
            except InsufficientStockError:
                logger.warning(
                    "Stock reservation rejected: delta=%+d current=%d",
                    delta, snapshot.current_quantity,
                )
                raise

        return self.update(target)

    def update(self, compute: Callable[[StockLevel], int]) -> StockLevel:
        """Compare-and-swap loop: derive a target from a fresh snapshot and write it.

        No write happens when the target equals the current quantity.
        """
        attempt = 0
        while True:
            attempt += 1
            snapshot = self._stock_repo.get()
            target = compute(snapshot)
            if target == snapshot.current_quantity:
                return snapshot
            try:
                updated = self._stock_repo.set_quantity(
                    target, expected=snapshot.current_quantity
                )
            except StockConflictError:
                if attempt >= self._attempts:
                    raise
                logger.debug("Stock write conflict on attempt %d, retrying", attempt)
                continue
            logger.info(
                "Stock %d -> %d", snapshot.current_quantity, updated.current_quantity
            )
            return updated

    def reconcile(self, delta: int, commit: Callable[[], T]) -> T:
        """Apply *delta* to stock, then run *commit*; undo the delta if it fails."""
        if delta == 0:
            return commit()

        self.apply_delta(delta)
        try:
            return commit()
        except Exception as exc:
            self._compensate(delta, exc)
            raise

    def _compensate(self, delta: int, original: Exception) -> None:
        try:
            self.apply_delta(-delta)
        except Exception as rollback_error:
            logger.error(
                "STOCK_COMPENSATION_FAILED delta=%+d original=%r rollback=%r",
                delta, original, rollback_error,
            )
            raise CompensationFailure(delta, original, rollback_error) from original
        logger.warning("Stock delta %+d reversed after order step failed: %s", delta, original)
