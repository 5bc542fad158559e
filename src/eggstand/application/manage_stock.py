"""Application services: stock register use cases.

``SetStockHandler`` is the admin override; ``ReplenishStockHandler`` is
one step of the periodic top-up and goes through the same
compare-and-swap path as order reservations.
"""

from __future__ import annotations

import logging

from eggstand.application.dto import StockDTO
from eggstand.domain.repository.stock_repository import StockRepository
from eggstand.domain.service.stock_reconciliation_service import (
    DEFAULT_ATTEMPTS,
    StockReconciliationService,
)

logger = logging.getLogger(__name__)

DEFAULT_REPLENISH_AMOUNT = 3


class ShowStockHandler:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def handle(self) -> StockDTO:
        return StockDTO.from_level(self._stock_repo.get())


class SetStockHandler:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def handle(self, quantity: int) -> StockDTO:
        """Overwrite the stock count; rejected outside ``[0, max_quantity]``."""
        level = self._stock_repo.set_quantity(quantity)
        logger.info("Stock set to %d by admin", level.current_quantity)
        return StockDTO.from_level(level)


class ReplenishStockHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        default_amount: int = DEFAULT_REPLENISH_AMOUNT,
        attempts: int = DEFAULT_ATTEMPTS,
    ) -> None:
        self._svc = StockReconciliationService(stock_repo, attempts=attempts)
        self._default_amount = default_amount

    def handle(self, amount: int | None = None) -> StockDTO:
        """Add *amount* cartons, capped at the maximum; no write when already full."""
        step = self._default_amount if amount is None else amount
        level = self._svc.update(lambda snapshot: snapshot.replenished(step))
        return StockDTO.from_level(level)
