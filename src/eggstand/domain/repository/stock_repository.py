"""Abstract repository for the single stock row.

``set_quantity`` is the only mutator and must be atomic with respect to
other callers: implementations re-read, validate and write as one step.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from eggstand.domain.model.stock import StockLevel


class StockRepository(ABC):

    @abstractmethod
    def get(self) -> StockLevel:
        """Return a consistent snapshot of the stock row."""

    @abstractmethod
    def set_quantity(self, new_quantity: int, expected: int | None = None) -> StockLevel:
        """Atomically replace ``current_quantity`` and ``updated_at``.

        Raises ValidationError if *new_quantity* is outside
        ``[0, max_quantity]`` and StockConflictError if *expected* is given
        and no longer matches the stored ``current_quantity``.
        """
