"""JSON-file-backed implementation of StockRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from eggstand.domain.exceptions import StockConflictError
from eggstand.domain.model.stock import StockLevel
from eggstand.domain.repository.stock_repository import StockRepository
from eggstand.infrastructure.persistence.json_store import JsonFileStore

STOCK_ROW_ID = 1


class JsonStockRepository(JsonFileStore, StockRepository):
    """The stock row lives alone in its file; first use provisions it full."""

    def __init__(self, file_path: Path, max_quantity: int = 100) -> None:
        super().__init__(
            file_path,
            empty={
                "id": STOCK_ROW_ID,
                "current_quantity": max_quantity,
                "max_quantity": max_quantity,
                "updated_at": None,
            },
        )

    # --- StockRepository interface --------------------------------------------

    def get(self) -> StockLevel:
        return self._to_domain(self._load_raw())

    def set_quantity(self, new_quantity: int, expected: int | None = None) -> StockLevel:
        with self._lock:
            current = self.get()
            if expected is not None and current.current_quantity != expected:
                raise StockConflictError(
                    f"Stock changed concurrently (expected {expected}, "
                    f"found {current.current_quantity})"
                )
            updated = current.with_quantity(new_quantity)
            self._persist_raw(self._to_raw(updated))
            return updated

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(level: StockLevel) -> dict:
        return {
            "id": STOCK_ROW_ID,
            "current_quantity": level.current_quantity,
            "max_quantity": level.max_quantity,
            "updated_at": level.updated_at.isoformat() if level.updated_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockLevel:
        stamp = raw.get("updated_at")
        return StockLevel(
            current_quantity=raw["current_quantity"],
            max_quantity=raw["max_quantity"],
            updated_at=datetime.fromisoformat(stamp) if stamp else None,
        )
