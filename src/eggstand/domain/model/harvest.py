"""Harvest: eggs collected from one coop on one day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from eggstand.domain.exceptions import ValidationError


@dataclass
class Harvest:
    id: str
    coop_id: str
    eggs_collected: int
    collection_date: date
    notes: str = ""

    def __post_init__(self) -> None:
        if self.eggs_collected < 0:
            raise ValidationError("Eggs collected cannot be negative")

    def update(
        self,
        coop_id: str | None = None,
        eggs_collected: int | None = None,
        collection_date: date | None = None,
        notes: str | None = None,
    ) -> None:
        if eggs_collected is not None:
            if eggs_collected < 0:
                raise ValidationError("Eggs collected cannot be negative")
            self.eggs_collected = eggs_collected
        if coop_id is not None:
            self.coop_id = coop_id
        if collection_date is not None:
            self.collection_date = collection_date
        if notes is not None:
            self.notes = notes
