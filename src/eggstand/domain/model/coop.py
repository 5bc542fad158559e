"""Coop aggregate: a henhouse that harvests are recorded against."""

from __future__ import annotations

from dataclasses import dataclass

from eggstand.domain.exceptions import ValidationError


@dataclass
class Coop:
    id: str
    name: str
    num_birds: int = 0
    has_rooster: bool = False

    @staticmethod
    def create(coop_id: str, name: str, num_birds: int = 0, has_rooster: bool = False) -> Coop:
        coop = Coop(id=coop_id, name="", num_birds=0, has_rooster=has_rooster)
        coop.update(name=name, num_birds=num_birds)
        return coop

    def update(
        self,
        name: str | None = None,
        num_birds: int | None = None,
        has_rooster: bool | None = None,
    ) -> None:
        if name is not None:
            if not name.strip():
                raise ValidationError("Coop name is required")
            self.name = name.strip()
        if num_birds is not None:
            if num_birds < 0:
                raise ValidationError("Number of birds cannot be negative")
            self.num_birds = num_birds
        if has_rooster is not None:
            self.has_rooster = has_rooster
