"""Application services: coop, harvest and expense bookkeeping.

Plain CRUD.  None of these records interact with stock or orders.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation

from eggstand.application.identifiers import next_id
from eggstand.domain.exceptions import NotFoundError, ValidationError
from eggstand.domain.model.coop import Coop
from eggstand.domain.model.expense import Expense
from eggstand.domain.model.harvest import Harvest
from eggstand.domain.model.value_objects import Money
from eggstand.domain.repository.farm_repository import (
    CoopRepository,
    ExpenseRepository,
    HarvestRepository,
)


def _decimal(raw: str | int | Decimal, field_name: str) -> Decimal:
    try:
        return Decimal(str(raw).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid {field_name}: {raw!r}") from exc


# ── Coops ────────────────────────────────────────────────────────────────────


class CoopService:

    def __init__(self, coop_repo: CoopRepository) -> None:
        self._coop_repo = coop_repo

    def add(self, name: str, num_birds: int = 0, has_rooster: bool = False) -> Coop:
        if name and self._coop_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Coop '{name.strip()}' already exists")
        coop = Coop.create(
            coop_id=next_id(c.id for c in self._coop_repo.list_all()),
            name=name,
            num_birds=num_birds,
            has_rooster=has_rooster,
        )
        self._coop_repo.save(coop)
        return coop

    def list(self) -> list[Coop]:
        return self._coop_repo.list_all()

    def get(self, coop_id: str) -> Coop:
        coop = self._coop_repo.get_by_id(coop_id)
        if coop is None:
            raise NotFoundError(f"Coop '{coop_id}' not found")
        return coop

    def update(
        self,
        coop_id: str,
        name: str | None = None,
        num_birds: int | None = None,
        has_rooster: bool | None = None,
    ) -> Coop:
        coop = self.get(coop_id)
        coop.update(name=name, num_birds=num_birds, has_rooster=has_rooster)
        self._coop_repo.save(coop)
        return coop

    def delete(self, coop_id: str) -> None:
        self.get(coop_id)
        self._coop_repo.delete(coop_id)


# ── Harvests ─────────────────────────────────────────────────────────────────


class HarvestService:

    def __init__(self, harvest_repo: HarvestRepository, coop_repo: CoopRepository) -> None:
        self._harvest_repo = harvest_repo
        self._coop_repo = coop_repo

    def record(
        self,
        coop_id: str,
        eggs_collected: int,
        collection_date: date | None = None,
        notes: str = "",
    ) -> Harvest:
        self._require_coop(coop_id)
        harvest = Harvest(
            id=next_id(h.id for h in self._harvest_repo.find()),
            coop_id=coop_id,
            eggs_collected=eggs_collected,
            collection_date=collection_date or date.today(),
            notes=notes or "",
        )
        self._harvest_repo.save(harvest)
        return harvest

    def list(
        self,
        coop_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Harvest]:
        return self._harvest_repo.find(coop_id=coop_id, start=start, end=end)

    def update(
        self,
        harvest_id: str,
        coop_id: str | None = None,
        eggs_collected: int | None = None,
        collection_date: date | None = None,
        notes: str | None = None,
    ) -> Harvest:
        harvest = self._harvest_repo.get_by_id(harvest_id)
        if harvest is None:
            raise NotFoundError(f"Harvest '{harvest_id}' not found")
        if coop_id is not None:
            self._require_coop(coop_id)
        harvest.update(
            coop_id=coop_id,
            eggs_collected=eggs_collected,
            collection_date=collection_date,
            notes=notes,
        )
        self._harvest_repo.save(harvest)
        return harvest

    def delete(self, harvest_id: str) -> None:
        if self._harvest_repo.get_by_id(harvest_id) is None:
            raise NotFoundError(f"Harvest '{harvest_id}' not found")
        self._harvest_repo.delete(harvest_id)

    def _require_coop(self, coop_id: str) -> Coop:
        coop = self._coop_repo.get_by_id(coop_id)
        if coop is None:
            raise NotFoundError(f"Coop '{coop_id}' not found")
        return coop


# ── Expenses ─────────────────────────────────────────────────────────────────


class ExpenseService:

    def __init__(self, expense_repo: ExpenseRepository) -> None:
        self._expense_repo = expense_repo

    def add(
        self,
        name: str,
        quantity: str | int | Decimal,
        cost: str,
        on: date | None = None,
    ) -> Expense:
        expense = Expense.create(
            expense_id=next_id(e.id for e in self._expense_repo.find()),
            name=name,
            quantity=_decimal(quantity, "quantity"),
            cost=Money.of(cost),
            on=on or date.today(),
        )
        self._expense_repo.save(expense)
        return expense

    def list(self, start: date | None = None, end: date | None = None) -> list[Expense]:
        return self._expense_repo.find(start=start, end=end)

    def update(
        self,
        expense_id: str,
        name: str | None = None,
        quantity: str | int | Decimal | None = None,
        cost: str | None = None,
        on: date | None = None,
    ) -> Expense:
        expense = self._expense_repo.get_by_id(expense_id)
        if expense is None:
            raise NotFoundError(f"Expense '{expense_id}' not found")
        expense.update(
            name=name,
            quantity=_decimal(quantity, "quantity") if quantity is not None else None,
            cost=Money.of(cost) if cost is not None else None,
            on=on,
        )
        self._expense_repo.save(expense)
        return expense

    def delete(self, expense_id: str) -> None:
        if self._expense_repo.get_by_id(expense_id) is None:
            raise NotFoundError(f"Expense '{expense_id}' not found")
        self._expense_repo.delete(expense_id)
