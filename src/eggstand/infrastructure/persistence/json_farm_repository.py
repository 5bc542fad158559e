"""JSON-file-backed implementations of the farm bookkeeping repositories."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path

from eggstand.domain.model.coop import Coop
from eggstand.domain.model.email_settings import EmailSettings
from eggstand.domain.model.expense import Expense
from eggstand.domain.model.harvest import Harvest
from eggstand.domain.model.value_objects import Money
from eggstand.domain.repository.farm_repository import (
    CoopRepository,
    EmailSettingsRepository,
    ExpenseRepository,
    HarvestRepository,
)
from eggstand.infrastructure.persistence.json_store import JsonFileStore


def _upsert(records: list[dict], row: dict) -> list[dict]:
    for i, raw in enumerate(records):
        if raw["id"] == row["id"]:
            records[i] = row
            return records
    records.append(row)
    return records


def _in_window(day: date, start: date | None, end: date | None) -> bool:
    return (start is None or day >= start) and (end is None or day <= end)


class JsonCoopRepository(JsonFileStore, CoopRepository):

    def get_by_id(self, coop_id: str) -> Coop | None:
        for raw in self._load_raw():
            if raw["id"] == coop_id:
                return Coop(**raw)
        return None

    def get_by_name(self, name: str) -> Coop | None:
        for raw in self._load_raw():
            if raw["name"].lower() == name.strip().lower():
                return Coop(**raw)
        return None

    def list_all(self) -> list[Coop]:
        return sorted((Coop(**raw) for raw in self._load_raw()), key=lambda c: c.name.lower())

    def save(self, coop: Coop) -> None:
        row = {
            "id": coop.id,
            "name": coop.name,
            "num_birds": coop.num_birds,
            "has_rooster": coop.has_rooster,
        }
        with self._lock:
            self._persist_raw(_upsert(self._load_raw(), row))

    def delete(self, coop_id: str) -> None:
        with self._lock:
            self._persist_raw([r for r in self._load_raw() if r["id"] != coop_id])


class JsonHarvestRepository(JsonFileStore, HarvestRepository):

    def get_by_id(self, harvest_id: str) -> Harvest | None:
        for raw in self._load_raw():
            if raw["id"] == harvest_id:
                return self._to_domain(raw)
        return None

    def find(
        self,
        coop_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Harvest]:
        harvests = [
            h for h in map(self._to_domain, self._load_raw())
            if (coop_id is None or h.coop_id == coop_id)
            and _in_window(h.collection_date, start, end)
        ]
        return sorted(harvests, key=lambda h: h.collection_date, reverse=True)

    def save(self, harvest: Harvest) -> None:
        row = {
            "id": harvest.id,
            "coop_id": harvest.coop_id,
            "eggs_collected": harvest.eggs_collected,
            "collection_date": harvest.collection_date.isoformat(),
            "notes": harvest.notes,
        }
        with self._lock:
            self._persist_raw(_upsert(self._load_raw(), row))

    def delete(self, harvest_id: str) -> None:
        with self._lock:
            self._persist_raw([r for r in self._load_raw() if r["id"] != harvest_id])

    @staticmethod
    def _to_domain(raw: dict) -> Harvest:
        return Harvest(
            id=raw["id"],
            coop_id=raw["coop_id"],
            eggs_collected=raw["eggs_collected"],
            collection_date=date.fromisoformat(raw["collection_date"]),
            notes=raw.get("notes") or "",
        )


class JsonExpenseRepository(JsonFileStore, ExpenseRepository):

    def get_by_id(self, expense_id: str) -> Expense | None:
        for raw in self._load_raw():
            if raw["id"] == expense_id:
                return self._to_domain(raw)
        return None

    def find(self, start: date | None = None, end: date | None = None) -> list[Expense]:
        expenses = [
            e for e in map(self._to_domain, self._load_raw())
            if _in_window(e.date, start, end)
        ]
        return sorted(expenses, key=lambda e: e.date, reverse=True)

    def save(self, expense: Expense) -> None:
        row = {
            "id": expense.id,
            "name": expense.name,
            "quantity": str(expense.quantity),
            "cost": str(expense.cost.amount),
            "date": expense.date.isoformat(),
            "total_cost": str(expense.total_cost.amount),
        }
        with self._lock:
            self._persist_raw(_upsert(self._load_raw(), row))

    def delete(self, expense_id: str) -> None:
        with self._lock:
            self._persist_raw([r for r in self._load_raw() if r["id"] != expense_id])

    @staticmethod
    def _to_domain(raw: dict) -> Expense:
        return Expense(
            id=raw["id"],
            name=raw["name"],
            quantity=Decimal(raw["quantity"]),
            cost=Money(Decimal(raw["cost"])),
            date=date.fromisoformat(raw["date"]),
            total_cost=Money(Decimal(raw["total_cost"])),
        )


class JsonEmailSettingsRepository(JsonFileStore, EmailSettingsRepository):
    """Single settings object; an empty file means "never configured"."""

    def __init__(self, file_path: Path) -> None:
        super().__init__(file_path, empty={})

    def get(self) -> EmailSettings | None:
        raw = self._load_raw()
        return EmailSettings(**raw) if raw else None

    def save(self, settings: EmailSettings) -> None:
        self._persist_raw({
            "smtp_host": settings.smtp_host,
            "smtp_port": settings.smtp_port,
            "smtp_user": settings.smtp_user,
            "smtp_password": settings.smtp_password,
            "notification_email": settings.notification_email,
        })
