"""Abstract repositories for the farm bookkeeping aggregates.

Coops, harvests and expenses share no invariant with stock or orders;
they only feed the read-side reports.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from eggstand.domain.model.coop import Coop
from eggstand.domain.model.email_settings import EmailSettings
from eggstand.domain.model.expense import Expense
from eggstand.domain.model.harvest import Harvest


class CoopRepository(ABC):

    @abstractmethod
    def get_by_id(self, coop_id: str) -> Coop | None: ...

    @abstractmethod
    def get_by_name(self, name: str) -> Coop | None: ...

    @abstractmethod
    def list_all(self) -> list[Coop]: ...

    @abstractmethod
    def save(self, coop: Coop) -> None: ...

    @abstractmethod
    def delete(self, coop_id: str) -> None: ...


class HarvestRepository(ABC):

    @abstractmethod
    def get_by_id(self, harvest_id: str) -> Harvest | None: ...

    @abstractmethod
    def find(
        self,
        coop_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Harvest]:
        """Return harvests matching the filters, newest collection first."""

    @abstractmethod
    def save(self, harvest: Harvest) -> None: ...

    @abstractmethod
    def delete(self, harvest_id: str) -> None: ...


class ExpenseRepository(ABC):

    @abstractmethod
    def get_by_id(self, expense_id: str) -> Expense | None: ...

    @abstractmethod
    def find(self, start: date | None = None, end: date | None = None) -> list[Expense]:
        """Return expenses in the date window, newest first."""

    @abstractmethod
    def save(self, expense: Expense) -> None: ...

    @abstractmethod
    def delete(self, expense_id: str) -> None: ...


class EmailSettingsRepository(ABC):

    @abstractmethod
    def get(self) -> EmailSettings | None:
        """Return the stored settings, or None if never saved."""

    @abstractmethod
    def save(self, settings: EmailSettings) -> None: ...
