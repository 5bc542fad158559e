"""Expense: one purchase of feed, cartons or bedding booked against the farm."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from eggstand.domain.exceptions import ValidationError
from eggstand.domain.model.value_objects import Money


@dataclass
class Expense:
    """``total_cost`` is always ``quantity * cost``."""

    id: str
    name: str
    quantity: Decimal
    cost: Money
    date: date
    total_cost: Money

    @staticmethod
    def create(expense_id: str, name: str, quantity: Decimal, cost: Money, on: date) -> Expense:
        expense = Expense(
            id=expense_id, name="", quantity=Decimal("0"), cost=cost,
            date=on, total_cost=Money.zero(),
        )
        expense.update(name=name, quantity=quantity)
        return expense

    def update(
        self,
        name: str | None = None,
        quantity: Decimal | None = None,
        cost: Money | None = None,
        on: date | None = None,
    ) -> None:
        if name is not None:
            if not name.strip():
                raise ValidationError("Expense name is required")
            self.name = name.strip()
        if quantity is not None:
            if quantity < 0:
                raise ValidationError("Expense quantity cannot be negative")
            self.quantity = quantity
        if cost is not None:
            self.cost = cost
        if on is not None:
            self.date = on
        self.total_cost = Money(self.cost.amount * self.quantity).rounded()
