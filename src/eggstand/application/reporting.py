"""Read-side rollups over orders, harvests and expenses.

Pure functions over already-fetched records.  Missing numbers count as
zero: an order without a stored total contributes nothing to sales.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from eggstand.domain.model.coop import Coop
from eggstand.domain.model.expense import Expense
from eggstand.domain.model.harvest import Harvest
from eggstand.domain.model.order import Order, OrderStatus
from eggstand.domain.model.value_objects import Money
from eggstand.domain.repository.farm_repository import (
    CoopRepository,
    ExpenseRepository,
    HarvestRepository,
)
from eggstand.domain.repository.order_repository import OrderRepository

EGGS_PER_CARTON = 12

_ZERO = Decimal("0")


def _amount(value: Money | Decimal | int | float | None) -> Decimal:
    if value is None:
        return _ZERO
    if isinstance(value, Money):
        return value.amount
    return Decimal(str(value))


# ── Harvests ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CoopTotal:
    coop_id: str
    name: str
    total_eggs: int


@dataclass(frozen=True)
class DayTotal:
    day: date
    total_eggs: int


@dataclass(frozen=True)
class HarvestStatistics:
    total_eggs: int
    average_per_day: float
    by_coop: list[CoopTotal]
    by_date: list[DayTotal]


def harvest_statistics(harvests: Iterable[Harvest], coops: Iterable[Coop]) -> HarvestStatistics:
    names = {c.id: c.name for c in coops}
    by_coop: dict[str, int] = defaultdict(int)
    by_day: dict[date, int] = defaultdict(int)
    total = 0

    for h in harvests:
        eggs = h.eggs_collected or 0
        total += eggs
        by_coop[h.coop_id] += eggs
        by_day[h.collection_date] += eggs

    return HarvestStatistics(
        total_eggs=total,
        average_per_day=total / len(by_day) if by_day else 0.0,
        by_coop=[
            CoopTotal(coop_id=cid, name=names.get(cid, "Unknown"), total_eggs=eggs)
            for cid, eggs in by_coop.items()
        ],
        by_date=[DayTotal(day=d, total_eggs=by_day[d]) for d in sorted(by_day)],
    )


# ── Business ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BusinessMetrics:
    total_sales: Decimal
    total_expenses: Decimal
    total_profit: Decimal
    total_eggs_collected: int
    total_eggs_sold: int
    utilization_rate: float  # percent of collected eggs that were sold
    avg_sale_per_order: Decimal
    pending_orders_value: Decimal
    pending_orders_count: int


def business_metrics(
    orders: Iterable[Order],
    expenses: Iterable[Expense],
    total_eggs_collected: int,
    eggs_per_carton: int = EGGS_PER_CARTON,
) -> BusinessMetrics:
    """Sales count complete orders only; pending orders are reported separately."""
    orders = list(orders)
    complete = [o for o in orders if o.status == OrderStatus.COMPLETE]
    pending = [o for o in orders if o.status == OrderStatus.PENDING]

    total_sales = sum((_amount(o.total) for o in complete), _ZERO)
    total_expenses = sum((_amount(e.total_cost) for e in expenses), _ZERO)
    eggs_sold = sum(o.quantity or 0 for o in complete) * eggs_per_carton
    collected = total_eggs_collected or 0

    return BusinessMetrics(
        total_sales=total_sales,
        total_expenses=total_expenses,
        total_profit=total_sales - total_expenses,
        total_eggs_collected=collected,
        total_eggs_sold=eggs_sold,
        utilization_rate=eggs_sold / collected * 100 if collected > 0 else 0.0,
        avg_sale_per_order=total_sales / len(complete) if complete else _ZERO,
        pending_orders_value=sum((_amount(o.total) for o in pending), _ZERO),
        pending_orders_count=len(pending),
    )


def sales_by_month(orders: Iterable[Order]) -> dict[str, Decimal]:
    """Complete-order sales keyed ``"Mon YYYY"``, in chronological order."""
    buckets: dict[tuple[int, int], Decimal] = defaultdict(lambda: _ZERO)
    for o in orders:
        if o.status != OrderStatus.COMPLETE:
            continue
        buckets[(o.created_at.year, o.created_at.month)] += _amount(o.total)
    return {
        date(year, month, 1).strftime("%b %Y"): buckets[(year, month)]
        for year, month in sorted(buckets)
    }


def expenses_by_category(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    for e in expenses:
        totals[e.name] += _amount(e.total_cost)
    return dict(totals)


def orders_in_range(orders: Iterable[Order], start: date | None, end: date | None) -> list[Order]:
    """Orders created within ``[start, end]`` (whole days, end inclusive)."""
    result = []
    for o in orders:
        created: datetime = o.created_at
        if start is not None and created.date() < start:
            continue
        if end is not None and created.date() > end:
            continue
        result.append(o)
    return result


# ── Query handlers ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BusinessReport:
    metrics: BusinessMetrics
    harvests: HarvestStatistics
    sales_by_month: dict[str, Decimal]
    expenses_by_category: dict[str, Decimal]


class HarvestStatisticsHandler:

    def __init__(self, harvest_repo: HarvestRepository, coop_repo: CoopRepository) -> None:
        self._harvest_repo = harvest_repo
        self._coop_repo = coop_repo

    def handle(
        self,
        coop_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> HarvestStatistics:
        harvests = self._harvest_repo.find(coop_id=coop_id, start=start, end=end)
        return harvest_statistics(harvests, self._coop_repo.list_all())


class BusinessReportHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        expense_repo: ExpenseRepository,
        harvest_repo: HarvestRepository,
        coop_repo: CoopRepository,
        eggs_per_carton: int = EGGS_PER_CARTON,
    ) -> None:
        self._order_repo = order_repo
        self._expense_repo = expense_repo
        self._harvests = HarvestStatisticsHandler(harvest_repo, coop_repo)
        self._eggs_per_carton = eggs_per_carton

    def handle(
        self,
        start: date | None = None,
        end: date | None = None,
        coop_id: str | None = None,
    ) -> BusinessReport:
        """Profit, sales and harvest figures for one reporting window."""
        orders = orders_in_range(self._order_repo.list_all(), start, end)
        expenses = self._expense_repo.find(start=start, end=end)
        harvest_stats = self._harvests.handle(coop_id=coop_id, start=start, end=end)
        return BusinessReport(
            metrics=business_metrics(
                orders, expenses, harvest_stats.total_eggs, self._eggs_per_carton
            ),
            harvests=harvest_stats,
            sales_by_month=sales_by_month(orders),
            expenses_by_category=expenses_by_category(expenses),
        )
