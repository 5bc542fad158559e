"""Application services: Export / Import Orders as CSV.

Import deliberately bypasses stock reconciliation: imported orders are
historical records and do not consume today's cartons.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from eggstand.application.create_order import DEFAULT_PRODUCT
from eggstand.application.csv_rows import RowError, parse_datetime, parse_int, read_rows, write_rows
from eggstand.application.dto import ImportResult, OrderRecord
from eggstand.application.show_order import list_order_records
from eggstand.domain.exceptions import DomainException
from eggstand.domain.model.order import Order, OrderDetail, OrderStatus
from eggstand.domain.model.value_objects import Money
from eggstand.domain.repository.order_repository import (
    OrderDetailRepository,
    OrderRepository,
)

logger = logging.getLogger(__name__)

ORDER_COLUMNS = [
    "order_number",
    "customer_name",
    "email",
    "phone",
    "status",
    "quantity",
    "product",
    "sku",
    "upc",
    "sale_price",
    "cost_price",
    "created_at",
]
EXPORT_COLUMNS = ORDER_COLUMNS + ["total"]
REQUIRED_COLUMNS = ("order_number", "customer_name", "email", "quantity")

DEFAULT_SALE_PRICE = Money(Decimal("10.00"))
DEFAULT_COST_PRICE = Money(Decimal("7.50"))


def export_orders_csv(records: Iterable[OrderRecord]) -> str:
    rows = []
    for record in records:
        order, detail = record.order, record.detail
        rows.append({
            "order_number": order.order_number,
            "customer_name": order.customer_name,
            "email": order.email,
            "phone": order.phone,
            "status": order.status.value,
            "quantity": order.quantity,
            "product": detail.product if detail else "",
            "sku": (detail.sku or "") if detail else "",
            "upc": (detail.upc or "") if detail else "",
            "sale_price": detail.sale.amount if detail else 0,
            "cost_price": detail.cost.amount if detail else 0,
            "created_at": order.created_at.isoformat(),
            "total": order.total.amount,
        })
    return write_rows(EXPORT_COLUMNS, rows)


@dataclass(frozen=True)
class ParsedOrderRow:
    order: Order
    detail: OrderDetail


def _price(raw: str, default: Money) -> Money:
    if not raw:
        return default
    try:
        return Money.of(raw)
    except DomainException:
        return default


def parse_order_row(row: dict[str, str], default_product: str) -> ParsedOrderRow | RowError:
    number = row.get("order_number", "")
    label = number or "unknown"

    if any(not row.get(col) for col in REQUIRED_COLUMNS):
        return RowError(f"Missing required fields for order {label}")

    qty = parse_int(row["quantity"])
    if qty is None or qty < 1:
        return RowError(f"Invalid quantity {row['quantity']!r} for order {label}")

    created_at = parse_datetime(row.get("created_at", ""))
    if created_at is None:
        if row.get("created_at"):
            logger.warning("Invalid date for order %s, using current time", label)
        created_at = datetime.now(timezone.utc)

    status = OrderStatus.COMPLETE if row.get("status", "").lower() == "complete" else OrderStatus.PENDING

    detail = OrderDetail(
        order_id=None,
        product=row.get("product") or default_product,
        qty=qty,
        sale=_price(row.get("sale_price", ""), DEFAULT_SALE_PRICE),
        cost=_price(row.get("cost_price", ""), DEFAULT_COST_PRICE),
        sku=row.get("sku") or None,
        upc=row.get("upc") or None,
    )
    try:
        order = Order.create(
            order_number=number,
            customer_name=row["customer_name"],
            email=row["email"],
            phone=row.get("phone", ""),
            quantity=qty,
            detail=detail,
            status=status,
            created_at=created_at,
        )
    except DomainException as exc:
        return RowError(f"Invalid order {label}: {exc}")
    return ParsedOrderRow(order=order, detail=detail)


class ExportOrdersHandler:

    def __init__(self, order_repo: OrderRepository, detail_repo: OrderDetailRepository) -> None:
        self._order_repo = order_repo
        self._detail_repo = detail_repo

    def handle(self) -> str:
        return export_orders_csv(list_order_records(self._order_repo, self._detail_repo))


class ImportOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        detail_repo: OrderDetailRepository,
        default_product: str = DEFAULT_PRODUCT,
    ) -> None:
        self._order_repo = order_repo
        self._detail_repo = detail_repo
        self._default_product = default_product

    def handle(self, csv_text: str) -> ImportResult:
        """Import every row independently, collecting per-row errors.

        Stock is not touched.
        """
        result = ImportResult()
        for line, row in enumerate(read_rows(csv_text), start=2):
            try:
                outcome = self._import_row(row)
            except Exception as exc:
                logger.exception("Order import line %d failed", line)
                number = row.get("order_number") or "unknown"
                outcome = RowError(f"Unexpected error processing order {number}: {exc}")
            if isinstance(outcome, RowError):
                logger.warning("Order import line %d skipped: %s", line, outcome.message)
                result.errors.append(f"Line {line}: {outcome.message}")
            else:
                result.success += 1
        logger.info("Order import finished: %d created, %d errors", result.success, len(result.errors))
        return result

    def _import_row(self, row: dict[str, str]) -> ParsedOrderRow | RowError:
        number = row.get("order_number", "")
        if number and self._order_repo.get_by_number(number) is not None:
            return RowError(f"Order {number} already exists")

        parsed = parse_order_row(row, self._default_product)
        if isinstance(parsed, RowError):
            return parsed

        try:
            saved = self._order_repo.add(parsed.order)
        except Exception as exc:
            return RowError(f"Error creating order {number}: {exc}")

        parsed.detail.order_id = saved.id
        try:
            self._detail_repo.add(parsed.detail)
        except Exception as exc:
            self._order_repo.delete(saved.id)  # type: ignore[arg-type]
            return RowError(f"Error creating details for order {number}: {exc}")
        return parsed
