"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from eggstand.domain.model.order import Order, OrderDetail
from eggstand.domain.model.stock import StockLevel


@dataclass(frozen=True)
class StockDTO:
    current_quantity: int
    max_quantity: int
    percent_full: float
    updated_at: str | None

    @staticmethod
    def from_level(level: StockLevel) -> StockDTO:
        return StockDTO(
            current_quantity=level.current_quantity,
            max_quantity=level.max_quantity,
            percent_full=level.percent_full,
            updated_at=level.updated_at.isoformat() if level.updated_at else None,
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order with its line item, as displayed to the user."""

    order_number: str
    customer_name: str
    email: str
    phone: str
    quantity: int
    status: str
    is_flagged: bool
    product: str
    unit_price: str  # formatted, e.g. "$10.00"
    total: str
    created_at: str

    @staticmethod
    def from_records(order: Order, detail: OrderDetail | None) -> OrderDTO:
        return OrderDTO(
            order_number=order.order_number,
            customer_name=order.customer_name,
            email=order.email,
            phone=order.phone,
            quantity=order.quantity,
            status=order.status.value,
            is_flagged=order.is_flagged,
            product=detail.product if detail else "",
            unit_price=str(detail.sale) if detail else "",
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class OrderRecord:
    """An order paired with its line item (None if the detail row is missing)."""

    order: Order
    detail: OrderDetail | None


@dataclass
class ImportResult:
    """Outcome of a bulk import: rows created and one message per skipped row."""

    success: int = 0
    errors: list[str] = field(default_factory=list)
