"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from eggstand.application.dto import OrderDTO, OrderRecord
from eggstand.domain.exceptions import NotFoundError
from eggstand.domain.model.order import Order, OrderDetail, OrderStatus
from eggstand.domain.repository.order_repository import (
    OrderDetailRepository,
    OrderRepository,
)


def load_order(
    order_repo: OrderRepository,
    detail_repo: OrderDetailRepository,
    order_number: str,
) -> tuple[Order, OrderDetail]:
    """Fetch an order and its line item, or raise NotFoundError."""
    order = order_repo.get_by_number(order_number)
    if order is None:
        raise NotFoundError(f"Order {order_number} not found")
    detail = detail_repo.get_by_order_id(order.id)  # type: ignore[arg-type]
    if detail is None:
        raise NotFoundError(f"Line item for order {order_number} not found")
    return order, detail


def list_order_records(
    order_repo: OrderRepository,
    detail_repo: OrderDetailRepository,
) -> list[OrderRecord]:
    """Every order joined with its line item, newest first."""
    details = {d.order_id: d for d in detail_repo.list_all()}
    return [OrderRecord(order=o, detail=details.get(o.id)) for o in order_repo.list_all()]


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, detail_repo: OrderDetailRepository) -> None:
        self._order_repo = order_repo
        self._detail_repo = detail_repo

    def handle(self, order_number: str) -> OrderDTO:
        order, detail = load_order(self._order_repo, self._detail_repo, order_number)
        return OrderDTO.from_records(order, detail)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository, detail_repo: OrderDetailRepository) -> None:
        self._order_repo = order_repo
        self._detail_repo = detail_repo

    def handle(
        self,
        status: OrderStatus | None = None,
        flagged: bool | None = None,
    ) -> list[OrderDTO]:
        records = list_order_records(self._order_repo, self._detail_repo)
        return [
            OrderDTO.from_records(r.order, r.detail)
            for r in records
            if (status is None or r.order.status == status)
            and (flagged is None or r.order.is_flagged == flagged)
        ]
