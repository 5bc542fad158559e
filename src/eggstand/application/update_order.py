"""Application service: Update Order use case.

Status, flag and quantity are independent.  Only a quantity change
touches stock: growing an order reserves the difference, shrinking it
releases the difference.  Completing an order has no stock effect; the
cartons were already reserved when the order was placed.

Every order write is conditional on the quantity the stock delta was
computed from, so a concurrent edit makes this one fail and its stock
step is compensated.
"""

from __future__ import annotations

from eggstand.application.dto import OrderDTO
from eggstand.application.show_order import load_order
from eggstand.domain.model.order import Order, OrderDetail, OrderStatus
from eggstand.domain.model.value_objects import Quantity
from eggstand.domain.repository.order_repository import (
    OrderDetailRepository,
    OrderRepository,
)
from eggstand.domain.repository.stock_repository import StockRepository
from eggstand.domain.service.stock_reconciliation_service import (
    DEFAULT_ATTEMPTS,
    StockReconciliationService,
    resize_delta,
)


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        detail_repo: OrderDetailRepository,
        stock_repo: StockRepository,
        attempts: int = DEFAULT_ATTEMPTS,
    ) -> None:
        self._order_repo = order_repo
        self._detail_repo = detail_repo
        self._stock = StockReconciliationService(stock_repo, attempts=attempts)

    def handle(
        self,
        order_number: str,
        status: OrderStatus | str | None = None,
        quantity: int | None = None,
        is_flagged: bool | None = None,
    ) -> OrderDTO:
        """Apply the supplied fields; omitted fields are left unchanged."""
        order, detail = load_order(self._order_repo, self._detail_repo, order_number)

        if isinstance(status, str):
            status = OrderStatus.parse(status)
        if quantity is not None:
            quantity = Quantity(quantity).value
            if quantity == order.quantity:
                quantity = None

        delta = resize_delta(order.quantity, quantity) if quantity is not None else 0

        self._stock.reconcile(
            delta, lambda: self._commit(order, detail, status, quantity, is_flagged)
        )
        return OrderDTO.from_records(order, detail)

    def _commit(
        self,
        order: Order,
        detail: OrderDetail,
        status: OrderStatus | None,
        quantity: int | None,
        is_flagged: bool | None,
    ) -> None:
        before = (order.quantity, order.total, order.status, order.is_flagged)
        read_qty = order.quantity

        if status is not None:
            order.set_status(status)
        if is_flagged is not None:
            order.set_flag(is_flagged)
        if quantity is None:
            self._order_repo.save(order, expected_quantity=read_qty)
            return

        old_qty = detail.qty
        order.change_quantity(quantity, detail)
        self._order_repo.save(order, expected_quantity=read_qty)
        try:
            self._detail_repo.save(detail)
        except Exception:
            order.quantity, order.total, order.status, order.is_flagged = before
            detail.qty = old_qty
            self._order_repo.save(order, expected_quantity=quantity)
            raise
