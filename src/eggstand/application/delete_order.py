"""Application service: Delete Order use case.

Deleting an order returns its full current quantity to stock, whatever
its status.  Both removals must find the records that were read; when
a concurrent delete or resize got there first the release is compensated.
"""

from __future__ import annotations

import logging

from eggstand.application.show_order import load_order
from eggstand.domain.model.order import Order, OrderDetail
from eggstand.domain.repository.order_repository import (
    OrderDetailRepository,
    OrderRepository,
)
from eggstand.domain.repository.stock_repository import StockRepository
from eggstand.domain.service.stock_reconciliation_service import (
    DEFAULT_ATTEMPTS,
    StockReconciliationService,
    release_delta,
)

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

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

    def handle(self, order_number: str) -> None:
        order, detail = load_order(self._order_repo, self._detail_repo, order_number)
        self._stock.reconcile(release_delta(order.quantity), lambda: self._remove(order, detail))
        logger.info("Order %s deleted, %d carton(s) released", order_number, order.quantity)

    def _remove(self, order: Order, detail: OrderDetail) -> None:
        self._detail_repo.delete_for_order(order.id)  # type: ignore[arg-type]
        try:
            self._order_repo.delete(order.id, expected_quantity=order.quantity)  # type: ignore[arg-type]
        except Exception:
            self._detail_repo.add(detail)
            raise
