"""Application service: Create Order use case.

A reservation is three writes that must agree: the stock decrement, the
order row and its line item.  Stock goes first through the
reconciliation service; if either order-side insert fails the stock is
handed back, so a failed reservation never leaves an orphan order or
phantom consumption.
"""

from __future__ import annotations

import logging

from eggstand.application.dto import OrderDTO
from eggstand.application.notifications import OrderNotifier, notify_best_effort
from eggstand.domain.exceptions import NotFoundError
from eggstand.domain.model.order import Order, OrderDetail
from eggstand.domain.model.product import Product
from eggstand.domain.model.value_objects import Quantity
from eggstand.domain.repository.order_repository import (
    OrderDetailRepository,
    OrderRepository,
)
from eggstand.domain.repository.product_repository import ProductRepository
from eggstand.domain.repository.stock_repository import StockRepository
from eggstand.domain.service.order_numbers import new_order_number
from eggstand.domain.service.stock_reconciliation_service import (
    DEFAULT_ATTEMPTS,
    StockReconciliationService,
    reservation_delta,
)

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT = "Carton of eggs"


def find_product(product_repo: ProductRepository, ref: str) -> Product:
    """Resolve a product by name, falling back to ID."""
    product = product_repo.get_by_name(ref) or product_repo.get_by_id(ref)
    if product is None:
        raise NotFoundError(f"Product not found: '{ref}'")
    return product


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        detail_repo: OrderDetailRepository,
        product_repo: ProductRepository,
        stock_repo: StockRepository,
        notifier: OrderNotifier | None = None,
        default_product: str = DEFAULT_PRODUCT,
        attempts: int = DEFAULT_ATTEMPTS,
    ) -> None:
        self._order_repo = order_repo
        self._detail_repo = detail_repo
        self._product_repo = product_repo
        self._stock = StockReconciliationService(stock_repo, attempts=attempts)
        self._notifier = notifier
        self._default_product = default_product

    def handle(
        self,
        customer_name: str,
        email: str,
        phone: str,
        quantity: int,
        product: str | None = None,
    ) -> OrderDTO:
        """Reserve *quantity* cartons for a customer.

        Steps:
        1. Validate input and snapshot the product's prices.
        2. Reserve stock (InsufficientStockError if not enough left).
        3. Insert the order and its line item; undo on failure.
        4. Fire the best-effort notification.
        """
        qty = Quantity(quantity).value
        item = find_product(self._product_repo, product or self._default_product)

        number = new_order_number(lambda n: self._order_repo.get_by_number(n) is not None)
        detail = OrderDetail.snapshot(item, qty)
        order = Order.create(
            order_number=number,
            customer_name=customer_name,
            email=email,
            phone=phone,
            quantity=qty,
            detail=detail,
        )

        self._stock.reconcile(reservation_delta(qty), lambda: self._insert(order, detail))
        logger.info("Order %s created for %d carton(s)", order.order_number, qty)

        notify_best_effort(self._notifier, order, detail)
        return OrderDTO.from_records(order, detail)

    def _insert(self, order: Order, detail: OrderDetail) -> None:
        saved = self._order_repo.add(order)
        detail.order_id = saved.id
        try:
            self._detail_repo.add(detail)
        except Exception:
            self._order_repo.delete(saved.id)  # type: ignore[arg-type]
            raise
