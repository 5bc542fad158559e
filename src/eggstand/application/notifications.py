"""Best-effort notification seam for newly created orders.

Notifications run after the order is committed.  A failing notifier is
logged and ignored; it never fails or rolls back the order.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from eggstand.domain.model.order import Order, OrderDetail

logger = logging.getLogger(__name__)


class OrderNotifier(ABC):

    @abstractmethod
    def notify(self, order: Order, detail: OrderDetail) -> None:
        """Announce a new order."""


def notify_best_effort(notifier: OrderNotifier | None, order: Order, detail: OrderDetail) -> None:
    if notifier is None:
        return
    try:
        notifier.notify(order, detail)
    except Exception:
        logger.exception("Failed to send notification for order %s", order.order_number)
