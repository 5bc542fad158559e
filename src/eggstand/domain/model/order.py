"""Order and OrderDetail: a reservation and its priced line item.

An Order and its OrderDetail are stored as two records but always move
together: the detail's ``qty`` mirrors ``Order.quantity`` and
``Order.total`` is ``quantity * detail.sale``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from eggstand.domain.exceptions import ValidationError
from eggstand.domain.model.product import Product
from eggstand.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETE = "complete"

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw.strip().lower())
        except (AttributeError, ValueError) as exc:
            raise ValidationError(
                f"Unknown order status {raw!r} (expected pending or complete)"
            ) from exc


@dataclass
class OrderDetail:
    """Priced line item, copied from the product at order time."""

    order_id: int | None
    product: str
    qty: int
    sale: Money  # locked at order-creation time
    cost: Money
    sku: str | None = None
    upc: str | None = None
    id: int | None = None

    @staticmethod
    def snapshot(product: Product, quantity: int, order_id: int | None = None) -> OrderDetail:
        return OrderDetail(
            order_id=order_id,
            product=product.name,
            qty=Quantity(quantity).value,
            sale=product.sale_price,
            cost=product.cost_price,
            sku=product.sku,
            upc=product.upc,
        )

    @property
    def line_total(self) -> Money:
        return self.sale * self.qty


@dataclass
class Order:
    """Aggregate root for a carton reservation.

    Use ``Order.create()`` for new orders; ``__init__`` stays permissive so
    repositories can reconstitute stored rows without re-validating.
    """

    id: int | None
    order_number: str
    customer_name: str
    email: str
    phone: str
    quantity: int
    status: OrderStatus = OrderStatus.PENDING
    is_flagged: bool = False
    total: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        customer_name: str,
        email: str,
        phone: str,
        quantity: int,
        detail: OrderDetail,
        status: OrderStatus = OrderStatus.PENDING,
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not order_number or not order_number.strip():
            raise ValidationError("Order number is required")
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if not email or not email.strip():
            raise ValidationError("Email is required")

        qty = Quantity(quantity).value
        if detail.qty != qty:
            raise ValidationError(
                f"Line item quantity {detail.qty} does not match order quantity {qty}"
            )

        return Order(
            id=None,
            order_number=order_number.strip(),
            customer_name=customer_name.strip(),
            email=email.strip(),
            phone=(phone or "").strip(),
            quantity=qty,
            status=status,
            total=detail.line_total,
            created_at=created_at or datetime.now(timezone.utc),
        )

    # --- Mutations ------------------------------------------------------------

    def change_quantity(self, new_quantity: int, detail: OrderDetail) -> None:
        """Set the quantity on both records and recompute the total.

        Stock must already have been adjusted by the caller.
        """
        qty = Quantity(new_quantity).value
        self.quantity = qty
        detail.qty = qty
        self.total = detail.line_total

    def set_status(self, status: OrderStatus) -> None:
        # Completing an order fulfils an existing reservation; stock is untouched.
        self.status = status

    def set_flag(self, flagged: bool) -> None:
        self.is_flagged = bool(flagged)

    @property
    def is_complete(self) -> bool:
        return self.status == OrderStatus.COMPLETE
