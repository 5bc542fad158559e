"""JSON-file-backed implementations of OrderRepository and OrderDetailRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from eggstand.domain.exceptions import NotFoundError, OrderConflictError, ValidationError
from eggstand.domain.model.order import Order, OrderDetail, OrderStatus
from eggstand.domain.model.value_objects import Money
from eggstand.domain.repository.order_repository import (
    OrderDetailRepository,
    OrderRepository,
)
from eggstand.infrastructure.persistence.json_store import JsonFileStore


def _next_id(records: list[dict]) -> int:
    return max((r["id"] for r in records), default=0) + 1


def _check_quantity(raw: dict, expected: int | None) -> None:
    if expected is not None and raw["quantity"] != expected:
        raise OrderConflictError(
            f"Order {raw['order_number']} changed concurrently "
            f"(expected quantity {expected}, found {raw['quantity']})"
        )


class JsonOrderRepository(JsonFileStore, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def get_by_number(self, order_number: str) -> Order | None:
        for raw in self._load_raw():
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._load_raw()]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def add(self, order: Order) -> Order:
        with self._lock:
            records = self._load_raw()
            if any(r["order_number"] == order.order_number for r in records):
                raise ValidationError(f"Order {order.order_number} already exists")
            order.id = _next_id(records)
            records.append(self._to_raw(order))
            self._persist_raw(records)
        return order

    def save(self, order: Order, expected_quantity: int | None = None) -> None:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["id"] == order.id:
                    _check_quantity(raw, expected_quantity)
                    records[i] = self._to_raw(order)
                    break
            else:
                raise ValidationError(f"Order {order.order_number} is not stored")
            self._persist_raw(records)

    def delete(self, order_id: int, expected_quantity: int | None = None) -> None:
        with self._lock:
            records = self._load_raw()
            for raw in records:
                if raw["id"] == order_id:
                    _check_quantity(raw, expected_quantity)
                    break
            else:
                raise NotFoundError(f"Order #{order_id} not found")
            self._persist_raw([r for r in records if r["id"] != order_id])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "customer_name": order.customer_name,
            "email": order.email,
            "phone": order.phone,
            "quantity": order.quantity,
            "status": order.status.value,
            "is_flagged": order.is_flagged,
            "total": str(order.total.amount),
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_name=raw["customer_name"],
            email=raw["email"],
            phone=raw.get("phone") or "",
            quantity=raw["quantity"],
            status=OrderStatus(raw["status"]),
            is_flagged=raw.get("is_flagged", False),
            total=Money(Decimal(raw.get("total") or "0")),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )


class JsonOrderDetailRepository(JsonFileStore, OrderDetailRepository):

    # --- OrderDetailRepository interface --------------------------------------

    def get_by_order_id(self, order_id: int) -> OrderDetail | None:
        for raw in self._load_raw():
            if raw["order_id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[OrderDetail]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def add(self, detail: OrderDetail) -> OrderDetail:
        with self._lock:
            records = self._load_raw()
            if any(r["order_id"] == detail.order_id for r in records):
                raise ValidationError(f"Order #{detail.order_id} already has a line item")
            detail.id = _next_id(records)
            records.append(self._to_raw(detail))
            self._persist_raw(records)
        return detail

    def save(self, detail: OrderDetail) -> None:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["id"] == detail.id:
                    records[i] = self._to_raw(detail)
                    break
            else:
                raise ValidationError(f"Line item #{detail.id} is not stored")
            self._persist_raw(records)

    def delete_for_order(self, order_id: int) -> None:
        with self._lock:
            records = self._load_raw()
            kept = [r for r in records if r["order_id"] != order_id]
            if len(kept) == len(records):
                raise NotFoundError(f"Line item for order #{order_id} not found")
            self._persist_raw(kept)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(detail: OrderDetail) -> dict:
        return {
            "id": detail.id,
            "order_id": detail.order_id,
            "product": detail.product,
            "sku": detail.sku,
            "upc": detail.upc,
            "qty": detail.qty,
            "sale": str(detail.sale.amount),
            "cost": str(detail.cost.amount),
        }

    @staticmethod
    def _to_domain(raw: dict) -> OrderDetail:
        return OrderDetail(
            id=raw["id"],
            order_id=raw["order_id"],
            product=raw["product"],
            sku=raw.get("sku"),
            upc=raw.get("upc"),
            qty=raw["qty"],
            sale=Money(Decimal(raw["sale"])),
            cost=Money(Decimal(raw["cost"])),
        )
