"""Unit tests for the Order aggregate and its line item."""

from datetime import datetime, timezone

import pytest

from eggstand.domain.exceptions import ValidationError
from eggstand.domain.model.order import Order, OrderDetail, OrderStatus
from eggstand.domain.model.product import Product
from eggstand.domain.model.value_objects import Money

EGGS = Product(
    id="1", name="Carton of eggs", sale_price=Money.of("10.00"),
    cost_price=Money.of("7.50"), sku="EGG-12",
)


def _create(quantity: int = 2, **overrides) -> tuple[Order, OrderDetail]:
    detail = OrderDetail.snapshot(EGGS, quantity)
    fields = dict(
        order_number="ORD-ABC123",
        customer_name="Alice",
        email="alice@example.com",
        phone="555-0100",
        quantity=quantity,
        detail=detail,
    )
    fields.update(overrides)
    return Order.create(**fields), detail


class TestOrderStatus:

    def test_parse_is_case_insensitive(self):
        assert OrderStatus.parse(" Complete ") == OrderStatus.COMPLETE

    def test_parse_unknown(self):
        with pytest.raises(ValidationError, match="Unknown order status"):
            OrderStatus.parse("shipped")


class TestSnapshot:

    def test_copies_product_fields(self):
        detail = OrderDetail.snapshot(EGGS, 4)
        assert detail.product == "Carton of eggs"
        assert detail.sale == Money.of("10.00")
        assert detail.cost == Money.of("7.50")
        assert detail.sku == "EGG-12"
        assert detail.line_total == Money.of("40.00")

    def test_rejects_zero_quantity(self):
        with pytest.raises(ValidationError):
            OrderDetail.snapshot(EGGS, 0)


class TestCreate:

    def test_defaults(self):
        order, _ = _create()
        assert order.id is None
        assert order.status == OrderStatus.PENDING
        assert order.is_flagged is False
        assert order.total == Money.of("20.00")
        assert order.created_at.tzinfo is not None

    def test_strips_text_fields(self):
        order, _ = _create(customer_name="  Bob ", email=" bob@example.com ")
        assert order.customer_name == "Bob"
        assert order.email == "bob@example.com"

    @pytest.mark.parametrize("field_name", ["order_number", "customer_name", "email"])
    def test_required_fields(self, field_name):
        with pytest.raises(ValidationError, match="required"):
            _create(**{field_name: "  "})

    def test_phone_is_optional(self):
        order, _ = _create(phone=None)
        assert order.phone == ""

    def test_detail_quantity_must_match(self):
        detail = OrderDetail.snapshot(EGGS, 3)
        with pytest.raises(ValidationError, match="does not match"):
            Order.create("ORD-X", "Alice", "a@example.com", "", 2, detail)

    def test_keeps_given_timestamp(self):
        stamp = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        order, _ = _create(created_at=stamp)
        assert order.created_at == stamp


class TestMutations:

    def test_change_quantity_keeps_records_mirrored(self):
        order, detail = _create(quantity=3)
        order.change_quantity(5, detail)
        assert order.quantity == detail.qty == 5
        assert order.total == detail.sale * 5

    def test_change_quantity_rejects_zero(self):
        order, detail = _create(quantity=3)
        with pytest.raises(ValidationError):
            order.change_quantity(0, detail)
        assert order.quantity == detail.qty == 3

    def test_status_and_flag(self):
        order, _ = _create()
        order.set_status(OrderStatus.COMPLETE)
        order.set_flag(True)
        assert order.is_complete
        assert order.is_flagged
