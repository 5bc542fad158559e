"""Integration tests for the UpdateOrder use case."""

import pytest

from eggstand.application.create_order import CreateOrderHandler
from eggstand.application.update_order import UpdateOrderHandler
from eggstand.domain.exceptions import InsufficientStockError, NotFoundError, ValidationError
from eggstand.domain.model.order import OrderStatus
from eggstand.domain.model.product import Product
from eggstand.domain.model.value_objects import Money
from tests.fakes import (
    FakeOrderDetailRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeStockRepository,
    StoreFailure,
)

EGGS = Product(id="1", name="Carton of eggs", sale_price=Money.of("10.00"), cost_price=Money.of("7.50"))


def _setup(current: int = 100, quantity: int = 3):
    orders = FakeOrderRepository()
    details = FakeOrderDetailRepository()
    stock = FakeStockRepository(current=current)
    create = CreateOrderHandler(orders, details, FakeProductRepository([EGGS]), stock)
    number = create.handle("Alice", "alice@example.com", "", quantity).order_number
    return UpdateOrderHandler(orders, details, stock), orders, details, stock, number


class TestQuantityChange:

    def test_shrink_releases_difference(self):
        handler, orders, details, stock, number = _setup(quantity=3)
        dto = handler.handle(number, quantity=1)
        assert stock.get().current_quantity == 99
        assert dto.quantity == 1
        assert dto.total == "$10.00"

    def test_grow_reserves_difference(self):
        handler, _, _, stock, number = _setup(quantity=3)
        handler.handle(number, quantity=10)
        assert stock.get().current_quantity == 90

    def test_records_stay_mirrored(self):
        handler, orders, details, _, number = _setup(quantity=3)
        handler.handle(number, quantity=7)
        order = orders.get_by_number(number)
        detail = details.get_by_order_id(order.id)
        assert order.quantity == detail.qty == 7
        assert order.total == detail.sale * 7

    def test_grow_beyond_stock_rejected(self):
        handler, orders, _, stock, number = _setup(current=5, quantity=3)
        with pytest.raises(InsufficientStockError):
            handler.handle(number, quantity=6)
        assert stock.get().current_quantity == 2
        assert orders.get_by_number(number).quantity == 3

    def test_zero_quantity_rejected(self):
        handler, _, _, stock, number = _setup()
        writes = stock.writes
        with pytest.raises(ValidationError):
            handler.handle(number, quantity=0)
        assert stock.writes == writes


class TestNoOp:

    def test_same_quantity_does_not_touch_stock(self):
        handler, _, _, stock, number = _setup(quantity=3)
        before = stock.get()
        writes = stock.writes

        handler.handle(number, quantity=3)

        after = stock.get()
        assert stock.writes == writes
        assert after.current_quantity == before.current_quantity
        assert after.updated_at == before.updated_at


class TestStatusAndFlag:

    def test_complete_does_not_touch_stock(self):
        handler, orders, _, stock, number = _setup(quantity=3)
        writes = stock.writes
        dto = handler.handle(number, status="complete")
        assert dto.status == "complete"
        assert orders.get_by_number(number).status == OrderStatus.COMPLETE
        assert stock.writes == writes
        assert stock.get().current_quantity == 97

    def test_flag(self):
        handler, orders, _, _, number = _setup()
        handler.handle(number, is_flagged=True)
        assert orders.get_by_number(number).is_flagged

    def test_unknown_status(self):
        handler, _, _, _, number = _setup()
        with pytest.raises(ValidationError, match="Unknown order status"):
            handler.handle(number, status="shipped")

    def test_combined_update(self):
        handler, orders, _, stock, number = _setup(quantity=3)
        handler.handle(number, status=OrderStatus.COMPLETE, quantity=2, is_flagged=True)
        order = orders.get_by_number(number)
        assert (order.status, order.quantity, order.is_flagged) == (OrderStatus.COMPLETE, 2, True)
        assert stock.get().current_quantity == 98


class TestUpdateOrderErrors:

    def test_unknown_order(self):
        handler, _, _, _, _ = _setup()
        with pytest.raises(NotFoundError, match="ORD-NOPE00"):
            handler.handle("ORD-NOPE00", quantity=1)

    def test_detail_failure_rolls_back_order_and_stock(self):
        handler, orders, details, stock, number = _setup(quantity=3)
        details.fail_on_save = True

        with pytest.raises(StoreFailure):
            handler.handle(number, quantity=5, status="complete")

        order = orders.get_by_number(number)
        assert order.quantity == 3
        assert order.status == OrderStatus.PENDING
        assert str(order.total) == "$30.00"
        assert details.get_by_order_id(order.id).qty == 3
        assert stock.get().current_quantity == 97
