"""Integration tests for the DeleteOrder use case."""

import pytest

from eggstand.application.create_order import CreateOrderHandler
from eggstand.application.delete_order import DeleteOrderHandler
from eggstand.application.update_order import UpdateOrderHandler
from eggstand.domain.exceptions import NotFoundError
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


def _setup(quantity: int = 4):
    orders = FakeOrderRepository()
    details = FakeOrderDetailRepository()
    stock = FakeStockRepository(current=100)
    create = CreateOrderHandler(orders, details, FakeProductRepository([EGGS]), stock)
    number = create.handle("Alice", "alice@example.com", "", quantity).order_number
    return DeleteOrderHandler(orders, details, stock), orders, details, stock, number


def test_delete_returns_quantity_to_stock():
    handler, orders, details, stock, number = _setup(quantity=4)
    order_id = orders.get_by_number(number).id

    handler.handle(number)

    assert stock.get().current_quantity == 100
    assert orders.get_by_number(number) is None
    assert details.get_by_order_id(order_id) is None


def test_delete_complete_order_also_releases():
    handler, orders, details, stock, number = _setup(quantity=4)
    UpdateOrderHandler(orders, details, stock).handle(number, status="complete")
    handler.handle(number)
    assert stock.get().current_quantity == 100


def test_delete_unknown_order():
    handler, _, _, stock, _ = _setup()
    with pytest.raises(NotFoundError):
        handler.handle("ORD-NOPE00")
    assert stock.get().current_quantity == 96


def test_failed_delete_keeps_order_and_stock():
    handler, orders, details, stock, number = _setup(quantity=4)
    orders.fail_on_delete = True

    with pytest.raises(StoreFailure):
        handler.handle(number)

    order = orders.get_by_number(number)
    assert order is not None
    assert details.get_by_order_id(order.id) is not None
    assert stock.get().current_quantity == 96
