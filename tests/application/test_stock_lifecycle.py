"""End-to-end stock accounting across create, resize, complete and delete."""

import threading

import pytest

from eggstand.application.create_order import CreateOrderHandler
from eggstand.application.delete_order import DeleteOrderHandler
from eggstand.application.update_order import UpdateOrderHandler
from eggstand.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    NotFoundError,
    OrderConflictError,
)
from eggstand.domain.model.product import Product
from eggstand.domain.model.value_objects import Money
from tests.fakes import (
    FakeOrderDetailRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeStockRepository,
)

EGGS = Product(id="1", name="Carton of eggs", sale_price=Money.of("10.00"), cost_price=Money.of("7.50"))


class ReadersMeet(FakeOrderRepository):
    """Once armed, holds each order lookup until every party has read the order."""

    def __init__(self) -> None:
        super().__init__()
        self.barrier: threading.Barrier | None = None

    def get_by_number(self, order_number):
        order = super().get_by_number(order_number)
        if self.barrier is not None:
            self.barrier.wait(timeout=5)
        return order


class Stand:
    """All three handlers sharing one set of fake stores."""

    def __init__(
        self,
        current: int = 100,
        maximum: int = 100,
        attempts: int = 3,
        orders: FakeOrderRepository | None = None,
    ) -> None:
        self.orders = orders or FakeOrderRepository()
        self.details = FakeOrderDetailRepository()
        self.stock = FakeStockRepository(current=current, maximum=maximum)
        products = FakeProductRepository([EGGS])
        self.create = CreateOrderHandler(
            self.orders, self.details, products, self.stock, attempts=attempts
        )
        self.update = UpdateOrderHandler(self.orders, self.details, self.stock, attempts=attempts)
        self.delete = DeleteOrderHandler(self.orders, self.details, self.stock, attempts=attempts)

    def place(self, quantity: int) -> str:
        return self.create.handle("Customer", "c@example.com", "", quantity).order_number

    @property
    def current(self) -> int:
        return self.stock.get().current_quantity

    def reserved(self) -> int:
        return sum(o.quantity for o in self.orders.list_all())


def test_full_lifecycle():
    stand = Stand(current=100, maximum=100)

    a = stand.place(3)
    assert stand.current == 97
    b = stand.place(5)
    assert stand.current == 92

    stand.update.handle(a, quantity=1)
    assert stand.current == 94

    stand.delete.handle(b)
    assert stand.current == 99

    stand.update.handle(a, status="complete")
    assert stand.current == 99

    stand.place(2)
    assert stand.current == 97

    with pytest.raises(InsufficientStockError):
        stand.place(200)
    assert stand.current == 97


def test_counter_matches_active_reservations():
    stand = Stand(current=100, maximum=100)
    numbers = [stand.place(q) for q in (4, 7, 1, 12)]
    stand.update.handle(numbers[0], quantity=9)
    stand.update.handle(numbers[1], quantity=2, status="complete")
    stand.delete.handle(numbers[2])
    stand.update.handle(numbers[3], quantity=12)

    assert stand.current == 100 - stand.reserved()
    assert 0 <= stand.current <= 100


def test_concurrent_reservations_never_oversell():
    stand = Stand(current=20, maximum=100, attempts=50)
    barrier = threading.Barrier(10)
    rejected = []

    def buy():
        barrier.wait()
        try:
            stand.place(3)
        except InsufficientStockError:
            rejected.append(1)

    threads = [threading.Thread(target=buy) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    accepted = len(stand.orders.list_all())
    assert accepted == 6
    assert len(rejected) == 4
    assert stand.current == 20 - 3 * accepted


def _run_together(*jobs):
    threads = [threading.Thread(target=job) for job in jobs]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


def test_concurrent_deletes_release_stock_once():
    orders = ReadersMeet()
    stand = Stand(current=100, maximum=100, orders=orders)
    a = stand.place(10)
    stand.place(30)
    assert stand.current == 60

    orders.barrier = threading.Barrier(2)
    missing = []

    def delete_a():
        try:
            stand.delete.handle(a)
        except NotFoundError as exc:
            missing.append(exc)

    _run_together(delete_a, delete_a)
    orders.barrier = None

    assert len(missing) == 1
    assert stand.orders.get_by_number(a) is None
    assert stand.current == 70
    assert stand.current == 100 - stand.reserved()


def test_concurrent_resizes_keep_stock_in_step():
    orders = ReadersMeet()
    stand = Stand(current=100, maximum=100, orders=orders)
    a = stand.place(10)

    orders.barrier = threading.Barrier(2)
    conflicts = []

    def resize(quantity):
        def job():
            try:
                stand.update.handle(a, quantity=quantity)
            except OrderConflictError as exc:
                conflicts.append(exc)
        return job

    _run_together(resize(5), resize(8))
    orders.barrier = None

    order = stand.orders.get_by_number(a)
    assert len(conflicts) == 1
    assert order.quantity in (5, 8)
    assert stand.details.get_by_order_id(order.id).qty == order.quantity
    assert stand.current == 100 - order.quantity


def test_delete_racing_a_resize_releases_what_is_reserved():
    # Whichever write lands second finds the order gone or resized and backs out.
    orders = ReadersMeet()
    stand = Stand(current=100, maximum=100, orders=orders)
    a = stand.place(10)

    orders.barrier = threading.Barrier(2)
    errors = []

    def delete_a():
        try:
            stand.delete.handle(a)
        except DomainException as exc:
            errors.append(exc)

    def grow_a():
        try:
            stand.update.handle(a, quantity=15)
        except DomainException as exc:
            errors.append(exc)

    _run_together(delete_a, grow_a)
    orders.barrier = None

    assert len(errors) == 1
    assert stand.current == 100 - stand.reserved()
