"""Abstract repositories for Order and OrderDetail records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from eggstand.domain.model.order import Order, OrderDetail


class OrderRepository(ABC):

    @abstractmethod
    def get_by_number(self, order_number: str) -> Order | None:
        """Return an order by its order number, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def add(self, order: Order) -> Order:
        """Insert a new order and assign its ``id``.

        Raises ValidationError if the order number is already taken.
        """

    @abstractmethod
    def save(self, order: Order, expected_quantity: int | None = None) -> None:
        """Persist changes to an existing order.

        With ``expected_quantity``, raises OrderConflictError unless the stored
        order still holds that quantity.  Raises ValidationError if the order
        is not stored.
        """

    @abstractmethod
    def delete(self, order_id: int, expected_quantity: int | None = None) -> None:
        """Remove an order record.

        Raises NotFoundError if no such order is stored, and OrderConflictError
        if ``expected_quantity`` no longer matches.
        """


class OrderDetailRepository(ABC):

    @abstractmethod
    def get_by_order_id(self, order_id: int) -> OrderDetail | None:
        """Return the line item owned by an order, or None."""

    @abstractmethod
    def list_all(self) -> list[OrderDetail]:
        """Return every line item."""

    @abstractmethod
    def add(self, detail: OrderDetail) -> OrderDetail:
        """Insert a line item; at most one per order."""

    @abstractmethod
    def save(self, detail: OrderDetail) -> None:
        """Persist changes to an existing line item."""

    @abstractmethod
    def delete_for_order(self, order_id: int) -> None:
        """Remove the line item owned by an order.

        Raises NotFoundError if the order has no stored line item.
        """
