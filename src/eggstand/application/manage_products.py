"""Application services: product catalog use cases."""

from __future__ import annotations

from eggstand.application.identifiers import next_id
from eggstand.domain.exceptions import NotFoundError, ValidationError
from eggstand.domain.model.product import Product
from eggstand.domain.model.value_objects import Money
from eggstand.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        sale_price: str,
        cost_price: str,
        sku: str | None = None,
        upc: str | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        if name and self._product_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Product '{name.strip()}' already exists")

        product = Product.create(
            product_id=next_id(p.id for p in self._product_repo.list_all()),
            name=name,
            sale_price=Money.of(sale_price),
            cost_price=Money.of(cost_price),
            sku=sku,
            upc=upc,
        )
        self._product_repo.save(product)
        return product


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        sale_price: str | None = None,
        cost_price: str | None = None,
        sku: str | None = None,
        upc: str | None = None,
    ) -> Product:
        """Update catalog fields.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")

        if name is not None:
            clash = self._product_repo.get_by_name(name.strip())
            if clash is not None and clash.id != product.id:
                raise ValidationError(f"Product '{name.strip()}' already exists")

        product.update(
            name=name,
            sale_price=Money.of(sale_price) if sale_price is not None else None,
            cost_price=Money.of(cost_price) if cost_price is not None else None,
            sku=sku,
            upc=upc,
        )
        self._product_repo.save(product)
        return product


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        if self._product_repo.get_by_id(product_id) is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        self._product_repo.delete(product_id)
