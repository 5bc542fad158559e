"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Iterable

from eggstand.domain.model.product import Product
from eggstand.domain.model.value_objects import Money
from eggstand.domain.repository.product_repository import ProductRepository
from eggstand.infrastructure.persistence.json_store import JsonFileStore


class JsonProductRepository(JsonFileStore, ProductRepository):
    """*seed* is written only when the file is first created."""

    def __init__(self, file_path: Path, seed: Iterable[Product] = ()) -> None:
        super().__init__(file_path, empty=[self._to_raw(p) for p in seed])

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return sorted(self._load().values(), key=lambda p: p.name.lower())

    def save(self, product: Product) -> None:
        with self._lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)

    def delete(self, product_id: str) -> None:
        with self._lock:
            products = self._load()
            products.pop(product_id, None)
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                sale_price=Money(Decimal(item["sale_price"])),
                cost_price=Money(Decimal(item["cost_price"])),
                sku=item.get("sku"),
                upc=item.get("upc"),
            )
            for item in self._load_raw()
        }

    def _persist(self, products: dict[str, Product]) -> None:
        self._persist_raw([self._to_raw(p) for p in products.values()])

    @staticmethod
    def _to_raw(p: Product) -> dict:
        return {
            "id": p.id,
            "name": p.name,
            "sale_price": str(p.sale_price.amount),
            "cost_price": str(p.cost_price.amount),
            "sku": p.sku,
            "upc": p.upc,
        }
