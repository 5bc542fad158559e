"""Product aggregate.

Products live independently of orders. An order copies the product's
identity and prices into its detail row, so later price changes never
rewrite history.
"""

from __future__ import annotations

from dataclasses import dataclass

from eggstand.domain.exceptions import ValidationError
from eggstand.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog."""

    id: str
    name: str
    sale_price: Money
    cost_price: Money
    sku: str | None = None
    upc: str | None = None

    @staticmethod
    def create(
        product_id: str,
        name: str,
        sale_price: Money,
        cost_price: Money,
        sku: str | None = None,
        upc: str | None = None,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        return Product(
            id=product_id,
            name=name.strip(),
            sale_price=sale_price,
            cost_price=cost_price,
            sku=sku or None,
            upc=upc or None,
        )

    def update(
        self,
        name: str | None = None,
        sale_price: Money | None = None,
        cost_price: Money | None = None,
        sku: str | None = None,
        upc: str | None = None,
    ) -> None:
        """Change catalog fields; existing orders keep their snapshot."""
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            self.name = name.strip()
        if sale_price is not None:
            self.sale_price = sale_price
        if cost_price is not None:
            self.cost_price = cost_price
        if sku is not None:
            self.sku = sku or None
        if upc is not None:
            self.upc = upc or None
