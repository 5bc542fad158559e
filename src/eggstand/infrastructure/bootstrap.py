"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from eggstand.domain.model.product import Product
from eggstand.domain.model.value_objects import Money
from eggstand.infrastructure.notifications.smtp_notifier import SmtpOrderNotifier
from eggstand.infrastructure.persistence.json_farm_repository import (
    JsonCoopRepository,
    JsonEmailSettingsRepository,
    JsonExpenseRepository,
    JsonHarvestRepository,
)
from eggstand.infrastructure.persistence.json_order_repository import (
    JsonOrderDetailRepository,
    JsonOrderRepository,
)
from eggstand.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from eggstand.infrastructure.persistence.json_stock_repository import (
    JsonStockRepository,
)
from eggstand.infrastructure.settings import get_settings

# Prices used when the catalog is provisioned for the first time.
DEFAULT_SALE_PRICE = Money(Decimal("10.00"))
DEFAULT_COST_PRICE = Money(Decimal("7.50"))


def _data_dir() -> Path:
    return get_settings().data_dir


def stock_repository() -> JsonStockRepository:
    return JsonStockRepository(
        _data_dir() / "stock.json", max_quantity=get_settings().default_max_stock
    )


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(_data_dir() / "orders.json")


def order_detail_repository() -> JsonOrderDetailRepository:
    return JsonOrderDetailRepository(_data_dir() / "order_details.json")


def product_repository() -> JsonProductRepository:
    seed = Product(
        id="1",
        name=get_settings().default_product,
        sale_price=DEFAULT_SALE_PRICE,
        cost_price=DEFAULT_COST_PRICE,
    )
    return JsonProductRepository(_data_dir() / "products.json", seed=[seed])


def coop_repository() -> JsonCoopRepository:
    return JsonCoopRepository(_data_dir() / "coops.json")


def harvest_repository() -> JsonHarvestRepository:
    return JsonHarvestRepository(_data_dir() / "harvests.json")


def expense_repository() -> JsonExpenseRepository:
    return JsonExpenseRepository(_data_dir() / "expenses.json")


def email_settings_repository() -> JsonEmailSettingsRepository:
    return JsonEmailSettingsRepository(_data_dir() / "email_settings.json")


def order_notifier() -> SmtpOrderNotifier:
    return SmtpOrderNotifier(email_settings_repository())
