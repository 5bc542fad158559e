"""Tests for the product catalog use cases."""

import pytest

from eggstand.application.manage_products import (
    AddProductHandler,
    DeleteProductHandler,
    UpdateProductHandler,
)
from eggstand.domain.exceptions import NotFoundError, ValidationError
from eggstand.domain.model.product import Product
from eggstand.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository


def _repo() -> FakeProductRepository:
    return FakeProductRepository([
        Product(id="1", name="Carton of eggs", sale_price=Money.of("10.00"), cost_price=Money.of("7.50")),
    ])


def test_add_product():
    repo = _repo()
    product = AddProductHandler(repo).handle("Duck eggs", "14.00", "9.00", sku="DK-6")
    assert product.id == "2"
    assert repo.get_by_name("duck eggs").sku == "DK-6"


def test_add_duplicate_name_rejected():
    with pytest.raises(ValidationError, match="already exists"):
        AddProductHandler(_repo()).handle("carton of eggs", "1", "1")


def test_add_bad_price_rejected():
    with pytest.raises(ValidationError, match="Invalid money amount"):
        AddProductHandler(_repo()).handle("Duck eggs", "cheap", "1")


def test_update_prices():
    repo = _repo()
    UpdateProductHandler(repo).handle("1", sale_price="11.00")
    assert repo.get_by_id("1").sale_price == Money.of("11.00")
    assert repo.get_by_id("1").cost_price == Money.of("7.50")


def test_update_missing_product():
    with pytest.raises(NotFoundError):
        UpdateProductHandler(_repo()).handle("9", name="Ghost")


def test_rename_onto_existing_name_rejected():
    repo = _repo()
    AddProductHandler(repo).handle("Duck eggs", "14.00", "9.00")
    with pytest.raises(ValidationError, match="already exists"):
        UpdateProductHandler(repo).handle("2", name="Carton of Eggs")


def test_delete_product():
    repo = _repo()
    DeleteProductHandler(repo).handle("1")
    assert repo.list_all() == []
