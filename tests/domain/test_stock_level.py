"""Unit tests for the StockLevel snapshot."""

import pytest

from eggstand.domain.exceptions import InsufficientStockError, ValidationError
from eggstand.domain.model.stock import StockLevel


class TestConstruction:

    def test_valid_level(self):
        level = StockLevel(current_quantity=40, max_quantity=100)
        assert level.percent_full == 40.0

    def test_negative_current_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            StockLevel(current_quantity=-1, max_quantity=100)

    def test_current_above_max_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed maximum of 100"):
            StockLevel(current_quantity=101, max_quantity=100)

    def test_zero_max_is_empty(self):
        assert StockLevel(current_quantity=0, max_quantity=0).percent_full == 0.0


class TestTargetFor:

    def test_reservation(self):
        assert StockLevel(10, 100).target_for(-3) == 7

    def test_reservation_to_exactly_zero(self):
        assert StockLevel(3, 100).target_for(-3) == 0

    def test_reservation_beyond_available(self):
        with pytest.raises(InsufficientStockError) as exc_info:
            StockLevel(2, 100).target_for(-5)
        assert exc_info.value.requested == 5
        assert exc_info.value.available == 2
        assert "need 5, have 2 available" in str(exc_info.value)

    def test_release_beyond_max_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed maximum"):
            StockLevel(99, 100).target_for(5)


class TestReplenished:

    def test_adds_amount(self):
        assert StockLevel(50, 100).replenished(3) == 53

    def test_caps_at_max(self):
        assert StockLevel(99, 100).replenished(3) == 100

    def test_full_stays_full(self):
        assert StockLevel(100, 100).replenished(3) == 100

    def test_non_positive_amount_rejected(self):
        with pytest.raises(ValidationError):
            StockLevel(50, 100).replenished(0)


class TestWithQuantity:

    def test_sets_quantity_and_timestamp(self):
        level = StockLevel(50, 100).with_quantity(20)
        assert level.current_quantity == 20
        assert level.updated_at is not None

    def test_rejects_out_of_range(self):
        with pytest.raises(ValidationError):
            StockLevel(50, 100).with_quantity(150)

    def test_rejects_non_integer(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            StockLevel(50, 100).with_quantity(2.5)
