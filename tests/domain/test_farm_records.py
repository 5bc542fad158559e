"""Unit tests for coops, harvests and expenses."""

from datetime import date
from decimal import Decimal

import pytest

from eggstand.domain.exceptions import ValidationError
from eggstand.domain.model.coop import Coop
from eggstand.domain.model.email_settings import EmailSettings
from eggstand.domain.model.expense import Expense
from eggstand.domain.model.harvest import Harvest
from eggstand.domain.model.value_objects import Money


class TestCoop:

    def test_create(self):
        coop = Coop.create("1", " North ", num_birds=12, has_rooster=True)
        assert coop.name == "North"
        assert coop.num_birds == 12
        assert coop.has_rooster

    def test_name_required(self):
        with pytest.raises(ValidationError, match="name is required"):
            Coop.create("1", "")

    def test_negative_birds_rejected(self):
        coop = Coop.create("1", "North")
        with pytest.raises(ValidationError, match="cannot be negative"):
            coop.update(num_birds=-1)


class TestHarvest:

    def test_negative_eggs_rejected(self):
        with pytest.raises(ValidationError):
            Harvest(id="1", coop_id="1", eggs_collected=-2, collection_date=date(2024, 5, 1))

    def test_update_only_given_fields(self):
        h = Harvest(id="1", coop_id="1", eggs_collected=10, collection_date=date(2024, 5, 1))
        h.update(notes="cracked two")
        assert h.eggs_collected == 10
        assert h.notes == "cracked two"


class TestExpense:

    def test_total_is_quantity_times_cost(self):
        e = Expense.create("1", "Feed", Decimal("3"), Money.of("12.50"), date(2024, 5, 1))
        assert e.total_cost == Money.of("37.50")

    def test_total_recomputed_on_update(self):
        e = Expense.create("1", "Feed", Decimal("3"), Money.of("12.50"), date(2024, 5, 1))
        e.update(quantity=Decimal("2"))
        assert e.total_cost == Money.of("25.00")
        e.update(cost=Money.of("0.333"))
        assert e.total_cost.amount == Decimal("0.67")

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Expense.create("1", "Feed", Decimal("-1"), Money.of("1"), date(2024, 5, 1))


class TestEmailSettings:

    def test_defaults_not_configured(self):
        settings = EmailSettings()
        assert settings.smtp_port == 587
        assert not settings.is_configured
        assert not settings.uses_ssl

    def test_configured_with_host_and_recipient(self):
        settings = EmailSettings(smtp_host="smtp.example.com", notification_email="me@example.com")
        assert settings.is_configured

    def test_port_465_is_ssl(self):
        assert EmailSettings(smtp_port=465).uses_ssl
