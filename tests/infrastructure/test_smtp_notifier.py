"""Tests for the SMTP order notifier (no network: the SMTP client is faked)."""

import pytest

from eggstand.domain.model.email_settings import EmailSettings
from eggstand.domain.model.order import Order, OrderDetail
from eggstand.domain.model.value_objects import Money
from eggstand.infrastructure.notifications.smtp_notifier import (
    SmtpOrderNotifier,
    render_order_email,
)
from tests.fakes import FakeEmailSettingsRepository

CONFIGURED = EmailSettings(
    smtp_host="smtp.example.com",
    smtp_port=587,
    smtp_user="stand@example.com",
    smtp_password="secret",
    notification_email="owner@example.com",
)


class FakeSmtp:

    instances: list["FakeSmtp"] = []

    def __init__(self, host, port):
        self.host, self.port = host, port
        self.logins = []
        self.messages = []
        FakeSmtp.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user, password):
        self.logins.append((user, password))

    def send_message(self, message):
        self.messages.append(message)


@pytest.fixture(autouse=True)
def _reset_smtp():
    FakeSmtp.instances = []


def _order():
    detail = OrderDetail(1, "Carton of eggs", 3, Money.of("10.00"), Money.of("7.50"))
    order = Order.create("ORD-AB12CD", "Ann", "ann@example.com", "555-0100", 3, detail)
    return order, detail


def test_render_subject_and_body():
    order, detail = _order()
    message = render_order_email(order, detail, CONFIGURED)
    assert message["Subject"] == "New Order: #ORD-AB12CD"
    assert message["To"] == "owner@example.com"
    html = message.get_body(preferencelist=("html",)).get_content()
    assert "Ann" in html
    assert "$30.00" in html


def test_sends_when_configured():
    order, detail = _order()
    SmtpOrderNotifier(FakeEmailSettingsRepository(CONFIGURED), smtp_factory=FakeSmtp).notify(order, detail)

    [smtp] = FakeSmtp.instances
    assert (smtp.host, smtp.port) == ("smtp.example.com", 587)
    assert smtp.logins == [("stand@example.com", "secret")]
    assert len(smtp.messages) == 1


def test_skips_when_not_configured():
    order, detail = _order()
    SmtpOrderNotifier(FakeEmailSettingsRepository(), smtp_factory=FakeSmtp).notify(order, detail)
    assert FakeSmtp.instances == []


def test_no_login_without_user():
    order, detail = _order()
    settings = EmailSettings(smtp_host="localhost", smtp_port=25, notification_email="o@example.com")
    SmtpOrderNotifier(FakeEmailSettingsRepository(settings), smtp_factory=FakeSmtp).notify(order, detail)
    assert FakeSmtp.instances[0].logins == []
