"""SMTP implementation of OrderNotifier.

Settings are re-read on every send so changes made through
``eggstand email set`` apply without a restart.
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Callable

from eggstand.application.notifications import OrderNotifier
from eggstand.domain.model.email_settings import EmailSettings
from eggstand.domain.model.order import Order, OrderDetail
from eggstand.domain.repository.farm_repository import EmailSettingsRepository

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 10


def render_order_email(order: Order, detail: OrderDetail, settings: EmailSettings) -> EmailMessage:
    total = detail.line_total
    message = EmailMessage()
    message["Subject"] = f"New Order: #{order.order_number}"
    message["From"] = settings.smtp_user or settings.notification_email
    message["To"] = settings.notification_email
    message.set_content(
        f"New order {order.order_number} from {order.customer_name}: "
        f"{detail.qty} x {detail.product} = {total}"
    )
    message.add_alternative(
        f"""\
<h1>New Order Received</h1>
<p><strong>Order #:</strong> {order.order_number}</p>
<p><strong>Date:</strong> {order.created_at:%Y-%m-%d %H:%M}</p>
<p><strong>Customer:</strong> {order.customer_name}</p>
<p><strong>Email:</strong> {order.email}</p>
<p><strong>Phone:</strong> {order.phone}</p>
<h2>Order Details</h2>
<table border="1" cellpadding="5" style="border-collapse: collapse;">
  <tr><th>Product</th><th>Quantity</th><th>Price</th><th>Total</th></tr>
  <tr><td>{detail.product}</td><td>{detail.qty}</td><td>{detail.sale}</td><td>{total}</td></tr>
</table>
<p><strong>Total Amount:</strong> {total}</p>
""",
        subtype="html",
    )
    return message


class SmtpOrderNotifier(OrderNotifier):

    def __init__(
        self,
        settings_repo: EmailSettingsRepository,
        smtp_factory: Callable[..., smtplib.SMTP] | None = None,
    ) -> None:
        self._settings_repo = settings_repo
        self._smtp_factory = smtp_factory

    def notify(self, order: Order, detail: OrderDetail) -> None:
        settings = self._settings_repo.get()
        if settings is None or not settings.is_configured:
            logger.info("Email notification skipped: email settings not fully configured")
            return

        message = render_order_email(order, detail, settings)
        with self._connect(settings) as smtp:
            if settings.smtp_user:
                smtp.login(settings.smtp_user, settings.smtp_password)
            smtp.send_message(message)
        logger.info(
            "Order notification for %s sent to %s",
            order.order_number, settings.notification_email,
        )

    def _connect(self, settings: EmailSettings) -> smtplib.SMTP:
        if self._smtp_factory is not None:
            return self._smtp_factory(settings.smtp_host, settings.smtp_port)
        if settings.uses_ssl:
            return smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, timeout=SMTP_TIMEOUT_SECONDS)
        smtp = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=SMTP_TIMEOUT_SECONDS)
        try:
            smtp.starttls()
        except smtplib.SMTPException:
            smtp.close()
            raise
        return smtp
