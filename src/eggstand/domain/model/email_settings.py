"""SMTP settings used for new-order notifications."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SMTP_PORT = 587


@dataclass
class EmailSettings:
    smtp_host: str = ""
    smtp_port: int = DEFAULT_SMTP_PORT
    smtp_user: str = ""
    smtp_password: str = ""
    notification_email: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host and self.notification_email)

    @property
    def uses_ssl(self) -> bool:
        return self.smtp_port == 465
