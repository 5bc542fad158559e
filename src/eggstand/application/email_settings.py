"""Application service: notification email settings."""

from __future__ import annotations

from eggstand.domain.exceptions import ValidationError
from eggstand.domain.model.email_settings import EmailSettings
from eggstand.domain.repository.farm_repository import EmailSettingsRepository


class EmailSettingsService:

    def __init__(self, settings_repo: EmailSettingsRepository) -> None:
        self._settings_repo = settings_repo

    def get(self) -> EmailSettings:
        """Stored settings, or defaults (port 587, everything else blank)."""
        return self._settings_repo.get() or EmailSettings()

    def update(
        self,
        smtp_host: str | None = None,
        smtp_port: int | None = None,
        smtp_user: str | None = None,
        smtp_password: str | None = None,
        notification_email: str | None = None,
    ) -> EmailSettings:
        settings = self.get()
        if smtp_port is not None:
            if not 0 < smtp_port < 65536:
                raise ValidationError(f"Invalid SMTP port: {smtp_port}")
            settings.smtp_port = smtp_port
        if smtp_host is not None:
            settings.smtp_host = smtp_host.strip()
        if smtp_user is not None:
            settings.smtp_user = smtp_user.strip()
        if smtp_password is not None:
            settings.smtp_password = smtp_password
        if notification_email is not None:
            settings.notification_email = notification_email.strip()
        self._settings_repo.save(settings)
        return settings
