"""CLI commands for order notification email settings."""

from __future__ import annotations

import click

from eggstand.application.email_settings import EmailSettingsService
from eggstand.domain.exceptions import DomainException
from eggstand.infrastructure.bootstrap import email_settings_repository
from eggstand.infrastructure.cli.errors import to_click_error


@click.command("show")
def email_show() -> None:
    """Show notification settings (password hidden)."""
    settings = EmailSettingsService(email_settings_repository()).get()
    click.echo(f"SMTP host:    {settings.smtp_host or '-'}")
    click.echo(f"SMTP port:    {settings.smtp_port}")
    click.echo(f"SMTP user:    {settings.smtp_user or '-'}")
    click.echo(f"Password:     {'set' if settings.smtp_password else '-'}")
    click.echo(f"Notify:       {settings.notification_email or '-'}")
    if not settings.is_configured:
        click.echo("Notifications are disabled until host and recipient are set.")


@click.command("set")
@click.option("--host", default=None)
@click.option("--port", type=int, default=None, help="465 uses SSL, anything else STARTTLS.")
@click.option("--user", default=None)
@click.option("--password", default=None)
@click.option("--notify", "notification_email", default=None, help="Recipient of new-order emails.")
def email_set(
    host: str | None,
    port: int | None,
    user: str | None,
    password: str | None,
    notification_email: str | None,
) -> None:
    """Update notification settings."""
    try:
        EmailSettingsService(email_settings_repository()).update(
            smtp_host=host,
            smtp_port=port,
            smtp_user=user,
            smtp_password=password,
            notification_email=notification_email,
        )
    except DomainException as exc:
        raise to_click_error(exc)
    click.echo("Email settings saved.")
