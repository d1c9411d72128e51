"""Outbound mail used for password reset links.

A single mailer is built at startup and handed to the services that need it.
"""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from noteboard.core.settings import Settings

logger = logging.getLogger(__name__)

__all__ = ["Mailer", "LogMailer", "SmtpMailer", "MailDeliveryError", "build_mailer"]


class MailDeliveryError(RuntimeError):
    """Raised when a message could not be handed to the mail server."""


class Mailer:
    """Interface for sending plain-text mail."""

    def send(self, to: str, subject: str, body: str) -> None:
        raise NotImplementedError


class LogMailer(Mailer):
    """Mailer that only logs messages; used when no SMTP host is configured."""

    def send(self, to: str, subject: str, body: str) -> None:
        logger.info("Mail to %s (%s):\n%s", to, subject, body)


class SmtpMailer(Mailer):
    """Mailer delivering through an SMTP relay."""

    def __init__(self, settings: Settings) -> None:
        self.host = settings.smtp_host or "localhost"
        self.port = settings.smtp_port
        self.username = settings.smtp_username
        self.password = settings.smtp_password
        self.use_tls = settings.smtp_use_tls
        self.sender = settings.mail_from

    def send(self, to: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as err:
            raise MailDeliveryError(str(err)) from err


def build_mailer(settings: Settings) -> Mailer:
    """Return the mailer matching the configured transport."""
    if settings.smtp_host:
        return SmtpMailer(settings)
    logger.warning("SMTP_HOST not set; password reset mail will only be logged")
    return LogMailer()
