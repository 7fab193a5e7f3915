"""Outbound email over SMTP (activation codes)."""

import logging
import smtplib
from email.message import EmailMessage
from typing import TYPE_CHECKING

from app.core.exceptions import MailDeliveryError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class Mailer:
    """Sends plain-text mail. With MAIL_ENABLED off, messages are logged instead."""

    def __init__(self, settings: "Settings") -> None:
        self._enabled = settings.MAIL_ENABLED
        self._host = settings.MAIL_HOST
        self._port = settings.MAIL_PORT
        self._username = settings.MAIL_USERNAME
        self._password = (
            settings.MAIL_PASSWORD.get_secret_value() if settings.MAIL_PASSWORD else None
        )
        self._sender = settings.MAIL_FROM
        self._timeout = settings.MAIL_TIMEOUT_SEC

    def send_mail(self, to: str, subject: str, body: str) -> None:
        """Raises MailDeliveryError if the SMTP server is unreachable or rejects the message."""
        if not self._enabled:
            logger.info("Mail disabled; not sending %r to %s", subject, to)
            return

        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as conn:
                if self._username and self._password:
                    conn.starttls()
                    conn.login(self._username, self._password)
                conn.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("SMTP delivery to %s failed: %s", to, e)
            raise MailDeliveryError(cause=e) from e
        logger.info("Mail sent: subject=%r to=%s", subject, to)

    def send_activation_code(self, to: str, username: str, code: str) -> None:
        body = (
            f"Hello {username},\n\n"
            f"Your activation code is: {code}\n\n"
            "Enter this code to activate your account.\n"
        )
        self.send_mail(to, "Activate your account", body)
