"""SMTP implementation of EmailSender."""

from __future__ import annotations

import logging
import re
import smtplib
from email.message import EmailMessage

from orderflow.application.notifications import EmailSender, MailResult

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_SEPARATORS = re.compile(r"[,;\n]")


def split_recipients(to: str) -> list[str]:
    """Split a recipient list on commas, semicolons or newlines."""
    return [part.strip() for part in _SEPARATORS.split(to or "") if part.strip()]


class SmtpEmailSender(EmailSender):
    """Sends one message per connection.

    ``secure`` opens an implicit-TLS connection (port 465 style); otherwise
    STARTTLS is used when the server offers it.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        user: str | None = None,
        password: str | None = None,
        sender: str = "no-reply@localhost",
        secure: bool = False,
        timeout: float = 20.0,
    ) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._sender = sender
        self._secure = secure
        self._timeout = timeout

    def send_mail(self, to: str, subject: str, html: str) -> MailResult:
        recipients = split_recipients(to)
        if not recipients or not all(_EMAIL_PATTERN.match(r) for r in recipients):
            logger.warning("Not sending %r: invalid recipient %r", subject, to)
            return MailResult(ok=False, error="Invalid recipient")
        if "\r" in subject or "\n" in subject:
            logger.warning("Not sending to %s: line break in subject", to)
            return MailResult(ok=False, error="Invalid subject")

        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = ", ".join(recipients)
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable mail client.")
        message.add_alternative(html, subtype="html")

        try:
            with self._connect() as client:
                if self._user:
                    client.login(self._user, self._password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send %r to %s via %s: %s", subject, to, self._host, exc)
            return MailResult(ok=False, error=str(exc))

        logger.info("Sent %r to %s", subject, ", ".join(recipients))
        return MailResult(ok=True)

    def _connect(self) -> smtplib.SMTP:
        if self._secure:
            return smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout)
        client = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
        try:
            client.ehlo()
            if client.has_extn("starttls"):
                client.starttls()
                client.ehlo()
        except BaseException:
            client.close()
            raise
        return client
