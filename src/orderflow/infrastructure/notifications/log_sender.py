"""EmailSender that only logs, for local runs without an SMTP server."""

from __future__ import annotations

import logging

from orderflow.application.notifications import EmailSender, MailResult

logger = logging.getLogger(__name__)


class LoggingEmailSender(EmailSender):

    def send_mail(self, to: str, subject: str, html: str) -> MailResult:
        logger.info("E-mail not sent (no SMTP host configured): to=%s subject=%r", to, subject)
        logger.debug("E-mail body for %s:\n%s", to, html)
        return MailResult(ok=True)
