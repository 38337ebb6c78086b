"""Post-commit notification ports.

The order flow hands a notification to a ``PostCommitNotifier`` once the
unit of work has committed and moves on.  Delivery happens elsewhere;
its outcome never reaches the caller and never touches committed state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from html import escape


@dataclass(frozen=True)
class MailResult:
    ok: bool
    error: str | None = None


class EmailSender(ABC):

    @abstractmethod
    def send_mail(self, to: str, subject: str, html: str) -> MailResult:
        """Deliver one message.  Reports failure in the result, never raises."""


@dataclass(frozen=True)
class EmailNotification:
    to: str
    subject: str
    html: str


class PostCommitNotifier(ABC):

    @abstractmethod
    def submit(self, notification: EmailNotification) -> None:
        """Schedule delivery and return immediately."""


INVOICE_SUBJECT = "Your invoice is ready"


def invoice_notification(
    email: str,
    buyer_name: str,
    invoice_number: str,
    order_key: str,
    base_url: str,
) -> EmailNotification:
    """Compose the "invoice ready" e-mail, with every interpolated value escaped."""
    link = f"{base_url.rstrip('/')}/confirmacion.html?orderId={order_key}"
    html = (
        f"<p>Hello {escape(buyer_name or email)},</p>\n"
        f"<p>Your invoice #{escape(invoice_number)} is ready.</p>\n"
        f'<p>You can view it here: <a href="{escape(link, quote=True)}">View invoice</a></p>'
    )
    return EmailNotification(to=email, subject=INVOICE_SUBJECT, html=html)
