"""Application service: Generate Invoice use case.

Same commit as Create Order, plus an invoice built from the committed
order and an "invoice ready" e-mail handed to the post-commit notifier.
The handler does not wait for the e-mail: whatever happens to it, the
order stays committed and the response is unchanged.
"""

from __future__ import annotations

import logging
import random

from orderflow.application.dto import (
    CheckoutRequest,
    InvoiceResultDTO,
    invoice_to_dto,
    order_to_dto,
)
from orderflow.application.notifications import PostCommitNotifier, invoice_notification
from orderflow.application.order_commit import OrderCommitter
from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.invoice import Invoice, build_invoice_number
from orderflow.domain.model.order import Order

logger = logging.getLogger(__name__)


class GenerateInvoiceHandler:

    def __init__(
        self,
        committer: OrderCommitter,
        notifier: PostCommitNotifier,
        base_url: str,
        rng: random.Random | None = None,
    ) -> None:
        self._committer = committer
        self._notifier = notifier
        self._base_url = base_url
        self._rng = rng or random.Random()

    def handle(self, request: CheckoutRequest) -> InvoiceResultDTO:
        if request.user_id is None and (
            request.buyer is None or not request.buyer.name or not request.buyer.email
        ):
            raise ValidationError("Provide userId or a user object with name and email")

        clock = self._committer.clock
        number = build_invoice_number(clock(), self._rng)
        order = self._committer.commit(request, invoice_number=number)
        invoice = Invoice.from_order(order, number=number, issued_at=clock())

        self._notify(order, invoice)
        return InvoiceResultDTO(order=order_to_dto(order), invoice=invoice_to_dto(invoice))

    def _notify(self, order: Order, invoice: Invoice) -> None:
        buyer = invoice.buyer
        if buyer is None or not buyer.email:
            return
        notification = invoice_notification(
            email=buyer.email,
            buyer_name=buyer.display_name,
            invoice_number=invoice.number,
            order_key=order.key or "",
            base_url=self._base_url,
        )
        try:
            self._notifier.submit(notification)
        except Exception:
            # The order is committed; a notification problem must not change that.
            logger.exception("Could not schedule invoice e-mail for order %s", order.code)
