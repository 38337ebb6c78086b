"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import partial

from orderflow.application.add_product import AddProductHandler
from orderflow.application.calculate_order import CalculateOrderHandler
from orderflow.application.create_order import CreateOrderHandler
from orderflow.application.generate_invoice import GenerateInvoiceHandler
from orderflow.application.generate_report import GenerateReportHandler, local_now
from orderflow.application.notifications import EmailSender
from orderflow.application.order_commit import OrderCommitter, UnitOfWorkFactory
from orderflow.application.show_order import ListOrdersHandler, ShowOrderHandler, TopOrdersHandler
from orderflow.domain.service.order_code_allocator import OrderCodeAllocator
from orderflow.domain.service.pricing import PricingEngine, PricingPolicy, ShippingPolicy
from orderflow.infrastructure.config import Settings
from orderflow.infrastructure.notifications.executor_notifier import ExecutorNotifier
from orderflow.infrastructure.notifications.log_sender import LoggingEmailSender
from orderflow.infrastructure.notifications.smtp_sender import SmtpEmailSender
from orderflow.infrastructure.persistence.json_sequence_counter import JsonSequenceCounter
from orderflow.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def unit_of_work_factory(settings: Settings) -> UnitOfWorkFactory:
    return partial(JsonUnitOfWork, settings.data_dir)


def pricing_engine(settings: Settings) -> PricingEngine:
    return PricingEngine(
        PricingPolicy(
            tax_rate=settings.default_tax_rate,
            currency=settings.default_currency,
            shipping=ShippingPolicy(
                base=settings.base_shipping_fee,
                per_unit=settings.per_item_shipping_fee,
                maximum=settings.max_shipping_fee,
            ),
        )
    )


def order_committer(settings: Settings) -> OrderCommitter:
    counter = JsonSequenceCounter(settings.data_dir / "counters.json")
    return OrderCommitter(
        uow_factory=unit_of_work_factory(settings),
        codes=OrderCodeAllocator(counter),
        engine=pricing_engine(settings),
    )


def email_sender(settings: Settings) -> EmailSender:
    if not settings.smtp_host:
        return LoggingEmailSender()
    return SmtpEmailSender(
        host=settings.smtp_host,
        port=settings.smtp_port,
        user=settings.smtp_user,
        password=settings.smtp_password,
        sender=settings.email_from,
        secure=settings.smtp_secure,
        timeout=settings.smtp_timeout,
    )


def notifier(settings: Settings) -> ExecutorNotifier:
    return ExecutorNotifier(email_sender(settings), max_workers=settings.notify_workers)


# --- Handlers -----------------------------------------------------------------


def calculate_order_handler(settings: Settings) -> CalculateOrderHandler:
    return CalculateOrderHandler(unit_of_work_factory(settings), pricing_engine(settings))


def create_order_handler(settings: Settings) -> CreateOrderHandler:
    return CreateOrderHandler(order_committer(settings))


def generate_invoice_handler(
    settings: Settings, post_commit: ExecutorNotifier
) -> GenerateInvoiceHandler:
    return GenerateInvoiceHandler(
        committer=order_committer(settings),
        notifier=post_commit,
        base_url=settings.app_base_url,
    )


def generate_report_handler(settings: Settings) -> GenerateReportHandler:
    return GenerateReportHandler(
        unit_of_work_factory(settings),
        clock=partial(local_now, settings.report_timezone),
    )


def show_order_handler(settings: Settings) -> ShowOrderHandler:
    return ShowOrderHandler(unit_of_work_factory(settings))


def list_orders_handler(settings: Settings) -> ListOrdersHandler:
    return ListOrdersHandler(unit_of_work_factory(settings))


def top_orders_handler(settings: Settings) -> TopOrdersHandler:
    return TopOrdersHandler(unit_of_work_factory(settings))


def add_product_handler(settings: Settings) -> AddProductHandler:
    return AddProductHandler(unit_of_work_factory(settings))
