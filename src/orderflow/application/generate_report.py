"""Application service: Generate Report use case.

Builds a sales snapshot from every order and product.  When asked to,
stores a copy as an audit record.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

from orderflow.application.errors import classified_failures
from orderflow.application.order_commit import UnitOfWorkFactory
from orderflow.domain.model.report import ReportRecord, ReportSnapshot
from orderflow.domain.service.sales_report import SalesReportAggregator

logger = logging.getLogger(__name__)


def local_now(zone_name: str | None = None) -> datetime:
    """Current time in *zone_name*, or in the system's local zone.

    A named zone carries its daylight-saving rules, so report windows
    that span a clock change keep the right offset.  Without one the
    system offset of this moment is used for the whole report.
    """
    if zone_name:
        return datetime.now(ZoneInfo(zone_name))
    return datetime.now().astimezone()


class GenerateReportHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        aggregator: SalesReportAggregator | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._uow_factory = uow_factory
        self._aggregator = aggregator or SalesReportAggregator()
        self._clock = clock

    def handle(self, save: bool = True) -> ReportSnapshot:
        with classified_failures(logger, "generate the report"):
            with self._uow_factory() as uow:
                orders = uow.orders.list_all()
                products = uow.products.list_all()
                now = self._clock()
                snapshot = self._aggregator.build(orders, products, now)
                logger.info(
                    "Report built from %d orders and %d products", len(orders), len(products)
                )
                if save:
                    uow.reports.save(
                        ReportRecord(type=snapshot.type, payload=snapshot.to_payload(), created_at=now)
                    )
                    uow.commit()
        return snapshot
