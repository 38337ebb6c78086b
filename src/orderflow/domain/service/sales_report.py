"""Domain service: Sales Report aggregation.

A stateless full scan over every order and every product.  There is no
incremental path; the cost is O(orders x lines) per call, so reports are
built on demand only.

Windows are anchored to *now* in its own timezone:
- day:   today at 00:00
- week:  Monday at 00:00 (Sunday closes the week)
- month: the 1st at 00:00
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from orderflow.domain.model.numeric import round_money
from orderflow.domain.model.order import Order
from orderflow.domain.model.product import Product
from orderflow.domain.model.report import ReportSnapshot, TopProduct
from orderflow.domain.model.value_objects import is_canonical_id

TOP_PRODUCTS = 10
UNKNOWN_PRODUCT = "Unknown product"
UNKNOWN_CATEGORY = "other"


def _midnight(now: datetime, day: date) -> datetime:
    # Localised per date, so a zone with DST rules gives each midnight its own offset.
    return datetime.combine(day, time.min, tzinfo=now.tzinfo)


def start_of_day(now: datetime) -> datetime:
    return _midnight(now, now.date())


def start_of_week(now: datetime) -> datetime:
    return _midnight(now, now.date() - timedelta(days=now.weekday()))


def start_of_month(now: datetime) -> datetime:
    return _midnight(now, now.date().replace(day=1))


@dataclass
class _ProductSales:
    product_id: str
    code: str
    name: str
    units_sold: int = 0
    revenue: Decimal = Decimal("0")


class SalesReportAggregator:

    def __init__(self, top_limit: int = TOP_PRODUCTS) -> None:
        self._top_limit = top_limit

    def build(
        self,
        orders: Iterable[Order],
        products: Iterable[Product],
        now: datetime,
    ) -> ReportSnapshot:
        today_start = start_of_day(now)
        week_start = start_of_week(now)
        month_start = start_of_month(now)

        catalog = {p.id: p for p in products}

        total_sales = Decimal("0")
        total_orders = 0
        total_units = 0
        sales = {"day": Decimal("0"), "week": Decimal("0"), "month": Decimal("0")}
        counts = {"day": 0, "week": 0, "month": 0}

        product_sales: dict[str, _ProductSales] = {}
        category_revenue: dict[str, Decimal] = {}

        for order in orders:
            total_orders += 1
            order_date = _align(order.created_at, now)
            order_total = order.total.amount
            total_sales += order_total

            for window, start in (
                ("day", today_start),
                ("week", week_start),
                ("month", month_start),
            ):
                if order_date >= start:
                    sales[window] += order_total
                    counts[window] += 1

            for item in order.items:
                pid = item.product_id or "unknown"
                qty = item.quantity.value
                product = catalog.get(pid)

                unit_price = item.unit_price.amount
                if unit_price == 0 and product is not None:
                    unit_price = product.price.amount
                revenue = item.line_total.amount
                if revenue == 0 and unit_price > 0:
                    revenue = round_money(unit_price * qty)

                if product is not None:
                    name = product.name or item.product_name or UNKNOWN_PRODUCT
                    category = product.category or item.category or UNKNOWN_CATEGORY
                    code = "" if product.code is None else str(product.code)
                else:
                    name = item.product_name or UNKNOWN_PRODUCT
                    category = item.category or UNKNOWN_CATEGORY
                    code = "" if item.product_code is None else str(item.product_code)

                total_units += qty

                entry = product_sales.get(pid)
                if entry is None:
                    entry = product_sales[pid] = _ProductSales(pid, code, name)
                entry.units_sold += qty
                entry.revenue += revenue

                category_revenue[category] = category_revenue.get(category, Decimal("0")) + revenue

        # sorted() is stable: ties keep first-encountered order
        ranked = sorted(product_sales.values(), key=lambda p: p.units_sold, reverse=True)
        top = tuple(
            TopProduct(
                product_id=p.product_id if is_canonical_id(p.product_id) else None,
                code=p.code,
                name=p.name,
                units_sold=p.units_sold,
                revenue=round_money(p.revenue),
            )
            for p in ranked[: self._top_limit]
        )

        return ReportSnapshot(
            generated_at=now,
            period_start=month_start,
            period_end=now,
            total_sales=round_money(total_sales),
            total_orders=total_orders,
            total_units_sold=total_units,
            sales_today=round_money(sales["day"]),
            sales_week=round_money(sales["week"]),
            sales_month=round_money(sales["month"]),
            orders_today=counts["day"],
            orders_week=counts["week"],
            orders_month=counts["month"],
            top_products=top,
            sales_by_category={
                category: round_money(amount)
                for category, amount in category_revenue.items()
            },
        )


def _align(moment: datetime, now: datetime) -> datetime:
    """Express *moment* so it can be compared with *now*."""
    if now.tzinfo is None:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone().replace(tzinfo=None)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=now.tzinfo)
    return moment.astimezone(now.tzinfo)
