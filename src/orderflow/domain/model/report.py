"""Sales report snapshot and its audit record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class TopProduct:
    product_id: str | None
    code: str
    name: str
    units_sold: int
    revenue: Decimal


@dataclass(frozen=True)
class ReportSnapshot:
    generated_at: datetime
    period_start: datetime
    period_end: datetime
    total_sales: Decimal
    total_orders: int
    total_units_sold: int
    sales_today: Decimal
    sales_week: Decimal
    sales_month: Decimal
    orders_today: int
    orders_week: int
    orders_month: int
    top_products: tuple[TopProduct, ...]
    sales_by_category: dict[str, Decimal]
    type: str = "snapshot"

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready copy: timestamps in ISO format, money as strings."""
        return {
            "type": self.type,
            "generated_at": self.generated_at.isoformat(),
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "total_sales": str(self.total_sales),
            "total_orders": self.total_orders,
            "total_units_sold": self.total_units_sold,
            "sales_today": str(self.sales_today),
            "sales_week": str(self.sales_week),
            "sales_month": str(self.sales_month),
            "orders_today": self.orders_today,
            "orders_week": self.orders_week,
            "orders_month": self.orders_month,
            "top_products": [
                {
                    "product_id": p.product_id,
                    "code": p.code,
                    "name": p.name,
                    "units_sold": p.units_sold,
                    "revenue": str(p.revenue),
                }
                for p in self.top_products
            ],
            "sales_by_category": {
                category: str(amount) for category, amount in self.sales_by_category.items()
            },
        }


@dataclass
class ReportRecord:
    """Persisted audit copy of a generated report."""

    type: str
    payload: dict[str, Any]
    created_at: datetime
    id: str | None = None
