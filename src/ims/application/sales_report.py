"""Application service: Sales Report use case (query).

Only Delivered orders count as sales.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ims.domain.model.order import OrderStatus
from ims.domain.repository.order_repository import OrderRepository


@dataclass(frozen=True)
class SalesReportDTO:
    year: int | None
    products_sold: dict[str, int]
    monthly_sales: list[Decimal]  # index 0 = January
    annual_sales: Decimal


class SalesReportHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, year: int | None = None) -> SalesReportDTO:
        products_sold: dict[str, int] = {}
        monthly = [Decimal("0")] * 12

        for order in self._order_repo.list_all():
            if order.status != OrderStatus.DELIVERED:
                continue
            if year is not None and order.date_ordered.year != year:
                continue
            for item in order.items:
                products_sold[item.product_name] = (
                    products_sold.get(item.product_name, 0) + item.quantity.value
                )
            monthly[order.date_ordered.month - 1] += order.total.amount

        return SalesReportDTO(
            year=year,
            products_sold=products_sold,
            monthly_sales=monthly,
            annual_sales=sum(monthly, Decimal("0")),
        )
