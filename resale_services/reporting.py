"""
Period reporting - profit & loss and tax summary over recorded sales and expenses.

Pure aggregation: callers pass the SaleRecords and ExpenseAllocations they
loaded from storage; nothing here touches storage itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType

from resale_engines.tax import calculate_federal_tax_estimate
from resale_kernel.domain.money import Numeric, round_money
from resale_kernel.logging_config import get_logger
from resale_kernel.validation import validate_date_range
from resale_services.expense_service import ExpenseAllocation
from resale_services.sale_service import SaleRecord

logger = get_logger("services.reporting")

_ZERO = Decimal("0.00")


@dataclass(frozen=True)
class PeriodSummary:
    """Totals for a reporting period."""

    start: date | None
    end: date | None
    sale_count: int
    gross_revenue: Decimal
    platform_fees: Decimal
    promotion_discounts: Decimal
    sales_profit: Decimal
    expenses_by_bucket: Mapping[str, Decimal] = field(default_factory=dict)
    total_expenses: Decimal = _ZERO
    net_income: Decimal = _ZERO
    federal_tax_estimate: Decimal = _ZERO
    jurisdictional_liability: Decimal = _ZERO

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "expenses_by_bucket", MappingProxyType(dict(self.expenses_by_bucket))
        )


def _in_period(day: date, start: date | None, end: date | None) -> bool:
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def summarize_period(
    sales: Iterable[SaleRecord],
    expenses: Iterable[ExpenseAllocation],
    federal_rate: Numeric,
    start: date | None = None,
    end: date | None = None,
) -> PeriodSummary:
    """
    Summarize sales and expenses dated within [start, end] (inclusive,
    either bound optional).

    The federal estimate is taken on net income (sales profit minus total
    expenses), so a loss period produces a negative estimate.  The
    jurisdictional liability is the sum of per-sale liabilities and may
    also be negative.

    Raises:
        ValidationError: if start is after end.
    """
    validate_date_range(start, end)

    period_sales = [s for s in sales if _in_period(s.sale_date, start, end)]
    period_expenses = [e for e in expenses if _in_period(e.expense_date, start, end)]

    gross = fees = discounts = profit = liability = _ZERO
    for sale in period_sales:
        gross += sale.breakdown.gross_revenue
        fees += sale.breakdown.platform_fees
        discounts += sale.breakdown.promotion_discount
        profit += sale.breakdown.profit
        liability += sale.jurisdictional_liability

    by_bucket: dict[str, Decimal] = {}
    total_expenses = _ZERO
    for expense in period_expenses:
        for name, value in expense.buckets.items():
            by_bucket[name] = by_bucket.get(name, _ZERO) + value
        total_expenses += expense.amount

    net_income = round_money(profit - total_expenses)
    summary = PeriodSummary(
        start=start,
        end=end,
        sale_count=len(period_sales),
        gross_revenue=round_money(gross),
        platform_fees=round_money(fees),
        promotion_discounts=round_money(discounts),
        sales_profit=round_money(profit),
        expenses_by_bucket=by_bucket,
        total_expenses=round_money(total_expenses),
        net_income=net_income,
        federal_tax_estimate=calculate_federal_tax_estimate(net_income, federal_rate),
        jurisdictional_liability=round_money(liability),
    )

    logger.info("period_summarized", extra={
        "start": start,
        "end": end,
        "sale_count": summary.sale_count,
        "expense_count": len(period_expenses),
        "net_income": str(net_income),
    })
    return summary
