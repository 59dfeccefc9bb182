"""
resale_services -- orchestration between request handlers and the engines.

Services validate input with ``resale_kernel.validation``, read rates from a
``resale_config.BusinessConfig``, call the pure engines, and log the result
with request context bound.  They never persist anything.
"""

from resale_services.expense_service import ExpenseAllocation, ExpenseService
from resale_services.reporting import PeriodSummary, summarize_period
from resale_services.sale_service import SaleRecord, SaleService

__all__ = [
    "ExpenseAllocation",
    "ExpenseService",
    "PeriodSummary",
    "SaleRecord",
    "SaleService",
    "summarize_period",
]
