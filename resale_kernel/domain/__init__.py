"""
Pure domain layer.

Value objects and money primitives with NO dependencies on:
- Storage
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from resale_kernel.domain.money import (
    CENT,
    DEFAULT_ROUNDING,
    MONEY_DECIMAL_PLACES,
    money_from_cents,
    round_money,
    to_cents,
    to_decimal,
)
from resale_kernel.domain.values import (
    LotItem,
    LotWrapper,
    ProfitBreakdown,
    SaleInput,
)

__all__ = [
    "CENT",
    "DEFAULT_ROUNDING",
    "MONEY_DECIMAL_PLACES",
    "LotItem",
    "LotWrapper",
    "ProfitBreakdown",
    "SaleInput",
    "money_from_cents",
    "round_money",
    "to_cents",
    "to_decimal",
]
