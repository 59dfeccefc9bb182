"""
Values -- Immutable domain value objects for sales and lots.

Responsibility:
    Provides the record types consumed and produced by the financial
    engines: SaleInput, ProfitBreakdown, LotItem and LotWrapper.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    No outward dependencies except resale_kernel.domain.money.

Invariants enforced:
    - Monetary and rate fields are Decimal (floats coerced via str()).
    - All records are frozen; there is no identity beyond caller-supplied ids.
    - A lot carries no price of its own.

Failure modes:
    - ValueError on construction with non-numeric amounts or rates.

Non-goals:
    - Range checks (negative prices, rates outside [0, 1]) are the job of
      resale_kernel.validation, not of these records.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal

from resale_kernel.domain.money import to_decimal


def _coerce_decimals(obj: object) -> None:
    for f in fields(obj):
        object.__setattr__(obj, f.name, to_decimal(getattr(obj, f.name)))


@dataclass(frozen=True, slots=True)
class SaleInput:
    """
    Inputs for a single profit calculation.

    Ephemeral: built per calculation call and never stored.
    """

    sale_price: Decimal
    platform_fee_rate: Decimal
    promotion_rate: Decimal
    shipping_cost: Decimal
    cost_of_goods: Decimal

    def __post_init__(self) -> None:
        _coerce_decimals(self)


@dataclass(frozen=True, slots=True)
class ProfitBreakdown:
    """
    Profit decomposition of a sale.

    Guarantees:
        - Every field is rounded to cents.
        - ``profit`` may be negative (a loss) and is never clamped.
    """

    gross_revenue: Decimal
    platform_fees: Decimal
    promotion_discount: Decimal
    net_revenue: Decimal
    cost_of_goods: Decimal
    shipping_cost: Decimal
    profit: Decimal

    @property
    def is_loss(self) -> bool:
        return self.profit < Decimal("0")


@dataclass(frozen=True, slots=True)
class LotItem:
    """Reference to an inventory item inside a lot, with a quantity."""

    item_id: str
    quantity: int | Decimal | float = 1


@dataclass(frozen=True, slots=True)
class LotWrapper:
    """
    A named bundle of item references.

    Lots are pure groupings, not billable entities: pricing is computed
    from the constituent items' costs elsewhere.
    """

    lot_id: str
    items: tuple[LotItem, ...] = ()
    notes: str | None = None

    @property
    def total_quantity(self) -> int:
        return sum(int(item.quantity) for item in self.items)
