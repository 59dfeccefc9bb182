"""
resale_services.expense_service -- Expense bucket allocation and lot building.

Responsibility:
    Splits business expenses across the configured buckets (by weight via
    the largest-remainder engine, or from explicit per-bucket amounts) and
    builds lot wrappers from raw item references.

Architecture position:
    Services -- orchestration over engines + kernel, no persistence.

Invariants enforced:
    - An ExpenseAllocation's buckets sum exactly to its amount whenever
      at least one bucket has a positive weight.
    - Bucket names must be configured buckets.
    - Recorded buckets are read-only mappings.

Failure modes:
    - ValidationError: negative amounts, unknown buckets, manual splits
      that do not add up, malformed lot items.
    - ConfigurationError: manual splits against a configuration without
      the inventory, operations and other buckets.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from resale_config.schema import BusinessConfig
from resale_engines.expense_split import split_expense_by_bucket
from resale_engines.lots import build_lot_wrapper
from resale_kernel.domain.money import Numeric, round_money
from resale_kernel.domain.values import LotItem, LotWrapper
from resale_kernel.exceptions import ConfigurationError, ValidationError
from resale_kernel.logging_config import LogContext, get_logger
from resale_kernel.validation import (
    validate_expense_splits,
    validate_non_negative,
    validate_required,
)

logger = get_logger("services.expense")

MANUAL_SPLIT_BUCKETS = ("inventory", "operations", "other")


@dataclass(frozen=True)
class ExpenseAllocation:
    """An expense and its per-bucket amounts."""

    expense_id: str
    expense_date: date
    amount: Decimal
    buckets: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "buckets", MappingProxyType(dict(self.buckets)))

    @property
    def allocated_total(self) -> Decimal:
        return sum(self.buckets.values(), Decimal("0.00"))


class ExpenseService:
    """Allocate expenses and build lots against a business configuration."""

    def __init__(self, config: BusinessConfig):
        self._config = config

    def _check_bucket_names(self, names: Sequence[str]) -> None:
        unknown = [n for n in names if n not in self._config.bucket_names]
        if unknown:
            raise ValidationError(
                f"Unknown expense buckets: {', '.join(unknown)}",
                {"unknown": unknown,
                 "allowed_values": list(self._config.bucket_names)},
            )

    def allocate_expense(
        self,
        expense_id: str,
        expense_date: date,
        amount: Numeric,
        weights: Mapping[str, Numeric] | None = None,
    ) -> ExpenseAllocation:
        """
        Split an expense across all configured buckets by weight.

        Buckets missing from ``weights`` get weight zero.  When ``weights``
        is None the configured default weights are used.  If no weight is
        positive every bucket is zero and the expense stays unallocated.
        """
        with LogContext.bind(expense_id=expense_id):
            validate_non_negative(amount, "amount")
            if weights is None:
                weights = self._config.default_split_weights
            else:
                self._check_bucket_names(list(weights))
                for name, weight in weights.items():
                    validate_non_negative(weight, f"weights.{name}")

            ordered = {name: weights.get(name, 0) for name in self._config.bucket_names}
            buckets = split_expense_by_bucket(amount, ordered)
            allocation = ExpenseAllocation(
                expense_id=expense_id,
                expense_date=expense_date,
                amount=round_money(amount),
                buckets=buckets,
            )

            if allocation.allocated_total != allocation.amount:
                logger.warning("expense_unallocated", extra={
                    "amount": str(allocation.amount),
                    "allocated": str(allocation.allocated_total),
                })
            else:
                logger.info("expense_allocated", extra={
                    "amount": str(allocation.amount),
                    "buckets": {k: str(v) for k, v in buckets.items()},
                })
            return allocation

    def record_manual_split(
        self,
        expense_id: str,
        expense_date: date,
        amount: Numeric,
        inventory: Numeric = 0,
        operations: Numeric = 0,
        other: Numeric = 0,
    ) -> ExpenseAllocation:
        """
        Record an expense whose bucket amounts were entered by hand.

        The three amounts must be non-negative and sum to the expense
        within one cent.  Any cent of rounding drift is then re-spread with
        the largest-remainder split, weighted by the entered amounts, so the
        stored buckets sum exactly.  A one-cent gap with every entered
        amount at zero has nothing to weight by and is rejected.
        """
        with LogContext.bind(expense_id=expense_id):
            missing = [n for n in MANUAL_SPLIT_BUCKETS if n not in self._config.bucket_names]
            if missing:
                raise ConfigurationError(
                    f"Manual splits need configured buckets: {', '.join(missing)}"
                )
            validate_non_negative(amount, "amount")
            validate_expense_splits(inventory, operations, other, amount)

            entered = {"inventory": inventory, "operations": operations, "other": other}
            buckets = {k: round_money(v) for k, v in entered.items()}
            if sum(buckets.values()) != round_money(amount):
                # Nothing to weight the drift by
                if not any(v > 0 for v in buckets.values()):
                    raise ValidationError(
                        "Expense splits must sum to total amount",
                        {**entered, "amount": amount,
                         "total": sum(buckets.values())},
                    )
                buckets = split_expense_by_bucket(amount, entered)

            ordered = {
                name: buckets.get(name, Decimal("0.00"))
                for name in self._config.bucket_names
            }
            logger.info("expense_split_recorded", extra={
                "amount": str(round_money(amount)),
                "buckets": {k: str(v) for k, v in ordered.items()},
            })
            return ExpenseAllocation(
                expense_id=expense_id,
                expense_date=expense_date,
                amount=round_money(amount),
                buckets=ordered,
            )

    def build_lot(
        self,
        lot_id: str,
        items: Sequence[Mapping[str, Any]],
        notes: str | None = None,
    ) -> LotWrapper:
        """Build a lot from raw ``{"item_id", "quantity"}`` mappings."""
        with LogContext.bind(lot_id=lot_id):
            for item in items:
                validate_required(item, ["item_id"])
            lot = build_lot_wrapper(
                lot_id,
                [LotItem(item_id=i["item_id"], quantity=i.get("quantity", 1)) for i in items],
                notes=notes,
            )
            logger.info("lot_built", extra={
                "item_count": len(lot.items),
                "total_quantity": lot.total_quantity,
            })
            return lot
