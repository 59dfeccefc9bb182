"""
Module: resale_engines.expense_split
Responsibility:
    Split an expense amount across weighted buckets (inventory, operations,
    other, ...) so that every bucket is a whole number of cents and the
    buckets add back to the expense exactly.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import resale_kernel.domain.

Invariants enforced:
    - Conservation: sum(split) == round_money(amount), to the cent, for
      every weight vector.
    - Determinism: leftover cents go to the largest fractional shares,
      ties broken by bucket order (first listed wins).
    - Negative weights carry no influence (treated as zero).

Algorithm:
    Largest-remainder (Hamilton) apportionment in integer cents.  Exact
    shares are computed with ``fractions.Fraction`` so no floating or
    Decimal-context rounding can leak into the floors or remainders.

Failure modes:
    - None.  A zero weight total yields all-zero buckets instead of
      dividing by zero.

Usage:
    from resale_engines.expense_split import split_expense

    split_expense("100", [1, 1, 1])
    # [Decimal("33.34"), Decimal("33.33"), Decimal("33.33")]
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from fractions import Fraction

from resale_engines.tracer import traced_engine
from resale_kernel.domain.money import Numeric, money_from_cents, to_cents, to_decimal
from resale_kernel.logging_config import get_logger

logger = get_logger("engines.expense_split")


def _apportion_cents(total_cents: int, weights: Sequence[Fraction]) -> list[int]:
    """Largest-remainder apportionment of a non-negative integer.

    Preconditions:
        - ``total_cents >= 0``; every weight is >= 0 and their sum is > 0.
    Postconditions:
        - Returns one integer per weight and ``sum(result) == total_cents``.
    """
    weight_total = sum(weights, Fraction(0))
    shares = [total_cents * w / weight_total for w in weights]
    floors = [math.floor(s) for s in shares]

    remainder = total_cents - sum(floors)
    # INVARIANT: 0 <= remainder < len(weights)
    by_fraction = sorted(
        range(len(shares)),
        key=lambda i: (-(shares[i] - floors[i]), i),
    )
    for i in by_fraction[:remainder]:
        floors[i] += 1

    return floors


@traced_engine("expense_split", "1.0", fingerprint_fields=("amount", "weights"))
def split_expense(amount: Numeric, weights: Sequence[Numeric]) -> list[Decimal]:
    """
    Split ``amount`` across ``weights`` proportionally, exact to the cent.

    Args:
        amount: Expense amount; rounded to cents first.  May be negative
            (refunds), in which case every bucket is non-positive.
        weights: Relative bucket weights.  Negative weights count as zero.

    Returns:
        One Decimal per weight, in input order, summing to the rounded
        amount.  All zeros when the amount is zero or no weight is positive.
    """
    clamped = [max(Fraction(0), Fraction(to_decimal(w))) for w in weights]
    cents = to_cents(amount)

    if not clamped or sum(clamped) == 0:
        if cents and clamped:
            logger.warning("expense_split_zero_weights", extra={
                "amount": str(amount),
                "bucket_count": len(clamped),
            })
        return [money_from_cents(0) for _ in clamped]

    sign = -1 if cents < 0 else 1
    allocated = _apportion_cents(abs(cents), clamped)

    return [money_from_cents(sign * c) for c in allocated]


def split_expense_by_bucket(
    amount: Numeric,
    bucket_weights: Mapping[str, Numeric],
) -> dict[str, Decimal]:
    """Named-bucket form of split_expense; keeps the mapping's order."""
    names = list(bucket_weights)
    amounts = split_expense(amount, [bucket_weights[name] for name in names])
    return dict(zip(names, amounts))
