"""
Module: resale_kernel.validation
Responsibility:
    Reusable request validators that run BEFORE the financial engines.
    The engines are total and never reject input; everything that must be
    rejected (negative prices, rates outside [0, 1], empty sales) is
    rejected here.

Architecture position:
    Kernel -- pure, zero I/O.  Used by resale_services.

Failure modes:
    - ValidationError (code VALIDATION_ERROR) with a ``details`` dict
      naming the offending fields and values.

Usage:
    from resale_kernel.validation import validate_required, validate_rate

    validate_required(body, ["order_number", "platform", "sale_price"])
    validate_rate(body.get("promotion_rate"), "promotion_rate")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from resale_kernel.domain.money import Numeric, to_decimal
from resale_kernel.exceptions import ValidationError

SPLIT_TOLERANCE = Decimal("0.01")


def _is_present(data: Mapping[str, Any], field: str) -> bool:
    return data.get(field) is not None


def validate_required(data: Mapping[str, Any], fields: Sequence[str]) -> None:
    """
    Require every field to be present and non-empty.

    ``None`` and ``""`` count as missing; ``0`` and ``False`` are values.
    """
    missing = [f for f in fields if data.get(f) is None or data.get(f) == ""]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            {"missing": missing},
        )


def validate_xor(data: Mapping[str, Any], field1: str, field2: str) -> None:
    """Exactly one of two fields must be present (None counts as absent)."""
    has1 = _is_present(data, field1)
    has2 = _is_present(data, field2)

    if not has1 and not has2:
        raise ValidationError(
            f"Exactly one of {field1} or {field2} must be provided",
            {"field1": field1, "field2": field2},
        )
    if has1 and has2:
        raise ValidationError(
            f"Cannot provide both {field1} and {field2}",
            {"field1": field1, "field2": field2},
        )


def validate_vehicle_deduction(
    mileage: Numeric | None,
    actual: Numeric | None,
) -> None:
    """Mileage and actual-expense deductions are mutually exclusive and non-negative."""
    if mileage is not None and actual is not None:
        raise ValidationError(
            "Cannot use both mileage and actual expense deduction methods",
            {"mileage": mileage, "actual": actual},
        )
    if mileage is not None and to_decimal(mileage) < 0:
        raise ValidationError("Mileage cannot be negative", {"mileage": mileage})
    if actual is not None and to_decimal(actual) < 0:
        raise ValidationError("Actual expenses cannot be negative", {"actual": actual})


def validate_non_negative(value: Numeric | None, field_name: str) -> None:
    """Reject negative values. None is allowed (optional field)."""
    if value is not None and to_decimal(value) < 0:
        raise ValidationError(
            f"{field_name} cannot be negative",
            {field_name: value},
        )


def _parse_datetime(value: str | date) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    # fromisoformat accepts a trailing "Z" from Python 3.11
    return datetime.fromisoformat(value)


def validate_date_range(
    start: str | date | None,
    end: str | date | None,
) -> None:
    """
    Require start <= end.  Open ranges (either side missing) are allowed.

    Accepts ISO dates (``2025-01-01``) and ISO timestamps
    (``2025-01-01T00:00:00Z``).
    """
    if not start or not end:
        return

    try:
        start_dt = _parse_datetime(start)
    except ValueError:
        raise ValidationError("Invalid start date", {"start": start}) from None
    try:
        end_dt = _parse_datetime(end)
    except ValueError:
        raise ValidationError("Invalid end date", {"end": end}) from None

    # Mixed naive/aware ranges compare as naive wall-clock times
    if (start_dt.tzinfo is None) != (end_dt.tzinfo is None):
        start_dt, end_dt = start_dt.replace(tzinfo=None), end_dt.replace(tzinfo=None)

    if start_dt > end_dt:
        raise ValidationError(
            "Start date must be before or equal to end date",
            {"start": start, "end": end},
        )


def validate_rate(value: Numeric | None, field_name: str) -> None:
    """Require a rate in [0, 1] inclusive. None is allowed."""
    if value is None:
        return
    rate = to_decimal(value)
    if rate < 0 or rate > 1:
        raise ValidationError(
            f"{field_name} must be between 0 and 1",
            {field_name: value},
        )


def validate_enum(
    value: str | None,
    field_name: str,
    allowed_values: Sequence[str],
) -> None:
    """Require value to be one of allowed_values. None is allowed."""
    if value is not None and value not in allowed_values:
        raise ValidationError(
            f"{field_name} must be one of: {', '.join(allowed_values)}",
            {field_name: value, "allowed_values": list(allowed_values)},
        )


def validate_expense_splits(
    inventory: Numeric,
    operations: Numeric,
    other: Numeric,
    amount: Numeric,
) -> None:
    """
    Require the three expense buckets to be non-negative and to sum to the
    expense amount within one cent.
    """
    validate_non_negative(inventory, "split_inventory")
    validate_non_negative(operations, "split_operations")
    validate_non_negative(other, "split_other")

    total = to_decimal(inventory) + to_decimal(operations) + to_decimal(other)
    if abs(total - to_decimal(amount)) > SPLIT_TOLERANCE:
        raise ValidationError(
            "Expense splits must sum to total amount",
            {
                "inventory": inventory,
                "operations": operations,
                "other": other,
                "amount": amount,
                "total": total,
            },
        )


def validate_sale_items(items: Sequence[Mapping[str, Any]] | None) -> None:
    """A sale needs at least one item, each with an item_id and positive quantity."""
    if not items:
        raise ValidationError("Sale must include at least one item")

    for item in items:
        if not item.get("item_id"):
            raise ValidationError("Each sale item must have an item_id")
        quantity = item.get("quantity")
        if not quantity or to_decimal(quantity) <= 0:
            raise ValidationError(
                "Each sale item must have a positive quantity",
                {"item_id": item["item_id"], "quantity": quantity},
            )


def validate_confidence(confidence: Numeric | None) -> None:
    """Require an AI confidence score in [0, 1]. None is allowed."""
    if confidence is None:
        return
    score = to_decimal(confidence)
    if score < 0 or score > 1:
        raise ValidationError(
            "Confidence score must be between 0 and 1",
            {"confidence": confidence},
        )
