"""
Module: resale_kernel.domain.money
Responsibility: Decimal money primitives shared by every engine.  Centralizes
    coercion, cent rounding, and integer-cent conversion so that all
    calculations use identical precision and rounding.
Architecture position: Kernel > Domain.  Imported by values, validation and
    every engine.  MUST NOT import from engines, services or config.

Invariants enforced:
    - Money is Decimal.  Floats are accepted at the boundary only and are
      converted through ``str()`` so that ``0.12`` means ``Decimal("0.12")``.
    - round_money() is the ONLY sanctioned rounding function for monetary
      values.  ROUND_HALF_UP on Decimal rounds half away from zero.

Failure modes:
    - ValueError when a value cannot be interpreted as a number.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP
CENT = Decimal("0.01")

Numeric = Decimal | int | float | str


def to_decimal(value: Numeric) -> Decimal:
    """
    Coerce a numeric input to Decimal.

    Preconditions: value is a Decimal, int, float, or numeric string.
    Postconditions: Returns a Decimal.  Decimals are returned unchanged.

    Raises:
        ValueError: If value cannot be converted.
    """
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid numeric value: {value!r}") from e


def round_money(
    value: Numeric,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to the given number of decimal places.

    Every derived amount in the engines goes through this function before
    it is used in the next step, the way a ledger records discrete postings.

    Args:
        value: Amount to round.
        decimal_places: Number of decimal places (cents by default).
        rounding: Decimal rounding mode.

    Returns:
        Decimal quantized to ``decimal_places``.

    Example:
        round_money("2.675") -> Decimal("2.68")
        round_money("-2.675") -> Decimal("-2.68")
    """
    quantum = Decimal(1).scaleb(-decimal_places)
    return to_decimal(value).quantize(quantum, rounding=rounding)


def to_cents(value: Numeric) -> int:
    """Round to cents and return the amount as an integer number of cents."""
    return int(round_money(value).scaleb(MONEY_DECIMAL_PLACES))


def money_from_cents(cents: int) -> Decimal:
    """
    Create a monetary Decimal from integer cents.

    Example:
        money_from_cents(1050) -> Decimal("10.50")
    """
    return Decimal(cents).scaleb(-MONEY_DECIMAL_PLACES)
