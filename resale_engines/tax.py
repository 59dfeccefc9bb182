"""
Tax Engine - Federal income tax estimate and jurisdictional sales tax liability.

Pure functions with no I/O - rates and collected amounts are parameters.

The federal figure is an ESTIMATE for quarterly planning, not a filed
return: the effective rate is clamped silently and negative income passes
through as a negative (credit-like) estimate.

The jurisdictional liability models marketplace facilitator rules: a
marketplace collects and remits sales tax on the seller's behalf for its
own orders, while the seller self-remits what they collected directly.

Usage:
    from resale_engines.tax import calculate_federal_tax_estimate, calculate_liability

    calculate_federal_tax_estimate("10000", "0.22")  # Decimal("2200.00")
    calculate_liability("120", "50")                   # Decimal("70.00")
    calculate_liability("80", "100")                   # Decimal("-20.00")
"""

from __future__ import annotations

from decimal import Decimal

from resale_engines.tracer import traced_engine
from resale_kernel.domain.money import Numeric, round_money, to_decimal
from resale_kernel.logging_config import get_logger

logger = get_logger("engines.tax")

_ZERO = Decimal("0")
_ONE = Decimal("1")


def clamp_rate(rate: Numeric) -> Decimal:
    """Clamp a rate into [0, 1]."""
    return max(_ZERO, min(_ONE, to_decimal(rate)))


@traced_engine(
    "federal_tax",
    "1.0",
    fingerprint_fields=("taxable_income", "effective_rate"),
)
def calculate_federal_tax_estimate(
    taxable_income: Numeric,
    effective_rate: Numeric,
) -> Decimal:
    """
    Estimate federal income tax as ``round(taxable_income * rate)``.

    The rate is clamped to [0, 1] rather than rejected.  Negative income
    is not special-cased and yields a negative estimate.
    """
    rate = clamp_rate(effective_rate)
    if rate != to_decimal(effective_rate):
        logger.warning("federal_rate_clamped", extra={
            "requested_rate": str(effective_rate),
            "applied_rate": str(rate),
        })
    return round_money(to_decimal(taxable_income) * rate)


@traced_engine(
    "jurisdictional_tax",
    "1.0",
    fingerprint_fields=("tax_collected_directly", "tax_collected_by_marketplace"),
)
def calculate_liability(
    tax_collected_directly: Numeric,
    tax_collected_by_marketplace: Numeric,
) -> Decimal:
    """
    Net self-remitted sales tax liability.

    Each input is floored at zero on its own (a negative "collected"
    amount is meaningless), but the RESULT may go negative: that is an
    over-collection the caller must surface as a credit.
    """
    direct = max(_ZERO, to_decimal(tax_collected_directly))
    marketplace = max(_ZERO, to_decimal(tax_collected_by_marketplace))
    liability = round_money(direct - marketplace)

    if liability < _ZERO:
        logger.info("jurisdictional_tax_over_collected", extra={
            "direct": str(direct),
            "marketplace": str(marketplace),
            "liability": str(liability),
        })

    return liability
