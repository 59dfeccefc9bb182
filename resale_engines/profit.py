"""
Module: resale_engines.profit
Responsibility:
    Decompose a marketplace sale into discount, platform fees, net revenue
    and profit, and apply promotion discounts to list prices.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import resale_kernel.domain.

Invariants enforced:
    - Every intermediate is rounded to cents before it feeds the next step,
      matching how a ledger records discrete postings.
    - The promotion discount is taken BEFORE platform fees; marketplaces
      charge their percentage on the discounted price.
    - Nothing is clamped: a sale below cost yields negative profit, and
      rates outside [0, 1] are used as given.

Failure modes:
    - None of its own.  Range checks live in resale_kernel.validation.

Usage:
    from resale_engines.profit import calculate_profit
    from resale_kernel.domain.values import SaleInput

    breakdown = calculate_profit(SaleInput(
        sale_price="200", platform_fee_rate="0.12", promotion_rate="0.1",
        shipping_cost="15", cost_of_goods="60",
    ))
    breakdown.profit  # Decimal("83.40")
"""

from __future__ import annotations

from decimal import Decimal

from resale_engines.tracer import traced_engine
from resale_kernel.domain.money import Numeric, round_money, to_decimal
from resale_kernel.domain.values import ProfitBreakdown, SaleInput
from resale_kernel.logging_config import get_logger

logger = get_logger("engines.profit")


@traced_engine("profit", "1.0", fingerprint_fields=("sale",))
def calculate_profit(sale: SaleInput) -> ProfitBreakdown:
    """
    Calculate the profit breakdown for a single sale.

    Steps (each rounded to cents):
        1. promotion_discount = sale_price * promotion_rate
        2. discounted_price   = sale_price - promotion_discount
        3. platform_fees      = discounted_price * platform_fee_rate
        4. net_revenue        = discounted_price - platform_fees
        5. profit             = net_revenue - cost_of_goods - shipping_cost
    """
    promotion_discount = round_money(sale.sale_price * sale.promotion_rate)
    discounted_price = round_money(sale.sale_price - promotion_discount)
    platform_fees = round_money(discounted_price * sale.platform_fee_rate)
    net_revenue = round_money(discounted_price - platform_fees)
    profit = round_money(net_revenue - sale.cost_of_goods - sale.shipping_cost)

    breakdown = ProfitBreakdown(
        gross_revenue=round_money(sale.sale_price),
        platform_fees=platform_fees,
        promotion_discount=promotion_discount,
        net_revenue=net_revenue,
        cost_of_goods=round_money(sale.cost_of_goods),
        shipping_cost=round_money(sale.shipping_cost),
        profit=profit,
    )

    if breakdown.is_loss:
        logger.debug("profit_negative", extra={
            "sale_price": str(sale.sale_price),
            "profit": str(profit),
        })

    return breakdown


def apply_promotion(base_price: Numeric, promotion_rate: Numeric) -> Decimal:
    """
    Price after a percentage promotion: ``round(base * (1 - rate))``.

    A rate of 0 leaves the price unchanged and 1 makes it free.  Rates
    above 1 produce a negative price; callers validate upstream.
    """
    return round_money(to_decimal(base_price) * (Decimal("1") - to_decimal(promotion_rate)))
