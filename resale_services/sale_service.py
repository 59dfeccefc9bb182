"""
resale_services.sale_service -- Record a marketplace sale with profit and tax figures.

Responsibility:
    Validates a sale request, resolves the platform's fee rate from the
    business configuration, and runs the profit, federal estimate and
    jurisdictional liability engines to produce an immutable SaleRecord.

Architecture position:
    Services -- orchestration over engines + kernel.  Holds no state
    beyond the configuration it was built with; persistence is the
    caller's concern.

Invariants enforced:
    - Validation happens here, never in the engines: money must be
      non-negative, the promotion rate must lie in [0, 1], and a sale
      needs at least one item.
    - Sale item quantities are floored to whole units; an item that
      floors to zero is rejected.
    - Marketplace-collected tax is only accepted for platforms that act
      as marketplace facilitators.

Failure modes:
    - ValidationError: invalid request data.
    - PlatformNotFoundError: platform not in configuration.
"""

from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from resale_config.schema import BusinessConfig
from resale_engines.lots import build_lot_wrapper
from resale_engines.profit import calculate_profit
from resale_engines.tax import calculate_federal_tax_estimate, calculate_liability
from resale_kernel.domain.money import Numeric, round_money
from resale_kernel.domain.values import LotItem, ProfitBreakdown, SaleInput
from resale_kernel.exceptions import ValidationError
from resale_kernel.logging_config import LogContext, get_logger
from resale_kernel.validation import (
    validate_non_negative,
    validate_rate,
    validate_sale_items,
)

logger = get_logger("services.sale")


@dataclass(frozen=True)
class SaleRecord:
    """Calculated figures for one sale, ready for the storage layer."""

    sale_id: str
    platform: str
    sale_date: date
    breakdown: ProfitBreakdown
    federal_tax_estimate: Decimal
    direct_tax_collected: Decimal
    marketplace_tax_collected: Decimal
    jurisdictional_liability: Decimal
    items: tuple[LotItem, ...]
    notes: str | None = None


class SaleService:
    """
    Record sales against a business configuration.

    Contract:
        ``record_sale`` is deterministic for identical arguments and
        configuration; it performs no I/O besides logging.
    """

    def __init__(self, config: BusinessConfig):
        self._config = config

    def record_sale(
        self,
        sale_id: str,
        platform: str,
        sale_date: date,
        sale_price: Numeric,
        cost_of_goods: Numeric,
        items: Sequence[Mapping[str, Any]],
        shipping_cost: Numeric = 0,
        promotion_rate: Numeric = 0,
        direct_tax_collected: Numeric = 0,
        marketplace_tax_collected: Numeric = 0,
        notes: str | None = None,
    ) -> SaleRecord:
        """
        Validate a sale and calculate its profit and tax figures.

        Args:
            sale_id: Caller-supplied sale identifier.
            platform: Configured platform name (case-insensitive).
            sale_date: Date of sale.
            sale_price: List price before promotion.
            cost_of_goods: Cost basis of the items sold.
            items: Raw ``{"item_id", "quantity"}`` mappings.
            shipping_cost: Shipping paid by the seller.
            promotion_rate: Promotion discount as a fraction of the price.
            direct_tax_collected: Sales tax the seller collected and must remit.
            marketplace_tax_collected: Sales tax the platform collected and remits.
            notes: Free-form notes.

        Returns:
            SaleRecord with rounded figures.

        Raises:
            ValidationError: invalid inputs.
            PlatformNotFoundError: unknown platform.
        """
        with LogContext.bind(sale_id=sale_id):
            t0 = time.monotonic()

            validate_sale_items(items)
            sold = build_lot_wrapper(sale_id, [
                LotItem(item_id=item["item_id"], quantity=item["quantity"])
                for item in items
            ])
            if len(sold.items) != len(items):
                raise ValidationError(
                    "Each sale item must have a quantity of at least 1",
                    {"quantities": [item["quantity"] for item in items]},
                )
            for name, value in (
                ("sale_price", sale_price),
                ("cost_of_goods", cost_of_goods),
                ("shipping_cost", shipping_cost),
                ("direct_tax_collected", direct_tax_collected),
                ("marketplace_tax_collected", marketplace_tax_collected),
            ):
                validate_non_negative(value, name)
            validate_rate(promotion_rate, "promotion_rate")

            profile = self._config.platform(platform)
            if not profile.collects_sales_tax and round_money(marketplace_tax_collected):
                raise ValidationError(
                    f"{profile.name} does not collect sales tax on the seller's behalf",
                    {"platform": profile.name,
                     "marketplace_tax_collected": marketplace_tax_collected},
                )

            breakdown = calculate_profit(SaleInput(
                sale_price=sale_price,
                platform_fee_rate=profile.fee_rate,
                promotion_rate=promotion_rate,
                shipping_cost=shipping_cost,
                cost_of_goods=cost_of_goods,
            ))
            federal = calculate_federal_tax_estimate(
                breakdown.profit, self._config.tax.federal_effective_rate
            )
            liability = calculate_liability(
                direct_tax_collected, marketplace_tax_collected
            )

            record = SaleRecord(
                sale_id=sale_id,
                platform=profile.name,
                sale_date=sale_date,
                breakdown=breakdown,
                federal_tax_estimate=federal,
                direct_tax_collected=round_money(direct_tax_collected),
                marketplace_tax_collected=round_money(marketplace_tax_collected),
                jurisdictional_liability=liability,
                items=sold.items,
                notes=notes,
            )

            logger.info("sale_recorded", extra={
                "platform": profile.name,
                "gross_revenue": str(breakdown.gross_revenue),
                "profit": str(breakdown.profit),
                "federal_tax_estimate": str(federal),
                "jurisdictional_liability": str(liability),
                "item_count": len(record.items),
                "duration_ms": round((time.monotonic() - t0) * 1000, 2),
            })
            return record
