"""
Business configuration schema.

Defines the human-authored settings for one resale business.  YAML files
are parsed into these types by the loader; the services read them to pick
fee rates, the federal estimate rate and default expense buckets.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from resale_kernel.exceptions import PlatformNotFoundError


@dataclass(frozen=True)
class PlatformProfile:
    """A sales channel and the fee it charges on the discounted price."""

    name: str
    fee_rate: Decimal
    # Marketplace facilitator: platform collects and remits sales tax itself
    collects_sales_tax: bool = False


@dataclass(frozen=True)
class TaxSettings:
    """Rates used for estimates and the seller's sales tax jurisdiction."""

    federal_effective_rate: Decimal
    jurisdiction: str
    jurisdiction_rate: Decimal = Decimal("0")


@dataclass(frozen=True)
class ExpenseBucket:
    """A named expense category with its default split weight."""

    name: str
    default_weight: Decimal = Decimal("0")


@dataclass(frozen=True)
class BusinessConfig:
    """Complete settings for one business."""

    business_name: str
    currency: str
    tax: TaxSettings
    platforms: tuple[PlatformProfile, ...]
    expense_buckets: tuple[ExpenseBucket, ...]
    checksum: str = ""

    def platform(self, name: str) -> PlatformProfile:
        """Look up a platform profile by name (case-insensitive)."""
        wanted = name.strip().lower()
        for profile in self.platforms:
            if profile.name.lower() == wanted:
                return profile
        raise PlatformNotFoundError(name)

    @property
    def platform_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.platforms)

    @property
    def bucket_names(self) -> tuple[str, ...]:
        return tuple(b.name for b in self.expense_buckets)

    @property
    def default_split_weights(self) -> dict[str, Decimal]:
        return {b.name: b.default_weight for b in self.expense_buckets}
