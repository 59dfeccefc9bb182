"""
Configuration Loader (``resale_config.loader``).

Responsibility
--------------
Loads a business settings YAML file and parses it into the frozen
dataclasses of ``resale_config.schema``.  Runtime callers go through
``resale_config.get_active_config()`` rather than calling this directly.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Rates are Decimal and lie in [0, 1]; bucket weights are non-negative.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Out-of-range rate, duplicate platform/bucket  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from resale_config.schema import (
    BusinessConfig,
    ExpenseBucket,
    PlatformProfile,
    TaxSettings,
)
from resale_kernel.domain.money import to_decimal
from resale_kernel.exceptions import ConfigurationError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_rate(value: Any, field_name: str) -> Decimal:
    """Parse a rate and require it to lie in [0, 1]."""
    try:
        rate = to_decimal(value)
    except ValueError as e:
        raise ConfigurationError(f"{field_name} is not a number: {value!r}") from e
    if rate < 0 or rate > 1:
        raise ConfigurationError(f"{field_name} must be between 0 and 1, got {rate}")
    return rate


def parse_tax(data: dict[str, Any]) -> TaxSettings:
    """Parse TaxSettings from a dict."""
    return TaxSettings(
        federal_effective_rate=parse_rate(
            data["federal_effective_rate"], "tax.federal_effective_rate"
        ),
        jurisdiction=data["jurisdiction"],
        jurisdiction_rate=parse_rate(
            data.get("jurisdiction_rate", 0), "tax.jurisdiction_rate"
        ),
    )


def parse_platform(data: dict[str, Any]) -> PlatformProfile:
    """Parse a PlatformProfile from a dict."""
    name = data["name"]
    return PlatformProfile(
        name=name,
        fee_rate=parse_rate(data["fee_rate"], f"platforms.{name}.fee_rate"),
        collects_sales_tax=bool(data.get("collects_sales_tax", False)),
    )


def parse_bucket(data: dict[str, Any]) -> ExpenseBucket:
    """Parse an ExpenseBucket from a dict."""
    weight = to_decimal(data.get("default_weight", 0))
    if weight < 0:
        raise ConfigurationError(
            f"expense_buckets.{data['name']}.default_weight cannot be negative"
        )
    return ExpenseBucket(name=data["name"], default_weight=weight)


def _reject_duplicates(kind: str, names: list[str]) -> None:
    seen: set[str] = set()
    for name in names:
        key = name.lower()
        if key in seen:
            raise ConfigurationError(f"Duplicate {kind}: {name}")
        seen.add(key)


def parse_business_config(data: dict[str, Any]) -> BusinessConfig:
    """
    Parse a complete BusinessConfig from a dict.

    Preconditions:
        - ``data`` contains ``business_name``, ``tax``, at least one entry
          under ``platforms`` and at least one under ``expense_buckets``.
    Raises:
        KeyError: if required keys are missing.
        ConfigurationError: on invalid rates, weights or duplicates.
    """
    platforms = tuple(parse_platform(p) for p in data["platforms"])
    buckets = tuple(parse_bucket(b) for b in data["expense_buckets"])
    if not platforms:
        raise ConfigurationError("At least one platform must be configured")
    if not buckets:
        raise ConfigurationError("At least one expense bucket must be configured")

    _reject_duplicates("platform", [p.name for p in platforms])
    _reject_duplicates("expense bucket", [b.name for b in buckets])

    return BusinessConfig(
        business_name=data["business_name"],
        currency=data.get("currency", "USD"),
        tax=parse_tax(data["tax"]),
        platforms=platforms,
        expense_buckets=buckets,
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
