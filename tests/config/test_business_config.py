"""
Tests for business configuration loading.

Covers:
- Default settings file -- platforms, buckets, tax rates
- Schema lookups -- case-insensitive platform resolution
- Loader -- rate bounds, duplicates, missing keys
- Checksum determinism and the RESALE_CONFIG_TRACE audit record
"""

from __future__ import annotations

import dataclasses
import logging
from decimal import Decimal

import pytest
import yaml

from resale_config import get_active_config
from resale_config.loader import (
    compute_checksum,
    parse_bucket,
    parse_business_config,
    parse_rate,
)
from resale_config.schema import PlatformProfile
from resale_kernel.exceptions import ConfigurationError, PlatformNotFoundError


# =========================================================================
# 1. Default settings
# =========================================================================


class TestDefaultConfig:

    def test_loads(self, business_config):
        assert business_config.business_name == "Resale Back Office"
        assert business_config.currency == "USD"
        assert len(business_config.checksum) == 64

    def test_rates_are_decimal(self, business_config):
        assert business_config.tax.federal_effective_rate == Decimal("0.22")
        assert isinstance(business_config.tax.federal_effective_rate, Decimal)
        for profile in business_config.platforms:
            assert isinstance(profile.fee_rate, Decimal)

    def test_platforms(self, business_config):
        assert business_config.platform_names == ("eBay", "Poshmark", "Mercari", "Direct")
        assert business_config.platform("eBay").fee_rate == Decimal("0.1325")
        assert business_config.platform("Direct").collects_sales_tax is False

    def test_buckets_in_file_order(self, business_config):
        assert business_config.bucket_names == ("inventory", "operations", "other")
        assert business_config.default_split_weights["operations"] == Decimal("1")

    def test_frozen(self, business_config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            business_config.currency = "EUR"  # type: ignore[misc]

    def test_emits_config_trace(self, caplog):
        with caplog.at_level(logging.INFO, logger="resale_kernel"):
            config = get_active_config()
        traces = [r for r in caplog.records if r.getMessage() == "RESALE_CONFIG_TRACE"]
        assert len(traces) == 1
        assert traces[0].checksum == config.checksum


class TestPlatformLookup:

    @pytest.mark.parametrize("name", ["ebay", "EBAY", " eBay "])
    def test_case_insensitive(self, business_config, name):
        profile = business_config.platform(name)
        assert isinstance(profile, PlatformProfile)
        assert profile.name == "eBay"

    def test_unknown_platform(self, business_config):
        with pytest.raises(PlatformNotFoundError) as exc_info:
            business_config.platform("Depop")
        assert exc_info.value.platform == "Depop"
        assert exc_info.value.code == "PLATFORM_NOT_FOUND"
        assert isinstance(exc_info.value, ConfigurationError)


# =========================================================================
# 2. Loader
# =========================================================================


class TestParseRate:

    @pytest.mark.parametrize("value,expected", [
        (0, Decimal("0")),
        (0.13, Decimal("0.13")),
        ("0.2", Decimal("0.2")),
        (1, Decimal("1")),
    ])
    def test_valid(self, value, expected):
        assert parse_rate(value, "fee_rate") == expected

    @pytest.mark.parametrize("value", [-0.01, 1.5])
    def test_out_of_range(self, value):
        with pytest.raises(ConfigurationError, match="between 0 and 1"):
            parse_rate(value, "fee_rate")

    def test_not_a_number(self):
        with pytest.raises(ConfigurationError, match="not a number"):
            parse_rate("lots", "fee_rate")


class TestParseBusinessConfig:

    def test_minimal(self, minimal_settings):
        config = parse_business_config(minimal_settings)
        assert config.tax.jurisdiction == "TX"
        assert config.tax.jurisdiction_rate == Decimal("0")
        assert config.platform("ebay").collects_sales_tax is True
        assert config.default_split_weights == {
            "inventory": Decimal("0"),
            "operations": Decimal("1"),
            "other": Decimal("0"),
        }

    def test_missing_key(self, minimal_settings):
        del minimal_settings["tax"]
        with pytest.raises(KeyError):
            parse_business_config(minimal_settings)

    def test_empty_platforms(self, minimal_settings):
        minimal_settings["platforms"] = []
        with pytest.raises(ConfigurationError, match="platform"):
            parse_business_config(minimal_settings)

    def test_empty_buckets(self, minimal_settings):
        minimal_settings["expense_buckets"] = []
        with pytest.raises(ConfigurationError, match="expense bucket"):
            parse_business_config(minimal_settings)

    def test_duplicate_platform_case_insensitive(self, minimal_settings):
        minimal_settings["platforms"].append({"name": "EBAY", "fee_rate": 0.1})
        with pytest.raises(ConfigurationError, match="Duplicate platform"):
            parse_business_config(minimal_settings)

    def test_duplicate_bucket(self, minimal_settings):
        minimal_settings["expense_buckets"].append({"name": "other"})
        with pytest.raises(ConfigurationError, match="Duplicate expense bucket"):
            parse_business_config(minimal_settings)

    def test_negative_bucket_weight(self):
        with pytest.raises(ConfigurationError, match="cannot be negative"):
            parse_bucket({"name": "inventory", "default_weight": -1})

    def test_bad_fee_rate(self, minimal_settings):
        minimal_settings["platforms"][0]["fee_rate"] = 2
        with pytest.raises(ConfigurationError):
            parse_business_config(minimal_settings)


class TestGetActiveConfigFromFile:

    def test_custom_path(self, write_settings, minimal_settings):
        config = get_active_config(write_settings(minimal_settings))
        assert config.business_name == "Test Shop"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("platforms: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            get_active_config(path)


class TestChecksum:

    def test_deterministic(self, minimal_settings):
        assert compute_checksum(minimal_settings) == compute_checksum(dict(minimal_settings))

    def test_key_order_ignored(self):
        assert compute_checksum({"a": 1, "b": 2}) == compute_checksum({"b": 2, "a": 1})

    def test_changes_with_content(self, minimal_settings, write_settings):
        first = get_active_config(write_settings(minimal_settings, "a.yaml"))
        minimal_settings["platforms"][0]["fee_rate"] = 0.14
        second = get_active_config(write_settings(minimal_settings, "b.yaml"))
        assert first.checksum != second.checksum
