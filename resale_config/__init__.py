"""
resale_config -- single public entrypoint for business configuration.

Responsibility:
    Provides ``get_active_config()``, the one way services obtain fee
    rates, the federal estimate rate and expense buckets.  YAML loading
    is internal and not called by services directly.

Architecture position:
    Configuration -- sits above ``resale_kernel`` and below
    ``resale_services``.  The kernel and engines MUST NEVER import from
    ``resale_config``; services pass plain values into the engines.

Failure modes:
    - ``FileNotFoundError`` -- the configuration file does not exist.
    - ``KeyError`` / ``ConfigurationError`` -- invalid configuration.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``RESALE_CONFIG_TRACE`` log entry carrying the business name and the
    configuration checksum, tying calculated figures to the settings that
    produced them.
"""

from __future__ import annotations

from pathlib import Path

from resale_config.loader import load_yaml_file, parse_business_config
from resale_config.schema import (
    BusinessConfig,
    ExpenseBucket,
    PlatformProfile,
    TaxSettings,
)
from resale_kernel.logging_config import get_logger

_logger = get_logger("config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "business.yaml"


def get_active_config(config_path: Path | None = None) -> BusinessConfig:
    """Load and validate the business configuration.

    Args:
        config_path: Override path to a settings YAML file.  Defaults to
            resale_config/defaults/business.yaml.

    Returns:
        A frozen BusinessConfig.  Not cached; callers hold on to it.
    """
    path = config_path or _DEFAULT_CONFIG_PATH
    config = parse_business_config(load_yaml_file(path))

    _logger.info(
        "RESALE_CONFIG_TRACE",
        extra={
            "trace_type": "RESALE_CONFIG_TRACE",
            "config_path": str(path),
            "business_name": config.business_name,
            "checksum": config.checksum,
            "platform_count": len(config.platforms),
            "bucket_count": len(config.expense_buckets),
        },
    )
    return config


__all__ = [
    "BusinessConfig",
    "ExpenseBucket",
    "PlatformProfile",
    "TaxSettings",
    "get_active_config",
]
