"""
Typed exception hierarchy for the resale kernel.

Every error carries a machine-readable ``code`` class attribute and
structured data, so callers catch by type and report by code instead of
parsing messages:

    try:
        service.record_sale(...)
    except ValidationError as e:
        api_response(status=400, code=e.code, details=e.details)

Hierarchy:

    ResaleKernelError (base)
    |
    +-- ValidationError
    |
    +-- ConfigurationError
        +-- PlatformNotFoundError

The financial engines raise none of these: they are total over their
numeric domain.  Rejection happens upstream in resale_kernel.validation
and in the configuration loader.
"""

from __future__ import annotations

from typing import Any


class ResaleKernelError(Exception):
    """
    Base exception for all resale kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "RESALE_KERNEL_ERROR"


class ValidationError(ResaleKernelError):
    """Request data failed validation."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.details = details
        super().__init__(message)


# Configuration exceptions


class ConfigurationError(ResaleKernelError):
    """Business configuration is malformed or inconsistent."""

    code: str = "CONFIGURATION_ERROR"


class PlatformNotFoundError(ConfigurationError):
    """No platform profile with the given name is configured."""

    code: str = "PLATFORM_NOT_FOUND"

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Platform not configured: {platform}")
