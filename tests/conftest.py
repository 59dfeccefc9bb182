"""
Pytest fixtures for the resale back-office test suite.

Provides:
- The default business configuration
- Sale and expense services bound to it
- A writer for throwaway settings YAML files
"""

from datetime import date

import pytest
import yaml

from resale_config import BusinessConfig, get_active_config
from resale_kernel.logging_config import reset_logging
from resale_services import ExpenseService, SaleService


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def business_config() -> BusinessConfig:
    return get_active_config()


@pytest.fixture
def sale_service(business_config) -> SaleService:
    return SaleService(business_config)


@pytest.fixture
def expense_service(business_config) -> ExpenseService:
    return ExpenseService(business_config)


@pytest.fixture
def sale_date() -> date:
    return date(2025, 3, 14)


@pytest.fixture
def minimal_settings() -> dict:
    return {
        "business_name": "Test Shop",
        "currency": "USD",
        "tax": {"federal_effective_rate": 0.2, "jurisdiction": "TX"},
        "platforms": [{"name": "eBay", "fee_rate": 0.13, "collects_sales_tax": True}],
        "expense_buckets": [
            {"name": "inventory"},
            {"name": "operations", "default_weight": 1},
            {"name": "other"},
        ],
    }


@pytest.fixture
def write_settings(tmp_path):
    """Write a settings dict to a YAML file and return its path."""

    def _write(data, name="business.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data))
        return path

    return _write
