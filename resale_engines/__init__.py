"""
Module: resale_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    financial calculation engines.  This is the canonical import surface
    for resale_services.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import resale_kernel (domain values, money, logging).
    MUST NOT import resale_services or resale_config.

Invariants enforced:
    - Decimal-only arithmetic; floats are converted at the boundary.
    - Every derived amount is rounded to cents before further use.
    - Determinism: identical inputs always produce identical outputs.
    - Totality: engines raise no errors of their own.

Audit relevance:
    Engine invocations are traced via ``@traced_engine`` (see
    ``resale_engines.tracer``), emitting RESALE_ENGINE_TRACE records with
    engine name, version, input fingerprint and duration.

Usage:
    from resale_engines import calculate_profit, split_expense, build_lot_wrapper
"""

from resale_engines.expense_split import split_expense, split_expense_by_bucket
from resale_engines.lots import build_lot_wrapper
from resale_engines.profit import apply_promotion, calculate_profit
from resale_engines.tax import (
    calculate_federal_tax_estimate,
    calculate_liability,
    clamp_rate,
)
from resale_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "apply_promotion",
    "build_lot_wrapper",
    "calculate_federal_tax_estimate",
    "calculate_liability",
    "calculate_profit",
    "clamp_rate",
    "compute_input_fingerprint",
    "split_expense",
    "split_expense_by_bucket",
    "traced_engine",
]
