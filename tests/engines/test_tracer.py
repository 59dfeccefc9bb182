"""Tests for the engine tracer decorator."""

import logging
from decimal import Decimal

from resale_engines.expense_split import split_expense
from resale_engines.tracer import _canonicalize, compute_input_fingerprint, traced_engine
from resale_kernel.domain.values import SaleInput


def _trace_records(caplog):
    return [r for r in caplog.records if r.getMessage() == "RESALE_ENGINE_TRACE"]


class TestFingerprint:

    def test_deterministic(self):
        args = {"amount": Decimal("10.00"), "weights": [1, 2]}
        first = compute_input_fingerprint(("amount", "weights"), args)
        assert compute_input_fingerprint(("amount", "weights"), args) == first
        assert len(first) == 16

    def test_decimal_scale_ignored(self):
        a = compute_input_fingerprint(("amount",), {"amount": Decimal("10")})
        b = compute_input_fingerprint(("amount",), {"amount": Decimal("10.00")})
        assert a == b

    def test_different_inputs_differ(self):
        a = compute_input_fingerprint(("amount",), {"amount": Decimal("10")})
        b = compute_input_fingerprint(("amount",), {"amount": Decimal("11")})
        assert a != b

    def test_missing_field_is_null(self):
        a = compute_input_fingerprint(("amount",), {})
        b = compute_input_fingerprint(("amount",), {"amount": None})
        assert a == b

    def test_dataclass_canonicalized_by_fields(self):
        sale = SaleInput("10", "0.1", "0", "0", "5")
        text = _canonicalize(sale)
        assert "sale_price:10" in text
        assert "platform_fee_rate:0.1" in text


class TestTracedEngine:

    def test_emits_trace_record(self, caplog):
        with caplog.at_level(logging.INFO, logger="resale_kernel"):
            split_expense(100, [1, 1])

        records = _trace_records(caplog)
        assert len(records) == 1
        assert records[0].engine_name == "expense_split"
        assert records[0].engine_version == "1.0"
        assert len(records[0].input_fingerprint) == 16

    def test_positional_and_keyword_calls_fingerprint_alike(self, caplog):
        with caplog.at_level(logging.INFO, logger="resale_kernel"):
            split_expense(100, [1, 1])
            split_expense(amount=100, weights=[1, 1])

        fps = [r.input_fingerprint for r in _trace_records(caplog)]
        assert fps[0] == fps[1]

    def test_wraps_preserves_metadata_and_result(self):
        @traced_engine("sample", "2.0", fingerprint_fields=("x",))
        def double(x):
            """Double x."""
            return x * 2

        assert double(4) == 8
        assert double.__name__ == "double"
        assert double.__doc__ == "Double x."
