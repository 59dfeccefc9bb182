"""Tests for lot construction."""

from decimal import Decimal

from hypothesis import given
from hypothesis import strategies as st

from resale_engines.lots import build_lot_wrapper
from resale_kernel.domain.values import LotItem, LotWrapper


class TestBuildLotWrapper:

    def test_builds_without_pricing(self):
        lot = build_lot_wrapper("lot-1", [
            LotItem("itm-1", 2),
            LotItem("itm-2", 1),
        ])

        assert lot.lot_id == "lot-1"
        assert lot.items == (LotItem("itm-1", 2), LotItem("itm-2", 1))
        assert lot.notes is None
        assert not hasattr(lot, "price")

    def test_empty_items(self):
        lot = build_lot_wrapper("lot-empty", [])
        assert lot.lot_id == "lot-empty"
        assert lot.items == ()

    def test_single_item(self):
        lot = build_lot_wrapper("lot-single", [LotItem("itm-1", 1)])
        assert len(lot.items) == 1

    def test_drops_non_positive_quantities(self):
        lot = build_lot_wrapper("lot-2", [
            LotItem("a", 0),
            LotItem("b", 3),
            LotItem("c", -2),
        ])
        assert [i.item_id for i in lot.items] == ["b"]

    def test_floors_fractional_quantities(self):
        lot = build_lot_wrapper("lot-3", [LotItem("a", 2.7), LotItem("b", Decimal("1.2"))])
        assert lot.items == (LotItem("a", 2), LotItem("b", 1))
        assert all(isinstance(i.quantity, int) for i in lot.items)

    def test_quantity_floored_to_zero_is_dropped(self):
        lot = build_lot_wrapper("lot-4", [LotItem("a", 0.5), LotItem("b", 1)])
        assert [i.item_id for i in lot.items] == ["b"]

    def test_keeps_order_and_duplicates(self):
        lot = build_lot_wrapper("lot-5", [
            LotItem("z", 1),
            LotItem("a", 1),
            LotItem("z", 2),
        ])
        assert [i.item_id for i in lot.items] == ["z", "a", "z"]

    def test_notes_carried(self):
        lot = build_lot_wrapper("lot-6", [LotItem("a", 1)], notes="winter bundle")
        assert lot.notes == "winter bundle"

    def test_total_quantity(self):
        lot = build_lot_wrapper("lot-7", [LotItem("a", 2), LotItem("b", 3)])
        assert lot.total_quantity == 5

    def test_rebuild_is_noop(self):
        lot = build_lot_wrapper("lot-8", [LotItem("a", 2.9), LotItem("b", 0)], notes="n")
        assert build_lot_wrapper(lot.lot_id, lot.items, lot.notes) == lot


quantities = st.one_of(
    st.integers(min_value=-5, max_value=20),
    st.floats(min_value=-5, max_value=20, allow_nan=False, allow_infinity=False),
)
lot_items = st.lists(
    st.builds(LotItem, item_id=st.text(min_size=1, max_size=8), quantity=quantities),
    max_size=12,
)


class TestLotProperties:

    @given(items=lot_items)
    def test_idempotent(self, items):
        once = build_lot_wrapper("lot", items)
        twice = build_lot_wrapper(once.lot_id, once.items, once.notes)
        assert twice == once

    @given(items=lot_items)
    def test_all_kept_quantities_positive_ints(self, items):
        lot = build_lot_wrapper("lot", items)
        assert isinstance(lot, LotWrapper)
        for item in lot.items:
            assert isinstance(item.quantity, int)
            assert item.quantity > 0
