"""
Lot construction - bundle inventory item references under a lot id.

A lot is a pure grouping: it carries no price of its own, pricing is
derived from its items' costs by whoever lists the lot.

Rules applied when building a lot:
    - items with quantity <= 0 are dropped;
    - fractional quantities are floored, and an item floored to zero is
      dropped too, so every kept quantity is a positive int;
    - order is preserved and duplicate item ids are kept (rejecting
      duplicates is the calling layer's concern).

Building a lot from an already-built lot's items returns an equal lot.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from resale_kernel.domain.money import to_decimal
from resale_kernel.domain.values import LotItem, LotWrapper
from resale_kernel.logging_config import get_logger

logger = get_logger("engines.lots")


def _whole_quantity(item: LotItem) -> int:
    return math.floor(to_decimal(item.quantity))


def build_lot_wrapper(
    lot_id: str,
    items: Iterable[LotItem],
    notes: str | None = None,
) -> LotWrapper:
    """Build a LotWrapper from item references (see module docstring for rules)."""
    kept: list[LotItem] = []
    dropped = 0
    for item in items:
        quantity = _whole_quantity(item)
        if quantity <= 0:
            dropped += 1
            continue
        kept.append(LotItem(item_id=item.item_id, quantity=quantity))

    if dropped:
        logger.debug("lot_items_dropped", extra={
            "lot_id": lot_id,
            "dropped": dropped,
            "kept": len(kept),
        })

    return LotWrapper(lot_id=lot_id, items=tuple(kept), notes=notes)
