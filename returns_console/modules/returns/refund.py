"""
returns/refund.py

Selection & Refund Calculator.

Do not format here; refund amounts keep full float precision and are only
rounded by fmt_money at display time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ...utils.validators import coerce_id, try_parse_int
from .order_lines import NormalizedLineItem

_log = logging.getLogger(__name__)

__all__ = [
    "QuantityChange",
    "clamp_quantity",
    "refund_for",
    "select_product",
    "set_quantity",
    "line_label",
]


@dataclass(frozen=True)
class QuantityChange:
    quantity: int
    refund_amount: float


def clamp_quantity(requested, purchased: int) -> int:
    """
    quantity = max(1, min(requested, purchased)).

    Non-numeric requests count as 1. `purchased` is the quantity on the
    original order line, never the stock level.
    """
    ok, q = try_parse_int(requested)
    if not ok:
        q = 1
    upper = max(1, int(purchased))
    clamped = max(1, min(q, upper))
    if ok and clamped != q:
        _log.debug("quantity %r clamped to %d (purchased %d)", requested, clamped, upper)
    return clamped


def refund_for(line: NormalizedLineItem, quantity: int) -> float:
    return line.unit_price * quantity


def select_product(lines: Iterable[NormalizedLineItem], product_id) -> Optional[NormalizedLineItem]:
    """First line carrying `product_id`, or None."""
    pid = coerce_id(product_id)
    if pid is None:
        return None
    for line in lines or ():
        if coerce_id(line.product_id) == pid:
            return line
    return None


def set_quantity(line: NormalizedLineItem, requested_quantity) -> QuantityChange:
    qty = clamp_quantity(requested_quantity, line.quantity)
    return QuantityChange(quantity=qty, refund_amount=refund_for(line, qty))


def line_label(line: NormalizedLineItem) -> str:
    return f"{line.name} (Qty: {line.quantity})"
