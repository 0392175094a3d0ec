"""
returns/draft.py

Return Draft Assembler.

build_return_draft() trusts its inputs; completeness is checked by the
workflow before it is called (see workflow.validate_state).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ...utils.helpers import today_str
from ...utils.validators import coerce_id
from .catalog import Identifier
from .order_filter import customer_label
from .order_lines import NormalizedLineItem


# Domain-level error the form can surface directly (message box)
class DomainError(Exception):
    pass


@dataclass(frozen=True)
class ReturnSelection:
    customer_id: Optional[Identifier]
    order_id: Optional[Identifier]
    line_ref: Optional[Identifier]
    product_id: Optional[Identifier]
    product_name: str
    quantity: int
    refund_amount: float
    reason: str = ""
    description: str = ""
    customer_name: str = ""
    return_date: str = field(default_factory=today_str)


def build_return_draft(
    customer: Mapping[str, Any],
    order: Mapping[str, Any],
    line: NormalizedLineItem,
    reason: str,
    quantity: int,
    refund_amount: float,
    description: str = "",
) -> ReturnSelection:
    return ReturnSelection(
        customer_id=coerce_id(customer.get("id")),
        order_id=coerce_id(order.get("id")),
        line_ref=line.line_ref,
        product_id=line.product_id,
        product_name=line.name,
        quantity=quantity,
        refund_amount=refund_amount,
        reason=reason,
        description=description,
        customer_name=customer_label(customer),
    )
