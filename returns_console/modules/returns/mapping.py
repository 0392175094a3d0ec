"""
returns/mapping.py

Translate between ReturnSelection drafts and the customer-returns REST
records. The console never sends anything itself; the submission collaborator
posts whatever to_api_payload() returns.

API record fields:
    customer, order_item, product, quantity, return_reason, refund_amount, created_at
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from ...constants import (
    CUSTOMER_LABEL_TEMPLATE,
    DEFAULT_RETURN_REASON,
    RETURN_REASONS,
    UNKNOWN_PRODUCT_LABEL,
)
from ...utils.validators import coerce_id, non_empty, try_parse_float
from .catalog import as_catalog, lookup
from .draft import DomainError, ReturnSelection
from .order_filter import customer_label

__all__ = ["unwrap_list", "reason_label", "to_api_payload", "from_api_record"]

_REASON_LABELS = dict(RETURN_REASONS)


def unwrap_list(response: Any) -> List[Any]:
    """Accept either a bare list or a {"data": [...]} envelope."""
    if isinstance(response, list):
        return response
    if isinstance(response, Mapping) and isinstance(response.get("data"), list):
        return response["data"]
    return []


def reason_label(key: str | None) -> str:
    if not key:
        return ""
    return _REASON_LABELS.get(key, key)


def to_api_payload(draft: ReturnSelection) -> Dict[str, Any]:
    """
    Build the create/update body. `order_item` is the draft's line_ref, i.e.
    the order-item id when the order had one, else the order id.
    """
    missing = [
        name for name, value in (
            ("customer", draft.customer_id),
            ("order item", draft.line_ref),
            ("product", draft.product_id),
        )
        if value is None
    ]
    if missing:
        raise DomainError(f"Return draft is missing: {', '.join(missing)}.")

    reason = next(
        (t.strip() for t in (draft.reason, draft.description) if non_empty(t)),
        DEFAULT_RETURN_REASON,
    )
    return {
        "customer": draft.customer_id,
        "order_item": draft.line_ref,
        "product": draft.product_id,
        "quantity": int(draft.quantity),
        "return_reason": reason,
        "refund_amount": draft.refund_amount,
    }


def from_api_record(
    record: Mapping[str, Any],
    customers: Iterable[Mapping[str, Any]] = (),
    products: Iterable[Any] = (),
) -> Dict[str, Any]:
    """Display row for a stored return, with customer/product names resolved."""
    cid = coerce_id(record.get("customer"))
    customer = next((c for c in customers or () if coerce_id(c.get("id")) == cid), None)
    if customer is not None:
        customer_name = customer_label(customer)
    else:
        customer_name = CUSTOMER_LABEL_TEMPLATE.format(id=record.get("customer"))

    product = lookup(as_catalog(products), record.get("product"))
    product_name = (product.display_name if product else "") or UNKNOWN_PRODUCT_LABEL

    ok, refund = try_parse_float(record.get("refund_amount"))
    return {
        "id": record.get("id"),
        "customer_id": cid,
        "customer_name": customer_name,
        "order_item_id": coerce_id(record.get("order_item")),
        "product_id": coerce_id(record.get("product")),
        "product_name": product_name,
        "quantity": record.get("quantity"),
        "reason": record.get("return_reason") or "",
        "reason_label": reason_label(record.get("return_reason")),
        "return_date": record.get("created_at"),
        "refund_amount": refund if ok else 0.0,
    }
