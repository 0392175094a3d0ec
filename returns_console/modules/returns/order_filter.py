"""
returns/order_filter.py

Customer-Order Filter plus the small labelling helpers the pickers use.

An order may point at its customer three ways:
  - customerId  : numeric id
  - customer    : display string containing "#<id>" (e.g. "Customer #7")
  - customer_id : numeric id
Any one match is enough. Malformed entries are skipped, never raised on.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from ...constants import CUSTOMER_LABEL_TEMPLATE
from ...utils.validators import coerce_id

__all__ = [
    "order_belongs_to",
    "filter_orders_for_customer",
    "find_order",
    "customer_label",
    "order_label",
]


def order_belongs_to(order: Any, customer_id) -> bool:
    if not isinstance(order, Mapping):
        return False
    cid = coerce_id(customer_id)
    if cid is None:
        return False

    ref = order.get("customerId")
    if not isinstance(ref, str) and ref is not None and coerce_id(ref) == cid:
        return True

    text = order.get("customer")
    if isinstance(text, str) and f"#{cid}" in text:
        return True

    ref = order.get("customer_id")
    if not isinstance(ref, str) and ref is not None and coerce_id(ref) == cid:
        return True
    return False


def filter_orders_for_customer(orders: Iterable[Any], customer_id) -> List[Mapping[str, Any]]:
    """Stable filter: orders attributed to `customer_id`, in input order."""
    return [o for o in (orders or ()) if order_belongs_to(o, customer_id)]


def find_order(orders: Iterable[Any], order_id):
    oid = coerce_id(order_id)
    if oid is None:
        return None
    for o in orders or ():
        if isinstance(o, Mapping) and coerce_id(o.get("id")) == oid:
            return o
    return None


def customer_label(customer: Mapping[str, Any]) -> str:
    name = customer.get("customer_name") or customer.get("name")
    if name:
        return str(name)
    return CUSTOMER_LABEL_TEMPLATE.format(id=customer.get("id"))


def order_label(order: Mapping[str, Any]) -> str:
    label = f"Order #{order.get('id')}"
    created = order.get("createdAt") or order.get("created_at")
    if created:
        # ISO timestamps: keep the date part only
        label += f" - {str(created)[:10]}"
    return label
