"""
returns/workflow.py

The customer-return workflow as an explicit finite-state value.

    NO_CUSTOMER -> CUSTOMER_SELECTED -> ORDER_SELECTED -> PRODUCT_SELECTED -> READY

Each choose_*/change_* function is one reducer transition: it takes a
ReturnState and returns a new one. Picking an earlier stage again always
clears everything after it (new customer: order, lines, product, quantity;
new order: product, quantity). Reason and description are not stage data and
survive those resets. A transition whose target cannot be found, or whose
earlier stage is missing, returns the state unchanged.

ReturnWorkflow wraps the reducers for a single open dialog and enforces the
submission preconditions in build_draft().
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from ...utils.validators import coerce_id, non_empty
from .catalog import as_catalog
from .draft import DomainError, ReturnSelection, build_return_draft
from .order_filter import filter_orders_for_customer, find_order
from .order_lines import NormalizedLineItem, normalize_order_lines
from .refund import refund_for, select_product, set_quantity as calc_quantity

_log = logging.getLogger(__name__)

__all__ = [
    "Stage",
    "ReturnState",
    "choose_customer",
    "choose_order",
    "choose_product",
    "change_quantity",
    "change_reason",
    "validate_state",
    "ReturnWorkflow",
]


class Stage(str, Enum):
    NO_CUSTOMER = "no_customer"
    CUSTOMER_SELECTED = "customer_selected"
    ORDER_SELECTED = "order_selected"
    PRODUCT_SELECTED = "product_selected"
    READY = "ready"


@dataclass(frozen=True)
class ReturnState:
    customer: Optional[Mapping[str, Any]] = None
    customer_orders: Tuple[Mapping[str, Any], ...] = ()
    order: Optional[Mapping[str, Any]] = None
    lines: Tuple[NormalizedLineItem, ...] = ()
    line: Optional[NormalizedLineItem] = None
    quantity: int = 1
    refund_amount: float = 0.0
    reason: str = ""
    description: str = ""

    @property
    def stage(self) -> Stage:
        if self.customer is None:
            return Stage.NO_CUSTOMER
        if self.order is None:
            return Stage.CUSTOMER_SELECTED
        if self.line is None:
            return Stage.ORDER_SELECTED
        if self.quantity >= 1 and non_empty(self.reason):
            return Stage.READY
        return Stage.PRODUCT_SELECTED

    @property
    def order_has_no_products(self) -> bool:
        """Order picked but nothing returnable in it (informational, not an error)."""
        return self.order is not None and not self.lines


# -----------------------------
# Transitions
# -----------------------------

def choose_customer(state: ReturnState, customer: Mapping[str, Any] | None, orders: Iterable[Any]) -> ReturnState:
    if not isinstance(customer, Mapping) or coerce_id(customer.get("id")) is None:
        return state
    return ReturnState(
        customer=customer,
        customer_orders=tuple(filter_orders_for_customer(orders, customer.get("id"))),
        reason=state.reason,
        description=state.description,
    )


def choose_order(state: ReturnState, order_id, catalog) -> ReturnState:
    if state.customer is None:
        return state
    order = find_order(state.customer_orders, order_id)
    if order is None:
        return state
    return replace(
        state,
        order=order,
        lines=tuple(normalize_order_lines(order, catalog)),
        line=None,
        quantity=1,
        refund_amount=0.0,
    )


def choose_product(state: ReturnState, product_id, line_ref=None) -> ReturnState:
    """
    Pick a line by product id. Pass `line_ref` as well when one order lists
    the same product on several lines.
    """
    if state.order is None:
        return state
    if line_ref is not None:
        pid, ref = coerce_id(product_id), coerce_id(line_ref)
        line = next(
            (ln for ln in state.lines if coerce_id(ln.product_id) == pid and coerce_id(ln.line_ref) == ref),
            None,
        )
    else:
        line = select_product(state.lines, product_id)
    if line is None:
        return state
    return replace(state, line=line, quantity=1, refund_amount=refund_for(line, 1))


def change_quantity(state: ReturnState, requested) -> ReturnState:
    if state.line is None:
        return state
    qc = calc_quantity(state.line, requested)
    return replace(state, quantity=qc.quantity, refund_amount=qc.refund_amount)


def change_reason(state: ReturnState, reason: str | None, description: str | None = None) -> ReturnState:
    state = replace(state, reason=(reason or ""))
    if description is not None:
        state = replace(state, description=description)
    return state


def validate_state(state: ReturnState) -> Dict[str, str]:
    """Form-layer checks before submission. Empty dict means submittable."""
    errors: Dict[str, str] = {}
    if state.customer is None:
        errors["customer"] = "Customer is required."
    if state.order is None:
        errors["order"] = "Order is required."
    if state.line is None:
        if state.order_has_no_products:
            errors["product"] = "This order has no products to return."
        else:
            errors["product"] = "Product is required."
    if state.quantity < 1:
        errors["quantity"] = "Enter a valid quantity."
    if not non_empty(state.reason):
        errors["reason"] = "Return reason is required."
    return errors


# -----------------------------
# Per-dialog workflow instance
# -----------------------------

class ReturnWorkflow:
    """
    Owns the fetched snapshots (orders, catalog, customers) and the current
    ReturnState for one open return dialog. Every select_*/set_* call applies
    one transition and returns the new state.
    """

    def __init__(self, orders: Iterable[Any], catalog, customers: Iterable[Mapping[str, Any]] | None = None):
        self.orders = list(orders or [])
        self.catalog = as_catalog(catalog)
        self.customers = list(customers or [])
        self.state = ReturnState()

    @property
    def stage(self) -> Stage:
        return self.state.stage

    def _find_customer(self, customer_id) -> Optional[Mapping[str, Any]]:
        cid = coerce_id(customer_id)
        return next((c for c in self.customers if coerce_id(c.get("id")) == cid), None)

    def select_customer(self, customer) -> ReturnState:
        if not isinstance(customer, Mapping):
            customer = self._find_customer(customer)
        self.state = choose_customer(self.state, customer, self.orders)
        return self.state

    def select_order(self, order_id) -> ReturnState:
        self.state = choose_order(self.state, order_id, self.catalog)
        return self.state

    def select_product(self, product_id, line_ref=None) -> ReturnState:
        self.state = choose_product(self.state, product_id, line_ref)
        return self.state

    def set_quantity(self, requested) -> ReturnState:
        self.state = change_quantity(self.state, requested)
        return self.state

    def set_reason(self, reason: str | None, description: str | None = None) -> ReturnState:
        self.state = change_reason(self.state, reason, description)
        return self.state

    def reset(self) -> ReturnState:
        self.state = ReturnState()
        return self.state

    def errors(self) -> Dict[str, str]:
        return validate_state(self.state)

    def build_draft(self) -> ReturnSelection:
        errors = self.errors()
        if errors:
            raise DomainError("\n".join(errors.values()))
        s = self.state
        draft = build_return_draft(
            s.customer, s.order, s.line, s.reason, s.quantity, s.refund_amount, s.description,
        )
        _log.debug("draft built for order %r line %r", draft.order_id, draft.line_ref)
        return draft
