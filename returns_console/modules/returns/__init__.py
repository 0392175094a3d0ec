# returns_console/modules/returns/__init__.py

"""
Customer returns package exports.

Always available (pure, no Qt):
- catalog: Product, build_catalog, as_catalog
- order_filter: filter_orders_for_customer
- order_lines: NormalizedLineItem, normalize_order_lines, match_order_shape
- refund: select_product, set_quantity, QuantityChange
- draft: ReturnSelection, build_return_draft, DomainError
- workflow: ReturnWorkflow, ReturnState, Stage, validate_state
- mapping: to_api_payload, from_api_record

Optional UI/model components (imported defensively so environments
without Qt can still import this package):
- ReturnLinesModel
- CustomerReturnForm
"""

from .catalog import Product, as_catalog, build_catalog
from .draft import DomainError, ReturnSelection, build_return_draft
from .mapping import from_api_record, to_api_payload
from .order_filter import filter_orders_for_customer
from .order_lines import NormalizedLineItem, match_order_shape, normalize_order_lines
from .refund import QuantityChange, select_product, set_quantity
from .workflow import ReturnState, ReturnWorkflow, Stage, validate_state

# UI/model pieces are optional to avoid a hard Qt dependency during headless tests
try:
    from .model import ReturnLinesModel  # type: ignore
    from .form import CustomerReturnForm  # type: ignore
except ImportError:  # pragma: no cover
    ReturnLinesModel = None  # type: ignore
    CustomerReturnForm = None  # type: ignore

__all__ = [
    "Product",
    "build_catalog",
    "as_catalog",
    "DomainError",
    "ReturnSelection",
    "build_return_draft",
    "from_api_record",
    "to_api_payload",
    "filter_orders_for_customer",
    "NormalizedLineItem",
    "match_order_shape",
    "normalize_order_lines",
    "QuantityChange",
    "select_product",
    "set_quantity",
    "ReturnState",
    "ReturnWorkflow",
    "Stage",
    "validate_state",
    "ReturnLinesModel",
    "CustomerReturnForm",
]
