"""
returns/order_lines.py

Order Shape Normalizer.

Orders reach the return dialog in several physical encodings. Each encoding is
recognised by one shape rule; the rules run in the fixed order of SHAPE_RULES
and the first one that produces at least one raw line wins:

  1. items                 items[] of {id, product_id, quantity}
  2. products              products[] of {id, quantity, name?, price?}
  3. items_beside_product  non-list `items` next to top-level product_id/productId
  4. product_id            top-level product_id/productId + quantity, no items/products
  5. product               top-level product object carrying an id
  6. fallback_scan         probe products, product_id, productId, product, item, items
                           for a list of product-like objects, an object with an id,
                           or a bare numeric id

No match means an empty list. That is a normal outcome ("no products in this
order"), not an error.

line_ref is the order-item id when the shape has one (rule 1). Every other
shape has no finer line identity, so line_ref is the order's own id.

Names and prices come from the catalog first, then from whatever the raw line
embeds, then from "Product <id>" / 0.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from ...constants import PRODUCT_LABEL_TEMPLATE
from ...utils.helpers import first_key
from ...utils.validators import coerce_id, try_parse_float, try_parse_int
from .catalog import Identifier, as_catalog, lookup

_log = logging.getLogger(__name__)

__all__ = [
    "NormalizedLineItem",
    "RawLine",
    "SHAPE_RULES",
    "FALLBACK_FIELDS",
    "match_order_shape",
    "normalize_order_lines",
]

FALLBACK_FIELDS = ("products", "product_id", "productId", "product", "item", "items")

_PRODUCT_REF_KEYS = ("product_id", "productId")
_NAME_KEYS = ("product_name", "productName", "name")
_PRICE_KEYS = ("price", "unitPrice", "unit_price")


@dataclass(frozen=True)
class NormalizedLineItem:
    product_id: Identifier
    line_ref: Optional[Identifier]
    name: str
    quantity: int          # originally purchased quantity, >= 1
    unit_price: float      # >= 0


@dataclass(frozen=True)
class RawLine:
    """One candidate line as found in the order, before catalog resolution."""
    product_id: Identifier
    line_ref: Optional[Identifier]
    quantity: int
    name: Optional[str] = None
    price: Optional[float] = None


# -----------------------------
# Field helpers
# -----------------------------

def _is_sequence(v: Any) -> bool:
    return isinstance(v, (list, tuple))


def _quantity(v: Any) -> int:
    ok, q = try_parse_int(v)
    return q if ok and q >= 1 else 1


def _embedded_name(d: Mapping[str, Any]) -> Optional[str]:
    name = first_key(d, *_NAME_KEYS)
    return str(name) if name else None


def _embedded_price(d: Mapping[str, Any]) -> Optional[float]:
    ok, price = try_parse_float(first_key(d, *_PRICE_KEYS))
    return price if ok and price >= 0 else None


def _bare_id(v: Any) -> Optional[Identifier]:
    # ints, integral floats and digit strings only
    if isinstance(v, bool):
        return None
    if isinstance(v, str) and not v.strip().isdigit():
        return None
    pid = coerce_id(v)
    return pid if isinstance(pid, int) else None


def _order_line(order: Mapping[str, Any], product_id: Identifier, source: Mapping[str, Any] | None = None) -> RawLine:
    """Single-item line keyed by the order itself."""
    src = source if source is not None else order
    qty = src.get("quantity") if "quantity" in src else order.get("quantity")
    return RawLine(
        product_id=product_id,
        line_ref=coerce_id(order.get("id")),
        quantity=_quantity(qty),
        name=_embedded_name(src),
        price=_embedded_price(src),
    )


def _product_like_rows(order: Mapping[str, Any], rows, id_keys: Tuple[str, ...]) -> List[RawLine]:
    out = []
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        pid = coerce_id(first_key(row, *id_keys))
        if pid is None:
            continue
        out.append(_order_line(order, pid, row))
    return out


# -----------------------------
# Shape rules (priority order)
# -----------------------------

def _item_rows(order: Mapping[str, Any]) -> List[RawLine]:
    items = order.get("items")
    if not _is_sequence(items):
        return []
    order_id = coerce_id(order.get("id"))
    out = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        item_id = coerce_id(item.get("id"))
        pid = coerce_id(first_key(item, *_PRODUCT_REF_KEYS))
        if pid is None:
            pid = item_id
        if pid is None:
            continue
        out.append(RawLine(
            product_id=pid,
            line_ref=item_id if item_id is not None else order_id,
            quantity=_quantity(item.get("quantity")),
            name=_embedded_name(item),
            price=_embedded_price(item),
        ))
    return out


def _product_rows(order: Mapping[str, Any]) -> List[RawLine]:
    products = order.get("products")
    if not _is_sequence(products):
        return []
    return _product_like_rows(order, products, ("id",))


def _top_level_product_ref(order: Mapping[str, Any]) -> Optional[Identifier]:
    return coerce_id(first_key(order, *_PRODUCT_REF_KEYS))


def _items_beside_product(order: Mapping[str, Any]) -> List[RawLine]:
    if "items" not in order or _is_sequence(order.get("items")):
        return []
    pid = _top_level_product_ref(order)
    return [_order_line(order, pid)] if pid is not None else []


def _single_product_id(order: Mapping[str, Any]) -> List[RawLine]:
    if "items" in order or "products" in order or "quantity" not in order:
        return []
    pid = _top_level_product_ref(order)
    return [_order_line(order, pid)] if pid is not None else []


def _embedded_product(order: Mapping[str, Any]) -> List[RawLine]:
    product = order.get("product")
    if not isinstance(product, Mapping):
        return []
    pid = coerce_id(product.get("id"))
    if pid is None:
        return []
    line = _order_line(order, pid, product)
    # the embedded product describes the article; quantity lives on the order
    return [RawLine(line.product_id, line.line_ref, _quantity(order.get("quantity")), line.name, line.price)]


def _fallback_scan(order: Mapping[str, Any]) -> List[RawLine]:
    for field in FALLBACK_FIELDS:
        if field not in order:
            continue
        v = order[field]
        if _is_sequence(v):
            lines = _product_like_rows(order, v, ("product_id", "productId", "id"))
        elif isinstance(v, Mapping):
            lines = _product_like_rows(order, [v], ("product_id", "productId", "id"))
        else:
            pid = _bare_id(v)
            lines = [_order_line(order, pid)] if pid is not None else []
        if lines:
            _log.debug("fallback scan: order %r resolved via field %r", order.get("id"), field)
            return lines
    return []


ShapeRule = Callable[[Mapping[str, Any]], List[RawLine]]

SHAPE_RULES: Tuple[Tuple[str, ShapeRule], ...] = (
    ("items", _item_rows),
    ("products", _product_rows),
    ("items_beside_product", _items_beside_product),
    ("product_id", _single_product_id),
    ("product", _embedded_product),
    ("fallback_scan", _fallback_scan),
)


# -----------------------------
# Public API
# -----------------------------

def match_order_shape(order: Any) -> Tuple[Optional[str], List[RawLine]]:
    """
    Run the shape rules in priority order.

    Returns (rule_name, raw_lines) for the first rule yielding lines, or
    (None, []) when nothing matches.
    """
    if not isinstance(order, Mapping):
        return None, []
    for name, rule in SHAPE_RULES:
        lines = rule(order)
        if lines:
            return name, lines
    return None, []


def _resolve(raw: RawLine, catalog) -> NormalizedLineItem:
    product = lookup(catalog, raw.product_id)
    if product is None:
        _log.debug("product %r not in catalog; using embedded/fallback name and price", raw.product_id)
        name = raw.name or PRODUCT_LABEL_TEMPLATE.format(id=raw.product_id)
        price = raw.price if raw.price is not None else 0.0
    else:
        name = product.display_name or raw.name or PRODUCT_LABEL_TEMPLATE.format(id=raw.product_id)
        price = product.price
    return NormalizedLineItem(
        product_id=raw.product_id,
        line_ref=raw.line_ref,
        name=name,
        quantity=raw.quantity,
        unit_price=float(price),
    )


def normalize_order_lines(order: Any, catalog) -> List[NormalizedLineItem]:
    """
    Extract the purchasable lines of one order.

    Pure: same (order, catalog) always gives an equal list. An unmatched order
    gives []. Products missing from the catalog degrade to embedded or
    synthetic names/prices and never abort the call. `catalog` may be any
    product source as_catalog() accepts.
    """
    rule, raw_lines = match_order_shape(order)
    if rule is None:
        _log.debug("order %r: no recognised line shape",
                   order.get("id") if isinstance(order, Mapping) else order)
        return []
    _log.debug("order %r: shape %r, %d line(s)", order.get("id"), rule, len(raw_lines))
    index = as_catalog(catalog)
    return [_resolve(r, index) for r in raw_lines]
