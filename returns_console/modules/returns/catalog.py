"""
returns/catalog.py

Catalog Index: product id -> product attributes (name, price).

The product list arrives already fetched; this module only indexes and reads
it. Pass the resulting dict into the normalizer explicitly.

Callers may hand over a product list, a Product-valued dict, or a plain
dict-of-dicts keyed by id ({9: {"name": "Rice", "price": 10}}). as_catalog()
turns any of those into the one indexed form, keyed by coerce_id().
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ...utils.helpers import first_key
from ...utils.validators import coerce_id, try_parse_float

Identifier = Union[int, str]
Catalog = Dict[Identifier, "Product"]

__all__ = [
    "Identifier",
    "Catalog",
    "Product",
    "product_from_row",
    "build_catalog",
    "as_catalog",
    "lookup",
]


@dataclass(frozen=True)
class Product:
    id: Identifier
    name: str
    price: float = 0.0
    name_en: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.name_en or ""


def product_from_row(row: Mapping[str, Any]) -> Optional[Product]:
    """Build a Product from an API/DB row; None when the row has no usable id."""
    pid = coerce_id(first_key(row, "id", "product_id", "productId"))
    if pid is None:
        return None
    ok, price = try_parse_float(first_key(row, "price", "unit_price", "unitPrice"))
    return Product(
        id=pid,
        name=str(row.get("name") or ""),
        price=price if ok and price > 0 else 0.0,
        name_en=first_key(row, "nameEn", "name_en"),
    )


def build_catalog(rows: Iterable[Union[Product, Mapping[str, Any]]]) -> Catalog:
    """
    Index a product list by id. Later rows win on duplicate ids.
    Rows without an id are skipped.
    """
    out: Catalog = {}
    for r in rows or ():
        p = r if isinstance(r, Product) else product_from_row(r)
        pid = coerce_id(p.id) if p is not None else None
        if pid is None:
            continue
        out[pid] = p if p.id == pid else replace(p, id=pid)
    return out


def _is_indexed(catalog: Mapping[Any, Any]) -> bool:
    return all(isinstance(v, Product) and coerce_id(k) == k for k, v in catalog.items())


def as_catalog(source) -> Catalog:
    """
    Normalise whatever product source a caller holds into a Catalog.

    - None -> {}
    - an already indexed Catalog is returned as is
    - a dict keyed by id: the key is the product id, values may be Product
      objects or rows ({"name": ..., "price": ...}); entries whose value is
      neither are skipped
    - anything else is treated as a product list (see build_catalog)
    """
    if not source:
        return {}
    if not isinstance(source, Mapping):
        return build_catalog(source)
    if _is_indexed(source):
        return dict(source)

    out: Catalog = {}
    for key, value in source.items():
        pid = coerce_id(key)
        if pid is None:
            continue
        if isinstance(value, Product):
            out[pid] = replace(value, id=pid)
        elif isinstance(value, Mapping):
            out[pid] = product_from_row({**value, "id": pid})
    return out


def lookup(catalog: Mapping[Identifier, Product], product_id) -> Optional[Product]:
    pid = coerce_id(product_id)
    if pid is None:
        return None
    hit = catalog.get(pid)
    if hit is None and not isinstance(pid, str):
        # catalogs built by hand may still be keyed by the string form
        hit = catalog.get(str(pid))
    return hit
