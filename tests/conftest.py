# returns_console/tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - pytest-qt owns QApplication (use qapp/qtbot fixtures)
# - Pure return-engine tests never import Qt
# - Fixture data mirrors the shapes the orders API has returned over time
# ---------------------------------------------------------------------

from __future__ import annotations

import pytest

from returns_console.modules.returns.catalog import build_catalog


# ---------- Qt: let pytest-qt own the app ----------
@pytest.fixture(scope="session")
def app(qapp):  # alias to match code that expects an `app` fixture
    return qapp


# ---------- Snapshots ----------
@pytest.fixture()
def products() -> list[dict]:
    return [
        {"id": 9, "name": "Rice", "price": 10},
        {"id": 2, "name": "Sugar", "nameEn": "Sugar", "price": 4.5},
        {"id": 3, "name": "", "nameEn": "Flour", "price": 7},
    ]


@pytest.fixture()
def catalog(products):
    return build_catalog(products)


@pytest.fixture()
def customers() -> list[dict]:
    return [
        {"id": 7, "customer_name": "Aisha"},
        {"id": 8, "name": "Omar"},
        {"id": 12},
    ]


@pytest.fixture()
def orders() -> list[dict]:
    return [
        # products[] shape, customer referenced by display string
        {"id": 42, "customer": "Customer #7", "createdAt": "2024-05-01T10:00:00Z",
         "products": [{"id": 9, "quantity": 3}]},
        # items[] shape, numeric customerId
        {"id": 43, "customerId": 7,
         "items": [{"id": 501, "product_id": 9, "quantity": 2},
                   {"id": 502, "product_id": 2, "quantity": 1}]},
        # single product_id + quantity, customer_id
        {"id": 44, "customer_id": 8, "product_id": 2, "quantity": 4},
        # nothing returnable
        {"id": 45, "customerId": 7, "status": "pending"},
        # embedded product object
        {"id": 46, "customer": "Customer #8", "product": {"id": 3, "name": "Flour"}, "quantity": 2},
    ]
