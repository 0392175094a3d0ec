import pytest

from returns_console.modules.returns.draft import DomainError, ReturnSelection, build_return_draft
from returns_console.modules.returns.order_lines import NormalizedLineItem
from returns_console.modules.returns.workflow import (
    ReturnState,
    ReturnWorkflow,
    Stage,
    choose_customer,
    choose_order,
    choose_product,
    change_quantity,
    validate_state,
)
from returns_console.utils.helpers import today_str


@pytest.fixture()
def wf(orders, products, customers):
    return ReturnWorkflow(orders, products, customers)


def test_full_forward_walk(wf):
    assert wf.stage is Stage.NO_CUSTOMER

    s = wf.select_customer(7)
    assert s.stage is Stage.CUSTOMER_SELECTED
    assert [o["id"] for o in s.customer_orders] == [42, 43, 45]

    s = wf.select_order(42)
    assert s.stage is Stage.ORDER_SELECTED
    assert len(s.lines) == 1

    s = wf.select_product(9)
    assert s.stage is Stage.PRODUCT_SELECTED
    assert (s.quantity, s.refund_amount) == (1, 10.0)

    s = wf.set_quantity(5)
    assert (s.quantity, s.refund_amount) == (3, 30.0)

    s = wf.set_reason("defective", "Bag was torn")
    assert s.stage is Stage.READY


def test_new_order_clears_product_and_quantity(wf):
    wf.select_customer(7)
    wf.select_order(42)
    wf.select_product(9)
    wf.set_quantity(2)
    wf.set_reason("damaged")

    s = wf.select_order(43)
    assert s.line is None
    assert (s.quantity, s.refund_amount) == (1, 0.0)
    assert s.stage is Stage.ORDER_SELECTED
    assert s.reason == "damaged"
    assert [ln.line_ref for ln in s.lines] == [501, 502]


def test_new_customer_clears_everything_after_it(wf):
    wf.select_customer(7)
    wf.select_order(43)
    wf.select_product(2)

    s = wf.select_customer(8)
    assert s.order is None
    assert s.lines == ()
    assert s.line is None
    assert [o["id"] for o in s.customer_orders] == [44, 46]


def test_reselecting_same_customer_still_resets(wf):
    wf.select_customer(7)
    wf.select_order(42)
    s = wf.select_customer(7)
    assert s.stage is Stage.CUSTOMER_SELECTED


def test_transitions_are_gated(wf):
    # nothing picked yet
    assert wf.select_order(42) == ReturnState()
    assert wf.select_product(9) == ReturnState()
    assert wf.set_quantity(3) == ReturnState()

    wf.select_customer(7)
    before = wf.state
    # order 44 belongs to customer 8
    assert wf.select_order(44) is before
    assert wf.select_customer(999) is before


def test_order_without_products_is_a_valid_state(wf):
    wf.select_customer(7)
    s = wf.select_order(45)
    assert s.stage is Stage.ORDER_SELECTED
    assert s.order_has_no_products
    assert validate_state(s)["product"] == "This order has no products to return."


def test_duplicate_product_lines_pick_by_line_ref(catalog):
    order = {"id": 60, "customerId": 7, "items": [
        {"id": 1, "product_id": 9, "quantity": 1},
        {"id": 2, "product_id": 9, "quantity": 5},
    ]}
    s = choose_customer(ReturnState(), {"id": 7}, [order])
    s = choose_order(s, 60, catalog)

    assert choose_product(s, 9).line.line_ref == 1
    picked = choose_product(s, 9, line_ref=2)
    assert picked.line.line_ref == 2
    assert change_quantity(picked, 4).quantity == 4


def test_reducers_do_not_mutate_input(orders, catalog):
    start = ReturnState()
    s1 = choose_customer(start, {"id": 7}, orders)
    s2 = choose_order(s1, 42, catalog)
    assert start == ReturnState()
    assert s1.order is None
    assert s2.order["id"] == 42


def test_validate_lists_every_missing_step():
    errors = validate_state(ReturnState())
    assert set(errors) == {"customer", "order", "product", "reason"}


def test_build_draft_requires_complete_state(wf):
    wf.select_customer(7)
    wf.select_order(42)
    wf.select_product(9)
    with pytest.raises(DomainError, match="Return reason is required."):
        wf.build_draft()


def test_build_draft(wf):
    wf.select_customer(7)
    wf.select_order(43)
    wf.select_product(2)
    wf.set_reason("wrongOrder", "Sent sugar instead of salt")

    draft = wf.build_draft()
    assert draft == ReturnSelection(
        customer_id=7,
        order_id=43,
        line_ref=502,
        product_id=2,
        product_name="Sugar",
        quantity=1,
        refund_amount=4.5,
        reason="wrongOrder",
        description="Sent sugar instead of salt",
        customer_name="Aisha",
        return_date=today_str(),
    )


def test_build_return_draft_trusts_inputs():
    line = NormalizedLineItem(product_id=9, line_ref=42, name="Rice", quantity=3, unit_price=10.0)
    draft = build_return_draft({"id": 12}, {"id": 42}, line, "", 0, 0.0)
    assert draft.quantity == 0
    assert draft.customer_name == "Customer 12"


def test_workflow_accepts_prebuilt_catalog(orders, catalog, customers):
    wf = ReturnWorkflow(orders, catalog, customers)
    wf.select_customer({"id": 8, "name": "Omar"})
    s = wf.select_order(46)
    assert s.lines[0].name == "Flour"


def test_reset(wf):
    wf.select_customer(7)
    assert wf.reset() == ReturnState()


def test_workflow_accepts_dict_of_rows_catalog(orders, customers):
    wf = ReturnWorkflow(orders, {9: {"name": "Rice", "price": 10}}, customers)
    wf.select_customer(7)
    s = wf.select_order(42)
    assert [(ln.name, ln.unit_price) for ln in s.lines] == [("Rice", 10.0)]
    wf.select_product(9)
    s = wf.set_quantity(2)
    assert s.refund_amount == 20.0
