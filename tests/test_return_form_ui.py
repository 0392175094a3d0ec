# tests/test_return_form_ui.py

import pytest

# Skip the entire module if PySide6 is not available
pytest.importorskip("PySide6")

from unittest.mock import patch

from returns_console.modules.returns.form import CustomerReturnForm
from returns_console.modules.returns.workflow import Stage


@pytest.fixture
def form(qtbot, customers, orders, products):
    f = CustomerReturnForm(None, customers=customers, orders=orders, products=products)
    qtbot.addWidget(f)
    return f


def _pick(combo, data):
    idx = combo.findData(data)
    assert idx >= 0, f"{data!r} not offered"
    combo.setCurrentIndex(idx)


def test_customer_pick_fills_orders(form):
    assert not form.cmb_order.isEnabled()
    _pick(form.cmb_customer, 7)
    assert form.cmb_order.isEnabled()
    offered = [form.cmb_order.itemData(i) for i in range(1, form.cmb_order.count())]
    assert offered == [42, 43, 45]
    assert form.cmb_order.itemText(1) == "Order #42 - 2024-05-01"


def test_quantity_is_capped_and_refund_shown(form):
    _pick(form.cmb_customer, 7)
    _pick(form.cmb_order, 42)
    assert form.lines_model.rowCount() == 1

    form.tbl_lines.selectRow(0)
    assert form.workflow.stage is Stage.PRODUCT_SELECTED
    assert form.spin_qty.isEnabled()

    form.spin_qty.setValue(5)
    assert form.workflow.state.quantity == 3
    assert form.lbl_refund.text() == "30.00 SAR"


def test_empty_order_shows_info_label(form):
    _pick(form.cmb_customer, 7)
    _pick(form.cmb_order, 45)
    assert not form.lbl_no_products.isHidden()
    assert form.lines_model.rowCount() == 0


def test_changing_customer_clears_lines(form):
    _pick(form.cmb_customer, 7)
    _pick(form.cmb_order, 43)
    form.tbl_lines.selectRow(1)
    _pick(form.cmb_customer, 8)
    assert form.lines_model.rowCount() == 0
    assert form.workflow.state.line is None
    assert not form.spin_qty.isEnabled()
    assert form.lbl_refund.text() == "0.00 SAR"


def test_submit_blocked_until_complete(form):
    with patch("PySide6.QtWidgets.QMessageBox.warning") as mock_warn:
        assert form.get_payload() is None
        assert mock_warn.called
        assert "Customer is required." in mock_warn.call_args[0][2]


def test_payload_after_full_walk(form):
    _pick(form.cmb_customer, 7)
    _pick(form.cmb_order, 43)
    form.tbl_lines.selectRow(0)
    form.spin_qty.setValue(2)
    _pick(form.cmb_reason, "defective")
    form.txt_description.setPlainText("Weevils in the bag")

    form.accept()
    assert form.payload() == {
        "customer": 7,
        "order_item": 501,
        "product": 9,
        "quantity": 2,
        "return_reason": "defective",
        "refund_amount": 20.0,
    }
    assert form.draft().description == "Weevils in the bag"


def test_selected_line_label(form):
    _pick(form.cmb_customer, 8)
    _pick(form.cmb_order, 44)
    form.tbl_lines.selectRow(0)
    assert form.lbl_selected.text() == "Sugar (Qty: 4)"
