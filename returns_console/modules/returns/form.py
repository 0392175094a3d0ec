from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QComboBox, QLabel, QSpinBox,
    QPlainTextEdit, QDialogButtonBox, QMessageBox
)

from ...constants import RETURN_REASONS
from ...utils.helpers import fmt_money
from ...utils.loggers import get_logger
from ...widgets.table_view import TableView
from .draft import DomainError, ReturnSelection
from .mapping import to_api_payload
from .model import ReturnLinesModel
from .order_filter import customer_label, order_label
from .refund import line_label
from .workflow import ReturnWorkflow

_log = get_logger(__name__)


class CustomerReturnForm(QDialog):
    """
    Customer return dialog: customer -> order -> product line -> quantity/reason.

    All state lives in a ReturnWorkflow; the widgets only forward picks to it
    and repaint from its state. Picking an earlier step again clears the later
    ones. Submission is blocked (message box) until every step is filled in.

    payload() returns the REST body built by mapping.to_api_payload();
    draft() returns the underlying ReturnSelection.
    """

    def __init__(self, parent=None, *, customers=None, orders=None, products=None,
                 workflow: ReturnWorkflow | None = None):
        super().__init__(parent)
        self.setWindowTitle("Customer Return")
        self.setModal(True)
        self.workflow = workflow or ReturnWorkflow(orders or [], products or [], customers or [])

        # --- pickers ---
        self.cmb_customer = QComboBox()
        self.cmb_customer.addItem("Select customer", None)
        for c in self.workflow.customers:
            self.cmb_customer.addItem(customer_label(c), c.get("id"))

        self.cmb_order = QComboBox()
        self.cmb_order.setEnabled(False)

        self.tbl_lines = TableView()
        self.lines_model = ReturnLinesModel([])
        self.tbl_lines.setModel(self.lines_model)

        self.lbl_no_products = QLabel("No products in this order.")
        self.lbl_no_products.setStyleSheet("color:#666;")
        self.lbl_no_products.setVisible(False)

        self.lbl_selected = QLabel("")

        self.spin_qty = QSpinBox()
        self.spin_qty.setRange(1, 1)
        self.spin_qty.setEnabled(False)

        self.cmb_reason = QComboBox()
        self.cmb_reason.addItem("Select reason", "")
        for key, label in RETURN_REASONS:
            self.cmb_reason.addItem(label, key)

        self.txt_description = QPlainTextEdit()
        self.txt_description.setPlaceholderText("Describe the issue…")

        self.lbl_refund = QLabel(fmt_money(0.0, currency=True))
        self.lbl_refund.setStyleSheet("font-weight:bold;")

        # --- layout ---
        form = QFormLayout()
        form.addRow("Customer*", self.cmb_customer)
        form.addRow("Order*", self.cmb_order)
        lay = QVBoxLayout(self)
        lay.addLayout(form)
        lay.addWidget(self.tbl_lines, 1)
        lay.addWidget(self.lbl_no_products)
        details = QFormLayout()
        details.addRow("Product", self.lbl_selected)
        details.addRow("Quantity*", self.spin_qty)
        details.addRow("Reason*", self.cmb_reason)
        details.addRow("Description", self.txt_description)
        details.addRow("Refund Amount", self.lbl_refund)
        lay.addLayout(details)

        bb = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        bb.accepted.connect(self.accept)
        bb.rejected.connect(self.reject)
        lay.addWidget(bb)

        # wiring
        self.cmb_customer.currentIndexChanged.connect(self._on_customer)
        self.cmb_order.currentIndexChanged.connect(self._on_order)
        self.tbl_lines.selectionModel().selectionChanged.connect(self._on_line)
        self.spin_qty.valueChanged.connect(self._on_quantity)
        self.cmb_reason.currentIndexChanged.connect(self._on_reason)
        self.txt_description.textChanged.connect(self._on_reason)

        self.resize(720, 560)
        self._payload = None
        self._draft: ReturnSelection | None = None

    # ---- picks ----------------------------------------------------------

    def _on_customer(self, idx: int):
        cid = self.cmb_customer.itemData(idx)
        if cid is None:
            reason, description = self.workflow.state.reason, self.workflow.state.description
            self.workflow.reset()
            self.workflow.set_reason(reason, description)
        else:
            self.workflow.select_customer(cid)

        self.cmb_order.blockSignals(True)
        self.cmb_order.clear()
        self.cmb_order.addItem("Select order", None)
        for o in self.workflow.state.customer_orders:
            self.cmb_order.addItem(order_label(o), o.get("id"))
        self.cmb_order.setEnabled(self.workflow.state.customer is not None)
        self.cmb_order.blockSignals(False)

        self.lines_model.replace([])
        self._refresh()

    def _on_order(self, idx: int):
        oid = self.cmb_order.itemData(idx)
        if oid is None:
            # back to the placeholder: same customer, nothing after it
            self.workflow.select_customer(self.workflow.state.customer)
        else:
            self.workflow.select_order(oid)
        self.lines_model.replace(list(self.workflow.state.lines))
        self._refresh()

    def _on_line(self, *_):
        idxs = self.tbl_lines.selectionModel().selectedRows()
        if not idxs:
            return
        line = self.lines_model.at(idxs[0].row())
        self.workflow.select_product(line.product_id, line.line_ref)
        self._refresh()

    def _on_quantity(self, value: int):
        self.workflow.set_quantity(value)
        self._refresh()

    def _on_reason(self, *_):
        self.workflow.set_reason(
            self.cmb_reason.currentData() or "",
            self.txt_description.toPlainText().strip(),
        )

    # ---- repaint --------------------------------------------------------

    def _refresh(self):
        s = self.workflow.state
        self.lbl_no_products.setVisible(s.order_has_no_products)
        self.tbl_lines.setVisible(not s.order_has_no_products)

        self.spin_qty.blockSignals(True)
        if s.line is not None:
            self.spin_qty.setRange(1, s.line.quantity)
            self.spin_qty.setValue(s.quantity)
            self.spin_qty.setEnabled(True)
        else:
            self.spin_qty.setRange(1, 1)
            self.spin_qty.setValue(1)
            self.spin_qty.setEnabled(False)
        self.spin_qty.blockSignals(False)
        self.lbl_selected.setText(line_label(s.line) if s.line is not None else "")

        self.lbl_refund.setText(fmt_money(s.refund_amount, currency=True))

    # ---- payload --------------------------------------------------------

    def get_payload(self) -> dict | None:
        self._on_reason()
        try:
            draft = self.workflow.build_draft()
        except DomainError as e:
            _log.warning("return submission blocked: %s", str(e).replace("\n", "; "))
            QMessageBox.warning(self, "Validation Errors", str(e))
            return None
        self._draft = draft
        return to_api_payload(draft)

    def accept(self):
        p = self.get_payload()
        if p is None:
            return
        self._payload = p
        _log.info("return drafted: order item %s, qty %s", p["order_item"], p["quantity"])
        super().accept()

    def payload(self):
        return self._payload

    def draft(self) -> ReturnSelection | None:
        return self._draft
