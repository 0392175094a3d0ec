from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex

from ...utils.helpers import fmt_money
from .order_lines import NormalizedLineItem


class ReturnLinesModel(QAbstractTableModel):
    HEADERS = ["Line", "Product", "Qty Sold", "Unit Price", "Line Total"]

    def __init__(self, rows: list[NormalizedLineItem] | None = None):
        super().__init__()
        self._rows = list(rows or [])

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, idx, role=Qt.DisplayRole):
        if not idx.isValid():
            return None
        r = self._rows[idx.row()]
        if role == Qt.DisplayRole:
            m = [str(r.line_ref), r.name, str(r.quantity),
                 fmt_money(r.unit_price), fmt_money(r.unit_price * r.quantity)]
            return m[idx.column()]
        if role == Qt.TextAlignmentRole and idx.column() >= 2:
            return int(Qt.AlignRight | Qt.AlignVCenter)
        return None

    def headerData(self, s, o, role=Qt.DisplayRole):
        if o == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[s]
        return super().headerData(s, o, role)

    def at(self, row: int) -> NormalizedLineItem:
        return self._rows[row]

    def replace(self, rows: list[NormalizedLineItem]):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()
