from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QSpinBox,
    QVBoxLayout,
)


class GoToLineDialog(QDialog):
    def __init__(self, current: int, maximum: int, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Go To Line")
        self.setModal(True)

        self.spin = QSpinBox(self)
        self.spin.setRange(1, max(1, maximum))
        self.spin.setValue(max(1, min(current, maximum)))

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel, self
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        form = QFormLayout()
        form.addRow("Line number:", self.spin)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(buttons)

    def line_number(self) -> int:
        return self.spin.value()
