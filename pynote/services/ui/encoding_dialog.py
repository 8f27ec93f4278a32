from __future__ import annotations

from PyQt6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QVBoxLayout,
)

from pynote.domain.models import SAVE_ENCODINGS, EncodingKind, TextEncoding


class EncodingDialog(QDialog):
    """Modal "Choose Encoding" prompt shown by Save As."""

    def __init__(self, current: TextEncoding | None = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Choose Encoding")
        self.setModal(True)

        self.combo = QComboBox(self)
        for enc in SAVE_ENCODINGS:
            self.combo.addItem(enc.label)
        self.combo.setCurrentIndex(self._index_of(current))

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel, self
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        form = QFormLayout()
        form.addRow("Encoding:", self.combo)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(buttons)

    @staticmethod
    def _index_of(current: TextEncoding | None) -> int:
        # Unknown/OTHER encodings preselect ANSI.
        if current is None or current.kind is EncodingKind.OTHER:
            return 0
        for i, enc in enumerate(SAVE_ENCODINGS):
            if enc.kind is current.kind:
                return i
        return 0

    def selected_encoding(self, ansi: TextEncoding | None = None) -> TextEncoding:
        enc = SAVE_ENCODINGS[max(0, self.combo.currentIndex())]
        if enc.kind is EncodingKind.ANSI and ansi is not None:
            return ansi
        return enc
