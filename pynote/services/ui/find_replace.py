from __future__ import annotations

from typing import Protocol

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QDialog,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
)

from pynote.domain.models import (
    ReplaceRequest,
    ReplaceResult,
    SearchOptions,
    SearchRequest,
    SearchResult,
)
from pynote.services import find_engine
from pynote.services.ui.adapters.qt_text_editor import QtPlainTextEditorAdapter
from pynote.services.ui.ports.messages import IMessageService
from pynote.utils.constants import APP_NAME

# -------------------------
# Ports / Service
# -------------------------


class EditorPort(Protocol):
    def text(self) -> str: ...
    def selection(self) -> tuple[int, int]: ...
    def selected_text(self) -> str: ...
    def set_selection(self, start: int, length: int) -> None: ...
    def replace_selection(self, start: int, length: int, replacement: str) -> None: ...
    def replace_all_text(self, text: str) -> None: ...


class PlainTextSearchService:
    """
    Turns the editor's current state into request values, runs them through
    the find engine and applies the resulting selection or text back.

    Remembers the last SearchOptions so F3 / Shift+F3 can repeat a search
    after the dialog is closed.
    """

    def __init__(self, editor: EditorPort):
        self._ed = editor
        self.last_options: SearchOptions | None = None

    def _remember(self, opt: SearchOptions) -> None:
        if opt.needle:
            self.last_options = opt

    def find(self, opt: SearchOptions, *, reverse: bool = False) -> SearchResult:
        self._remember(opt)
        if not opt.needle:
            return SearchResult(found=False)
        start, length = self._ed.selection()
        result = find_engine.find(SearchRequest(self._ed.text(), opt, start, length, reverse))
        if result.found:
            self._ed.set_selection(result.start, result.length)
        return result

    def find_again(self, *, reverse: bool = False) -> SearchResult | None:
        """Repeat the last search; None when nothing has been searched yet."""
        if self.last_options is None:
            return None
        return self.find(self.last_options, reverse=reverse)

    def replace_one(self, opt: SearchOptions, replacement: str) -> ReplaceResult:
        self._remember(opt)
        start, length = self._ed.selection()
        req = ReplaceRequest(self._ed.text(), opt, replacement, start, length)
        if not opt.needle:
            return ReplaceResult(req.text, start, length)

        result = find_engine.replace_once(req)
        if result.replaced:
            self._ed.replace_selection(start, length, replacement)
        if result.found:
            self._ed.set_selection(result.selection_start, result.selection_length)
        return result

    def replace_all(self, opt: SearchOptions, replacement: str) -> ReplaceResult:
        self._remember(opt)
        start, length = self._ed.selection()
        req = ReplaceRequest(self._ed.text(), opt, replacement, start, length)
        if not opt.needle:
            return ReplaceResult(req.text, start, length)

        result = find_engine.replace_everything(req)
        if result.changed:
            self._ed.replace_all_text(result.text)
            self._ed.set_selection(result.selection_start, 0)
        return result


# -------------------------
# Dialog (View/Controller)
# -------------------------


class FindReplaceDialog(QDialog):
    """Non-modal find/replace dialog backed by PlainTextSearchService."""

    text_replaced = pyqtSignal(int)

    def __init__(
        self,
        editor: QPlainTextEdit,
        messages: IMessageService,
        parent=None,
        *,
        service: PlainTextSearchService | None = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Find")
        self.setModal(False)

        self._messages = messages
        self.service = service or PlainTextSearchService(QtPlainTextEditorAdapter(editor))

        # Widgets
        self.find_edit = QLineEdit()
        self.replace_edit = QLineEdit()
        self.replace_label = QLabel("Replace with:")
        self.case_cb = QCheckBox("Match case")
        self.up_rb = QRadioButton("Up")
        self.down_rb = QRadioButton("Down")
        self.down_rb.setChecked(True)

        self.find_next_btn = QPushButton("Find Next")
        self.replace_btn = QPushButton("Replace")
        self.replace_all_btn = QPushButton("Replace All")
        self.close_btn = QPushButton("Cancel")
        self.find_next_btn.setDefault(True)

        # Layout
        form = QGridLayout()
        form.addWidget(QLabel("Find what:"), 0, 0)
        form.addWidget(self.find_edit, 0, 1)
        form.addWidget(self.replace_label, 1, 0)
        form.addWidget(self.replace_edit, 1, 1)

        direction = QGroupBox("Direction")
        dl = QHBoxLayout(direction)
        dl.addWidget(self.up_rb)
        dl.addWidget(self.down_rb)

        opts = QHBoxLayout()
        opts.addWidget(self.case_cb)
        opts.addStretch(1)
        opts.addWidget(direction)

        buttons = QVBoxLayout()
        buttons.addWidget(self.find_next_btn)
        buttons.addWidget(self.replace_btn)
        buttons.addWidget(self.replace_all_btn)
        buttons.addWidget(self.close_btn)
        buttons.addStretch(1)

        left = QVBoxLayout()
        left.addLayout(form)
        left.addLayout(opts)

        root = QHBoxLayout(self)
        root.addLayout(left, 1)
        root.addLayout(buttons)

        # Signals
        self.find_next_btn.clicked.connect(self.find_next)
        self.replace_btn.clicked.connect(self.replace_one)
        self.replace_all_btn.clicked.connect(self.replace_all)
        self.close_btn.clicked.connect(self.close)
        self.find_edit.textChanged.connect(self._update_buttons)
        self._update_buttons()

    # Public API used by MainWindow wiring
    def show_find(self, initial: str = "") -> None:
        self._set_replace_mode(False)
        self._present(initial)

    def show_replace(self, initial: str = "") -> None:
        self._set_replace_mode(True)
        self._present(initial)

    def set_flags(self, match_case: bool, search_down: bool) -> None:
        self.case_cb.setChecked(match_case)
        (self.down_rb if search_down else self.up_rb).setChecked(True)

    def options(self) -> SearchOptions:
        return SearchOptions(
            needle=self.find_edit.text(),
            match_case=self.case_cb.isChecked(),
            search_down=self.down_rb.isChecked(),
        )

    @property
    def is_replace_mode(self) -> bool:
        return not self.replace_edit.isHidden()

    # Actions
    def find_next(self) -> bool:
        opt = self.options()
        if not opt.needle:
            return False
        result = self.service.find(opt)
        if not result.found:
            self._not_found(opt.needle)
        return result.found

    def replace_one(self) -> None:
        opt = self.options()
        result = self.service.replace_one(opt, self.replace_edit.text())
        if result.replaced:
            self.text_replaced.emit(result.replaced)
        if not result.found and opt.needle:
            self._not_found(opt.needle)

    def replace_all(self) -> int:
        result = self.service.replace_all(self.options(), self.replace_edit.text())
        if result.replaced:
            self.text_replaced.emit(result.replaced)
        self.setWindowTitle(f"Replace - {result.replaced} replaced")
        return result.replaced

    # Internal helpers
    def _set_replace_mode(self, on: bool) -> None:
        self.setWindowTitle("Replace" if on else "Find")
        for w in (self.replace_label, self.replace_edit, self.replace_btn, self.replace_all_btn):
            w.setVisible(on)

    def _present(self, initial: str) -> None:
        if initial and not self.find_edit.text():
            self.find_edit.setText(initial)
        self.show()
        self.raise_()
        self.activateWindow()
        self.find_edit.setFocus()
        self.find_edit.selectAll()

    def _update_buttons(self) -> None:
        enabled = bool(self.find_edit.text())
        for b in (self.find_next_btn, self.replace_btn, self.replace_all_btn):
            b.setEnabled(enabled)

    def _not_found(self, needle: str) -> None:
        self._messages.info(self, APP_NAME, f'Cannot find "{needle}"')
