from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QByteArray
from PyQt6.QtGui import QAction, QActionGroup, QKeySequence
from PyQt6.QtWidgets import (
    QLabel,
    QMainWindow,
    QMenu,
    QPlainTextEdit,
    QStatusBar,
)

from pynote.domain.eol_policy import EolStyle, normalize_for_save
from pynote.domain.interfaces import ISettingsService
from pynote.domain.models import Document, TextEncoding
from pynote.services.document_service import DocumentService, LoadCancelledError
from pynote.services.text_metrics import (
    caret_line_col,
    line_count,
    line_start_offset,
    time_date_stamp,
)
from pynote.services.ui.adapters.qt_text_editor import QtPlainTextEditorAdapter
from pynote.services.ui.find_replace import FindReplaceDialog
from pynote.services.ui.ports.dialogs import IFileDialogService
from pynote.services.ui.ports.messages import Answer, IMessageService
from pynote.utils.constants import APP_NAME, FILE_FILTER, MAX_RECENTS, STATUS_MSEC

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Notepad-style window. Owns the QPlainTextEdit and the current Document
    snapshot; reading, writing and searching go through injected services.
    """

    def __init__(
        self,
        documents: DocumentService,
        settings: ISettingsService,
        messages: IMessageService,
        dialogs: IFileDialogService,
        *,
        start_path: Path | None = None,
        word_wrap: bool = False,
        app_title: str = APP_NAME,
        app_version: str = "",
    ) -> None:
        super().__init__()
        self.resize(900, 650)

        self.documents = documents
        self.settings = settings
        self.messages = messages
        self.dialogs = dialogs
        self.app_title = app_title
        self.app_version = app_version

        self.doc: Document = documents.new_document()
        self.recents: list[str] = self.settings.get_recent()

        # Widgets
        self.editor = QPlainTextEdit(self)
        self.editor.setTabStopDistance(8 * self.editor.fontMetrics().horizontalAdvance(" "))
        self.setCentralWidget(self.editor)
        self._adapter = QtPlainTextEditorAdapter(self.editor)

        # Non-modal Find/Replace dialog
        self.find_dialog = FindReplaceDialog(self.editor, self.messages, self)
        self.find_dialog.set_flags(*self.settings.get_find_flags())
        self.find_dialog.text_replaced.connect(self._on_text_replaced)

        # Status bar
        self.pos_label = QLabel(self)
        self.eol_label = QLabel(self)
        self.enc_label = QLabel(self)
        sb = QStatusBar(self)
        for w in (self.pos_label, self.eol_label, self.enc_label):
            sb.addPermanentWidget(w)
        self.setStatusBar(sb)

        # Signals
        self.editor.textChanged.connect(self._on_text_changed)
        self.editor.cursorPositionChanged.connect(self._update_status)

        # UI
        self._build_actions()
        self._build_menu()
        self.act_word_wrap.setChecked(self.settings.get_word_wrap(word_wrap))
        self._toggle_wrap(self.act_word_wrap.isChecked())

        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))

        self._refresh_chrome()

        if start_path:
            self.open_path(start_path)

        # DnD
        self.setAcceptDrops(True)

    # ---------- UI creation ----------
    def _build_actions(self):
        self.act_new = QAction(
            "&New", self, shortcut=QKeySequence.StandardKey.New, triggered=self.new_file
        )
        self.act_open = QAction(
            "&Open…", self, shortcut=QKeySequence.StandardKey.Open, triggered=self._open_dialog
        )
        self.act_save = QAction(
            "&Save", self, shortcut=QKeySequence.StandardKey.Save, triggered=self.save
        )
        self.act_save_as = QAction(
            "Save &As…",
            self,
            shortcut=QKeySequence.StandardKey.SaveAs,
            triggered=self.save_as,
        )
        self.act_exit = QAction("E&xit", self, triggered=self.close)
        self.recent_menu = QMenu("Open &Recent", self)

        self.act_find = QAction(
            "&Find…", self, shortcut=QKeySequence.StandardKey.Find, triggered=self._show_find
        )
        self.act_find_next = QAction(
            "Find &Next", self, shortcut="F3", triggered=lambda: self.find_again(reverse=False)
        )
        self.act_find_prev = QAction(
            "Find Pre&vious",
            self,
            shortcut="Shift+F3",
            triggered=lambda: self.find_again(reverse=True),
        )
        self.act_replace = QAction(
            "&Replace…", self, shortcut="Ctrl+H", triggered=self._show_replace
        )
        self.act_undo = QAction(
            "&Undo", self, shortcut=QKeySequence.StandardKey.Undo, triggered=self.editor.undo
        )
        self.act_cut = QAction(
            "Cu&t", self, shortcut=QKeySequence.StandardKey.Cut, triggered=self.editor.cut
        )
        self.act_copy = QAction(
            "&Copy", self, shortcut=QKeySequence.StandardKey.Copy, triggered=self.editor.copy
        )
        self.act_paste = QAction(
            "&Paste", self, shortcut=QKeySequence.StandardKey.Paste, triggered=self.editor.paste
        )
        # No Del shortcut: the widget still needs the key for single characters.
        self.act_delete = QAction("De&lete", self, triggered=self.delete_selection)
        self.act_undo.setEnabled(False)
        for a in (self.act_cut, self.act_copy, self.act_delete):
            a.setEnabled(False)
        self.editor.undoAvailable.connect(self.act_undo.setEnabled)
        for a in (self.act_cut, self.act_copy, self.act_delete):
            self.editor.copyAvailable.connect(a.setEnabled)

        self.act_goto = QAction("&Go To…", self, shortcut="Ctrl+G", triggered=self.go_to_line)
        self.act_time_date = QAction(
            "Time/&Date", self, shortcut="F5", triggered=self.insert_time_date
        )
        self.act_select_all = QAction(
            "Select &All",
            self,
            shortcut=QKeySequence.StandardKey.SelectAll,
            triggered=self.editor.selectAll,
        )

        self.act_word_wrap = QAction(
            "&Word Wrap", self, checkable=True, checked=False, triggered=self._toggle_wrap
        )

        self.act_status_bar = QAction(
            "&Status Bar", self, checkable=True, checked=True, triggered=self._toggle_status_bar
        )
        self.act_about = QAction("&About…", self, triggered=self.show_about)

        # EOL style, one checkable action per style
        self.eol_group = QActionGroup(self)
        self.eol_actions: dict[EolStyle, QAction] = {}
        for style in EolStyle:
            act = QAction(
                style.display_name,
                self,
                checkable=True,
                triggered=lambda chk=False, s=style: self.set_eol(s),
            )
            self.eol_group.addAction(act)
            self.eol_actions[style] = act

    def _build_menu(self):
        m = self.menuBar()
        filem = m.addMenu("&File")
        for a in (self.act_new, self.act_open):
            filem.addAction(a)
        filem.addMenu(self.recent_menu)
        filem.addSeparator()
        filem.addAction(self.act_save)
        filem.addAction(self.act_save_as)
        filem.addSeparator()
        filem.addAction(self.act_exit)
        self._refresh_recent_menu()

        editm = m.addMenu("&Edit")
        editm.addAction(self.act_undo)
        editm.addSeparator()
        for a in (self.act_cut, self.act_copy, self.act_paste, self.act_delete):
            editm.addAction(a)
        editm.addSeparator()
        for a in (self.act_find, self.act_find_next, self.act_find_prev, self.act_replace):
            editm.addAction(a)
        editm.addAction(self.act_goto)
        editm.addSeparator()
        editm.addAction(self.act_select_all)
        editm.addAction(self.act_time_date)

        formatm = m.addMenu("F&ormat")
        formatm.addAction(self.act_word_wrap)

        viewm = m.addMenu("&View")
        viewm.addAction(self.act_status_bar)
        eolm = viewm.addMenu("&Line Endings")
        for a in self.eol_actions.values():
            eolm.addAction(a)

        helpm = m.addMenu("&Help")
        helpm.addAction(self.act_about)

    def _refresh_recent_menu(self):
        self.recent_menu.clear()
        if not self.recents:
            na = QAction("(empty)", self)
            na.setEnabled(False)
            self.recent_menu.addAction(na)
            return
        for p in self.recents[:MAX_RECENTS]:
            self.recent_menu.addAction(
                QAction(p, self, triggered=lambda chk=False, x=p: self.open_path(Path(x)))
            )

    # ---------- File ----------
    def new_file(self) -> None:
        if not self._confirm_discard():
            return
        self._set_editor_text("")
        self.doc = self.doc.reset_to_untitled(self.documents.default_encoding)
        self._refresh_chrome()

    def _open_dialog(self):
        start = str(self.doc.path.parent) if self.doc.path else ""
        path = self.dialogs.get_open_file(self, "Open", start, FILE_FILTER)
        if path:
            self.open_path(path)

    def open_path(self, path: Path) -> bool:
        if not self._confirm_discard():
            return False
        try:
            loaded = self.documents.load(path, confirm_large_file=self._confirm_large_file)
        except LoadCancelledError:
            return False
        except FileNotFoundError as e:
            self.messages.error(self, APP_NAME, f"Could not open file (not found).\n\n{e}")
            return False
        except PermissionError as e:
            self.messages.error(self, APP_NAME, f"Could not open file (access denied).\n\n{e}")
            return False
        except OSError as e:
            logger.exception("Failed to open %s", path)
            self.messages.error(self, APP_NAME, f"Could not open file (I/O error).\n\n{e}")
            return False

        # The widget keeps one kind of line break; the style lives on the snapshot.
        self._set_editor_text(normalize_for_save(loaded.text, EolStyle.LF))
        self.doc = loaded.document
        self._refresh_chrome()
        self._add_recent(path)
        return True

    def save(self) -> bool:
        if self.doc.path is None:
            return self.save_as()
        return self._write(self.doc.path, None)

    def save_as(self) -> bool:
        start = str(self.doc.path) if self.doc.path else "Untitled.txt"
        path = self.dialogs.get_save_file(self, "Save As", start, FILE_FILTER)
        if not path:
            return False
        encoding = self.dialogs.choose_encoding(self, self.doc.encoding)
        if encoding is None:
            return False
        if self._write(path, encoding):
            self._add_recent(path)
            return True
        return False

    def _write(self, path: Path, encoding: TextEncoding | None) -> bool:
        try:
            self.doc = self.documents.save(
                self.doc, self._adapter.text(), path=path, encoding=encoding
            )
        except PermissionError as e:
            self.messages.error(self, APP_NAME, f"Could not save file (access denied).\n\n{e}")
            return False
        except OSError as e:
            logger.exception("Failed to save %s", path)
            self.messages.error(self, APP_NAME, f"Could not save file (I/O error).\n\n{e}")
            return False
        self._refresh_chrome()
        self.statusBar().showMessage(f"Saved: {path}", STATUS_MSEC)
        return True

    # ---------- Edit ----------
    def _show_find(self):
        self.find_dialog.show_find(self._adapter.selected_text())

    def _show_replace(self):
        self.find_dialog.show_replace(self._adapter.selected_text())

    def find_again(self, *, reverse: bool = False) -> None:
        result = self.find_dialog.service.find_again(reverse=reverse)
        if result is None:
            self._show_find()
        elif not result.found:
            needle = self.find_dialog.service.last_options.needle
            self.messages.info(self, APP_NAME, f'Cannot find "{needle}"')

    def go_to_line(self) -> None:
        text = self._adapter.text()
        start, _ = self._adapter.selection()
        current, _ = caret_line_col(text, start)
        line = self.dialogs.ask_line_number(self, current, line_count(text))
        if line is None:
            return
        self._adapter.set_selection(line_start_offset(text, line), 0)

    def insert_time_date(self) -> None:
        self.editor.insertPlainText(time_date_stamp())

    def delete_selection(self) -> None:
        self.editor.textCursor().removeSelectedText()

    def _on_text_replaced(self, count: int) -> None:
        self.statusBar().showMessage(f"{count} replaced", STATUS_MSEC)

    # ---------- Format / View ----------
    def _toggle_wrap(self, on: bool):
        mode = (
            QPlainTextEdit.LineWrapMode.WidgetWidth if on else QPlainTextEdit.LineWrapMode.NoWrap
        )
        self.editor.setLineWrapMode(mode)
        self.settings.set_word_wrap(on)

    def _toggle_status_bar(self, on: bool):
        self.statusBar().setVisible(on)

    def set_eol(self, style: EolStyle | str) -> None:
        self.doc = self.doc.set_eol(style)
        self._update_status()

    # ---------- Help ----------
    def show_about(self) -> None:
        name = f"{self.app_title} {self.app_version}".strip()
        self.messages.info(
            self,
            f"About {self.app_title}",
            f"{name}\nA plain-text editor with encoding and line-ending control.",
        )

    # ---------- Helpers ----------
    def _set_editor_text(self, text: str) -> None:
        # Programmatic loads must not flag the document as modified.
        self.editor.blockSignals(True)
        try:
            self.editor.setPlainText(text)
        finally:
            self.editor.blockSignals(False)
        # setPlainText clears the undo stack and selection while signals were off
        self.act_undo.setEnabled(False)
        for a in (self.act_cut, self.act_copy, self.act_delete):
            a.setEnabled(False)

    def _on_text_changed(self):
        if not self.doc.is_modified:
            self.doc = self.doc.mark_modified()
            self._update_title()
        self._update_status()

    def _refresh_chrome(self):
        self._update_title()
        self._update_status()

    def _update_title(self):
        star = "*" if self.doc.is_modified else ""
        self.setWindowTitle(f"{star}{self.doc.display_name} - {self.app_title}")

    def _update_status(self):
        text = self._adapter.text()
        start, _ = self._adapter.selection()
        line, col = caret_line_col(text, start)
        self.pos_label.setText(f"Ln {line}, Col {col}")
        self.eol_label.setText(self.doc.eol_name)
        self.enc_label.setText(self.doc.encoding.label)
        self.eol_actions[self.doc.eol].setChecked(True)

    def _confirm_discard(self) -> bool:
        if not self.doc.is_modified:
            return True
        answer = self.messages.ask_save_changes(
            self, APP_NAME, f"Do you want to save changes to {self.doc.display_name}?"
        )
        if answer is Answer.CANCEL:
            return False
        if answer is Answer.YES:
            return self.save()
        return True

    def _confirm_large_file(self, size: int) -> bool:
        mb = size // (1024 * 1024)
        return self.messages.ask(
            self, APP_NAME, f"The file is {mb} MB. Opening may be slow. Open anyway?"
        )

    def _add_recent(self, path: Path):
        s = str(path)
        if s in self.recents:
            self.recents.remove(s)
        self.recents.insert(0, s)
        self.recents = self.recents[:MAX_RECENTS]
        self.settings.set_recent(self.recents)
        self._refresh_recent_menu()

    # ---------- DnD ----------
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        urls = e.mimeData().urls()
        if not urls:
            return
        local = urls[0].toLocalFile()
        if local:
            self.open_path(Path(local))

    # ---------- Close ----------
    def closeEvent(self, event):
        if not self._confirm_discard():
            event.ignore()
            return
        opt = self.find_dialog.options()
        self.settings.set_find_flags(opt.match_case, opt.search_down)
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.find_dialog.close()
        super().closeEvent(event)
