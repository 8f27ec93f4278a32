from __future__ import annotations

from PyQt6.QtGui import QTextCursor
from PyQt6.QtWidgets import QPlainTextEdit


def _is_bmp(text: str) -> bool:
    return all(ord(ch) <= 0xFFFF for ch in text)


def to_qt_position(text: str, index: int) -> int:
    """Python str index -> Qt (UTF-16 code unit) position."""
    if _is_bmp(text):
        return index
    return len(text[:index].encode("utf-16-le")) // 2


def from_qt_position(text: str, position: int) -> int:
    """Qt (UTF-16 code unit) position -> Python str index."""
    if _is_bmp(text):
        return position
    units = 0
    for i, ch in enumerate(text):
        if units >= position:
            return i
        units += 2 if ord(ch) > 0xFFFF else 1
    return len(text)


class QtPlainTextEditorAdapter:
    """
    Narrow adapter to satisfy EditorPort; isolates the search service from the
    full QPlainTextEdit API and translates offsets between str indices and
    Qt's UTF-16 positions.
    """

    def __init__(self, edit: QPlainTextEdit):
        self._e = edit

    def text(self) -> str:
        """
        The buffer exactly as typed or loaded.

        toPlainText() swaps NBSP for a space and U+2028 for a newline; the raw
        text only needs its block separators turned back into LF.
        """
        return self._e.document().toRawText().replace("\u2029", "\n")

    def selection(self) -> tuple[int, int]:
        text = self.text()
        c = self._e.textCursor()
        start = from_qt_position(text, c.selectionStart())
        end = from_qt_position(text, c.selectionEnd())
        return start, end - start

    def selected_text(self) -> str:
        start, length = self.selection()
        return self.text()[start : start + length]

    def set_selection(self, start: int, length: int) -> None:
        text = self.text()
        c = self._e.textCursor()
        c.setPosition(to_qt_position(text, start))
        c.setPosition(to_qt_position(text, start + length), QTextCursor.MoveMode.KeepAnchor)
        self._e.setTextCursor(c)
        self._e.ensureCursorVisible()

    def replace_selection(self, start: int, length: int, replacement: str) -> None:
        self.set_selection(start, length)
        c = self._e.textCursor()
        c.insertText(replacement)
        self._e.setTextCursor(c)

    def replace_all_text(self, text: str) -> None:
        """Swap the whole buffer as one undoable edit."""
        c = QTextCursor(self._e.document())
        c.beginEditBlock()
        try:
            c.select(QTextCursor.SelectionType.Document)
            c.insertText(text)
        finally:
            c.endEditBlock()
