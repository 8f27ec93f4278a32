from __future__ import annotations

from pathlib import Path
from typing import Any

from PyQt6.QtWidgets import QFileDialog

from pynote.domain.models import TextEncoding
from pynote.services.ui.encoding_dialog import EncodingDialog
from pynote.services.ui.goto_dialog import GoToLineDialog
from pynote.services.ui.ports.dialogs import IFileDialogService


class QtFileDialogService(IFileDialogService):
    """Qt-backed implementation of the file, encoding and go-to pickers."""

    def __init__(self, ansi: TextEncoding | None = None) -> None:
        # Concrete codec the "ANSI" choice stands for (config may override the locale's).
        self._ansi = ansi

    def get_open_file(
        self,
        parent: Any | None,
        caption: str,
        start_dir: str | None,
        filter_str: str,
    ) -> Path | None:
        path_str, _ = QFileDialog.getOpenFileName(
            parent,
            caption,
            start_dir or "",
            filter_str,
        )
        return Path(path_str) if path_str else None

    def get_save_file(
        self,
        parent: Any | None,
        caption: str,
        start_path: str | None,
        filter_str: str,
    ) -> Path | None:
        path_str, _ = QFileDialog.getSaveFileName(
            parent,
            caption,
            start_path or "",
            filter_str,
        )
        return Path(path_str) if path_str else None

    def choose_encoding(self, parent: Any | None, current: TextEncoding) -> TextEncoding | None:
        dlg = EncodingDialog(current, parent)
        if not dlg.exec():
            return None
        return dlg.selected_encoding(self._ansi)

    def ask_line_number(self, parent: Any | None, current: int, maximum: int) -> int | None:
        dlg = GoToLineDialog(current, maximum, parent)
        if not dlg.exec():
            return None
        return dlg.line_number()
