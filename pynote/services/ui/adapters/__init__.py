from __future__ import annotations

from .qt_dialogs import QtFileDialogService
from .qt_messages import QtMessageService
from .qt_text_editor import QtPlainTextEditorAdapter

__all__ = [
    "QtFileDialogService",
    "QtMessageService",
    "QtPlainTextEditorAdapter",
]
