from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox

from pynote.services.ui.ports.messages import Answer, IMessageService


class QtMessageService(IMessageService):
    """Qt-backed implementation for message dialogs."""

    def info(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.information(parent, title, text)

    def warning(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.warning(parent, title, text)

    def error(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.critical(parent, title, text)

    def ask(self, parent: Any | None, title: str, text: str) -> bool:
        resp = QMessageBox.question(
            parent,
            title,
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return resp == QMessageBox.StandardButton.Yes

    def ask_save_changes(self, parent: Any | None, title: str, text: str) -> Answer:
        buttons = (
            QMessageBox.StandardButton.Yes
            | QMessageBox.StandardButton.No
            | QMessageBox.StandardButton.Cancel
        )
        resp = QMessageBox.warning(parent, title, text, buttons)
        if resp == QMessageBox.StandardButton.Yes:
            return Answer.YES
        if resp == QMessageBox.StandardButton.No:
            return Answer.NO
        return Answer.CANCEL
