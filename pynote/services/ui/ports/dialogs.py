from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pynote.domain.models import TextEncoding


@runtime_checkable
class IFileDialogService(Protocol):
    """
    Abstract UI port for the editor's modal pickers. Keeps the rest of the app decoupled from Qt.
    """

    def get_open_file(
            self,
            parent: Any | None,
            caption: str,
            start_dir: str | None,
            filter_str: str,
    ) -> Path | None:
        """Return a selected file path or None if cancelled."""
        ...

    def get_save_file(
            self,
            parent: Any | None,
            caption: str,
            start_path: str | None,
            filter_str: str,
    ) -> Path | None:
        """Return a selected destination path or None if cancelled."""
        ...

    def choose_encoding(self, parent: Any | None, current: TextEncoding) -> TextEncoding | None:
        """Return the encoding to save with, or None if cancelled."""
        ...

    def ask_line_number(self, parent: Any | None, current: int, maximum: int) -> int | None:
        """Return a 1-based line number, or None if cancelled."""
        ...
