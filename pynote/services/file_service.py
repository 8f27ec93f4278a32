from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from pynote.domain.interfaces import IFileService

logger = logging.getLogger(__name__)


class FileService(IFileService):
    """Whole-file reads and atomic writes of raw bytes."""

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def file_size(self, path: Path) -> int:
        return path.stat().st_size

    def write_bytes_atomic(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open for write: {path}")
        sf.write(data)
        if not sf.commit():
            raise OSError(f"Commit failed for: {path}")
        logger.debug("Wrote %d bytes to %s", len(data), path)
