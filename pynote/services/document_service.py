from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from pynote.domain.interfaces import IFileService
from pynote.domain.models import Document, TextEncoding
from pynote.services.encoding_detector import decode_bytes

logger = logging.getLogger(__name__)

DEFAULT_LARGE_FILE_BYTES = 10 * 1024 * 1024


class LoadCancelledError(Exception):
    """The large-file confirmation declined to open the file."""


@dataclass(frozen=True)
class LoadedDocument:
    document: Document
    text: str


class DocumentService:
    """
    Bytes in / text out and text in / bytes out.

    Owns the fallible I/O around the pure document model: it reads files,
    classifies their encoding, hands back a fresh Document snapshot, and on
    save writes the EOL-normalized text in the document's encoding.
    """

    def __init__(
        self,
        files: IFileService,
        *,
        ansi: TextEncoding | None = None,
        large_file_bytes: int = DEFAULT_LARGE_FILE_BYTES,
    ) -> None:
        self._files = files
        self._ansi = ansi or TextEncoding.ansi()
        self._large_file_bytes = large_file_bytes

    @property
    def default_encoding(self) -> TextEncoding:
        return self._ansi

    def new_document(self) -> Document:
        return Document.untitled(self._ansi)

    def load(
        self,
        path: Path,
        confirm_large_file: Callable[[int], bool] | None = None,
    ) -> LoadedDocument:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        size = self._files.file_size(path)
        if (
            self._large_file_bytes > 0
            and size >= self._large_file_bytes
            and confirm_large_file is not None
            and not confirm_large_file(size)
        ):
            logger.info("Opening %s (%d bytes) cancelled", path, size)
            raise LoadCancelledError(f"Opening large file cancelled: {path}")

        data = self._files.read_bytes(path)
        text, encoding = decode_bytes(data, self._ansi)
        doc = self.new_document().apply_loaded_metadata(path, encoding, text)
        logger.info("Loaded %s as %s, %s", path, encoding.label, doc.eol_name)
        return LoadedDocument(document=doc, text=text)

    def encode_for_save(self, document: Document, text: str) -> bytes:
        return document.encoding.encode(document.prepare_for_save(text))

    def save(
        self,
        document: Document,
        text: str,
        path: Path | None = None,
        encoding: TextEncoding | None = None,
    ) -> Document:
        """
        Write ``text`` and return the saved snapshot.

        ``path``/``encoding`` override the document's own (Save As). The input
        snapshot is left untouched if the write fails.
        """
        target = path or document.path
        if target is None:
            raise ValueError("Untitled document needs a path to save")

        pending = document.mark_saved(path=target, encoding=encoding)
        self._files.write_bytes_atomic(target, self.encode_for_save(pending, text))
        logger.info("Saved %s as %s, %s", target, pending.encoding.label, pending.eol_name)
        return pending
