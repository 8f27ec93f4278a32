from __future__ import annotations

import codecs
import locale
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from pynote.domain.eol_policy import EolStyle, coerce, detect, normalize_for_save


class EncodingKind(Enum):
    ANSI = "ansi"
    UTF8 = "utf-8"
    UTF8_BOM = "utf-8-bom"
    UTF16_LE = "utf-16-le"
    UTF16_BE = "utf-16-be"
    UTF32_LE = "utf-32-le"
    UTF32_BE = "utf-32-be"
    OTHER = "other"


# kind -> (python codec, byte-order mark written on save, label)
_ENCODING_TABLE: dict[EncodingKind, tuple[str, bytes, str]] = {
    EncodingKind.UTF8: ("utf-8", b"", "UTF-8"),
    EncodingKind.UTF8_BOM: ("utf-8", codecs.BOM_UTF8, "UTF-8 (BOM)"),
    EncodingKind.UTF16_LE: ("utf-16-le", codecs.BOM_UTF16_LE, "UTF-16 LE"),
    EncodingKind.UTF16_BE: ("utf-16-be", codecs.BOM_UTF16_BE, "UTF-16 BE"),
    EncodingKind.UTF32_LE: ("utf-32-le", codecs.BOM_UTF32_LE, "UTF-32 LE"),
    EncodingKind.UTF32_BE: ("utf-32-be", codecs.BOM_UTF32_BE, "UTF-32 BE"),
}


def system_codepage() -> str:
    """Codec name of the platform's default ("ANSI") encoding."""
    return codecs.lookup(locale.getpreferredencoding(False)).name


@dataclass(frozen=True)
class TextEncoding:
    """
    Closed encoding variant.

    ``codec`` is only meaningful for ANSI (the system codepage it stands for)
    and OTHER (whatever codec the label names). For the Unicode kinds the
    codec is fixed by the kind.
    """

    kind: EncodingKind
    codec: str | None = None
    name: str | None = None

    # ---- constructors ----

    @classmethod
    def ansi(cls, codec: str | None = None) -> TextEncoding:
        return cls(EncodingKind.ANSI, codec=codec)

    @classmethod
    def utf8(cls, *, bom: bool = False) -> TextEncoding:
        return cls(EncodingKind.UTF8_BOM if bom else EncodingKind.UTF8)

    @classmethod
    def other(cls, codec: str, name: str | None = None) -> TextEncoding:
        return cls(EncodingKind.OTHER, codec=codec, name=name or codec)

    # ---- derived ----

    @property
    def codec_name(self) -> str:
        if self.kind in _ENCODING_TABLE:
            return _ENCODING_TABLE[self.kind][0]
        if self.kind is EncodingKind.ANSI:
            return self.codec or system_codepage()
        return self.codec or "utf-8"

    @property
    def bom(self) -> bytes:
        entry = _ENCODING_TABLE.get(self.kind)
        return entry[1] if entry else b""

    @property
    def label(self) -> str:
        entry = _ENCODING_TABLE.get(self.kind)
        if entry:
            return entry[2]
        if self.kind is EncodingKind.ANSI:
            return "ANSI"
        return self.name or self.codec_name

    # ---- codec ----

    def decode(self, data: bytes) -> str:
        """Decode ``data``, dropping a leading BOM that belongs to this encoding."""
        bom = self.bom
        if bom and data.startswith(bom):
            data = data[len(bom):]
        return data.decode(self.codec_name, errors="replace")

    def encode(self, text: str) -> bytes:
        return self.bom + text.encode(self.codec_name, errors="replace")


# Choices offered when saving (ANSI first, like the classic dialog).
SAVE_ENCODINGS: tuple[TextEncoding, ...] = (
    TextEncoding.ansi(),
    TextEncoding(EncodingKind.UTF8),
    TextEncoding(EncodingKind.UTF8_BOM),
    TextEncoding(EncodingKind.UTF16_LE),
    TextEncoding(EncodingKind.UTF16_BE),
    TextEncoding(EncodingKind.UTF32_LE),
    TextEncoding(EncodingKind.UTF32_BE),
)


@dataclass(frozen=True)
class Document:
    """
    Snapshot of the open file's metadata. The text itself lives in the editor
    widget; every transition returns a new snapshot.
    """

    path: Path | None = None
    encoding: TextEncoding = TextEncoding.ansi()
    eol: EolStyle = EolStyle.CRLF
    is_modified: bool = False

    @classmethod
    def untitled(cls, encoding: TextEncoding | None = None) -> Document:
        return cls(encoding=encoding or TextEncoding.ansi())

    @property
    def display_name(self) -> str:
        return self.path.name if self.path else "Untitled"

    @property
    def eol_name(self) -> str:
        return self.eol.display_name

    def apply_loaded_metadata(
        self, path: Path, encoding: TextEncoding, loaded_text: str
    ) -> Document:
        return replace(
            self, path=path, encoding=encoding, eol=detect(loaded_text), is_modified=False
        )

    def prepare_for_save(self, text: str) -> str:
        return normalize_for_save(text, self.eol)

    def set_eol(self, style: EolStyle | str) -> Document:
        """Unrecognized styles leave the current one in place."""
        return replace(self, eol=coerce(style, self.eol))

    def mark_saved(self, path: Path | None = None, encoding: TextEncoding | None = None) -> Document:
        return replace(
            self,
            path=path or self.path,
            encoding=encoding or self.encoding,
            is_modified=False,
        )

    def mark_modified(self) -> Document:
        if self.is_modified:
            return self
        return replace(self, is_modified=True)

    def reset_to_untitled(self, encoding: TextEncoding | None = None) -> Document:
        return Document.untitled(encoding)


@dataclass(frozen=True)
class SearchOptions:
    """What the user last asked for in the Find/Replace dialog."""

    needle: str
    match_case: bool = False
    search_down: bool = True


@dataclass(frozen=True)
class SearchRequest:
    text: str
    options: SearchOptions
    selection_start: int = 0
    selection_length: int = 0
    reverse: bool = False


@dataclass(frozen=True)
class SearchResult:
    found: bool
    start: int = 0
    length: int = 0


@dataclass(frozen=True)
class ReplaceRequest:
    text: str
    options: SearchOptions
    replacement: str = ""
    selection_start: int = 0
    selection_length: int = 0


@dataclass(frozen=True)
class ReplaceResult:
    text: str
    selection_start: int
    selection_length: int
    replaced: int = 0
    found: bool = False

    @property
    def changed(self) -> bool:
        return self.replaced > 0
