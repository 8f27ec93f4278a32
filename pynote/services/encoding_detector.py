from __future__ import annotations

import codecs

from pynote.domain.models import EncodingKind, TextEncoding

# Longest prefixes first: FF FE 00 00 is UTF-32 LE, not UTF-16 LE.
_BOM_TABLE: tuple[tuple[bytes, EncodingKind], ...] = (
    (codecs.BOM_UTF32_BE, EncodingKind.UTF32_BE),
    (codecs.BOM_UTF32_LE, EncodingKind.UTF32_LE),
    (codecs.BOM_UTF8, EncodingKind.UTF8_BOM),
    (codecs.BOM_UTF16_LE, EncodingKind.UTF16_LE),
    (codecs.BOM_UTF16_BE, EncodingKind.UTF16_BE),
)


def detect_encoding(data: bytes) -> TextEncoding | None:
    """
    Classify ``data`` by its byte-order mark.

    Returns None when no BOM is present; the caller then falls back to the
    system ("ANSI") encoding. Short input is fine, it simply matches nothing.
    """
    head = bytes(data[:4])
    for bom, kind in _BOM_TABLE:
        if head.startswith(bom):
            return TextEncoding(kind)
    return None


def resolve_encoding(data: bytes, fallback: TextEncoding | None = None) -> TextEncoding:
    return detect_encoding(data) or fallback or TextEncoding.ansi()


def decode_bytes(data: bytes, fallback: TextEncoding | None = None) -> tuple[str, TextEncoding]:
    """Decode a whole file's bytes, returning the text and the encoding used."""
    encoding = resolve_encoding(data, fallback)
    return encoding.decode(data), encoding
