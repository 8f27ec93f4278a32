"""End-of-line detection and save-time normalization."""

from __future__ import annotations

from enum import Enum


class EolStyle(Enum):
    """Line terminator used when a document is written back to disk."""

    CRLF = "\r\n"
    LF = "\n"
    CR = "\r"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    EolStyle.CRLF: "Windows (CRLF)",
    EolStyle.LF: "Unix (LF)",
    EolStyle.CR: "Mac (CR)",
}

DEFAULT_EOL = EolStyle.CRLF


def detect(text: str) -> EolStyle:
    """
    Dominant line ending of ``text``.

    CRLF wins whenever it appears at all, then LF, then CR. Text with no line
    breaks (including the empty string) reports the default, CRLF.
    """
    if "\r\n" in text:
        return EolStyle.CRLF
    if "\n" in text:
        return EolStyle.LF
    if "\r" in text:
        return EolStyle.CR
    return DEFAULT_EOL


def normalize_for_save(text: str, style: EolStyle) -> str:
    # CRLF must collapse before lone CR, otherwise it counts as two breaks
    lf_only = text.replace("\r\n", "\n").replace("\r", "\n")
    if style is EolStyle.LF:
        return lf_only
    return lf_only.replace("\n", style.value)


def coerce(value: EolStyle | str | None, current: EolStyle) -> EolStyle:
    """Return ``value`` as an EolStyle, or ``current`` when it is not one."""
    if isinstance(value, EolStyle):
        return value
    if isinstance(value, str):
        for style in EolStyle:
            if value == style.value or value.upper() == style.name:
                return style
    return current
