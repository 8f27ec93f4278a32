"""Small text helpers backing the status bar, Go To and Time/Date."""

from __future__ import annotations

import re
from datetime import datetime

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _line_starts(text: str) -> list[int]:
    return [0] + [m.end() for m in _LINE_BREAK.finditer(text)]


def line_count(text: str) -> int:
    return len(_line_starts(text))


def caret_line_col(text: str, caret: int) -> tuple[int, int]:
    """1-based (line, column) of ``caret``; the caret is clamped to the text."""
    caret = max(0, min(caret, len(text)))
    line = 0
    for idx, start in enumerate(_line_starts(text)):
        if start > caret:
            break
        line = idx
        line_start = start
    return line + 1, caret - line_start + 1


def line_start_offset(text: str, line: int) -> int:
    """Offset of the first character of 1-based ``line`` (clamped to the text)."""
    starts = _line_starts(text)
    line = max(1, min(line, len(starts)))
    return starts[line - 1]


def time_date_stamp(now: datetime | None = None) -> str:
    """Classic Notepad F5 stamp, e.g. ``3:07 PM 6/9/2025``."""
    now = now or datetime.now()
    hour = now.hour % 12 or 12
    ampm = "AM" if now.hour < 12 else "PM"
    return f"{hour}:{now.minute:02d} {ampm} {now.month}/{now.day}/{now.year}"
