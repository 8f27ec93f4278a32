"""
Literal find/replace over an in-memory text.

Case-insensitive comparison uses Unicode simple case folding (``re.IGNORECASE``
on an escaped literal). Simple folding maps one code point to one code point,
so a match always spans exactly ``len(needle)`` characters and offsets
reported here can be applied straight to the editor's selection.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pynote.domain.models import ReplaceRequest, ReplaceResult, SearchRequest, SearchResult


@lru_cache(maxsize=32)
def _folded(needle: str) -> re.Pattern[str]:
    return re.compile(re.escape(needle), re.IGNORECASE)


@lru_cache(maxsize=32)
def _folded_overlapping(needle: str) -> re.Pattern[str]:
    # Zero-width lookahead so adjacent and overlapping occurrences all report a start.
    return re.compile(f"(?=({re.escape(needle)}))", re.IGNORECASE)


def _index_of(haystack: str, needle: str, start: int, match_case: bool) -> int:
    if match_case:
        return haystack.find(needle, start)
    m = _folded(needle).search(haystack, start)
    return m.start() if m else -1


def _last_index_of(haystack: str, needle: str, end: int, match_case: bool) -> int:
    """Start of the last match lying entirely inside ``haystack[:end]``."""
    if match_case:
        return haystack.rfind(needle, 0, end)
    # endpos hides everything past `end` from the lookahead.
    last = -1
    for m in _folded_overlapping(needle).finditer(haystack, 0, end):
        last = m.start()
    return last


def find_next(
    haystack: str,
    needle: str,
    selection_start: int,
    selection_length: int,
    search_down: bool,
    match_case: bool,
    reverse: bool = False,
) -> int | None:
    """
    Offset of the next occurrence of ``needle``, wrapping around the text.

    Forward searches resume right after the current selection so repeated
    calls advance; backward searches resume right before the selection start.
    Returns None only when the needle occurs nowhere in the text.
    """
    if not haystack or not needle:
        return None

    if search_down and not reverse:
        found = _index_of(haystack, needle, selection_start + selection_length, match_case)
        if found < 0:
            found = _index_of(haystack, needle, 0, match_case)
    else:
        origin = max(0, selection_start - 1)
        found = _last_index_of(haystack, needle, origin + 1, match_case)
        if found < 0:
            found = _last_index_of(haystack, needle, len(haystack), match_case)

    return found if found >= 0 else None


def selection_matches(
    haystack: str,
    selection_start: int,
    selection_length: int,
    needle: str,
    match_case: bool,
) -> bool:
    """True when the selected span is itself an occurrence of ``needle``."""
    if not needle or selection_length != len(needle):
        return False
    if selection_start < 0 or selection_start + selection_length > len(haystack):
        return False

    selected = haystack[selection_start : selection_start + selection_length]
    if match_case:
        return selected == needle
    return _folded(needle).fullmatch(selected) is not None


def replace_all(haystack: str, pattern: str, replacement: str, match_case: bool) -> str:
    if not haystack or not pattern:
        return haystack

    if match_case:
        return haystack.replace(pattern, replacement)

    # Single left-to-right pass; inserted text is never scanned again.
    folded = _folded(pattern)
    out: list[str] = []
    i = 0
    while i < len(haystack):
        m = folded.search(haystack, i)
        if m is None:
            out.append(haystack[i:])
            break
        out.append(haystack[i : m.start()])
        out.append(replacement)
        i = m.start() + len(pattern)
    return "".join(out)


def count_occurrences(haystack: str, pattern: str, match_case: bool) -> int:
    """Number of non-overlapping occurrences ``replace_all`` would substitute."""
    if not haystack or not pattern:
        return 0
    if match_case:
        return haystack.count(pattern)
    return sum(1 for _ in _folded(pattern).finditer(haystack))


# -------------------------
# Request / result seam
# -------------------------


def find(request: SearchRequest) -> SearchResult:
    opt = request.options
    pos = find_next(
        request.text,
        opt.needle,
        request.selection_start,
        request.selection_length,
        opt.search_down,
        opt.match_case,
        request.reverse,
    )
    if pos is None:
        return SearchResult(found=False)
    return SearchResult(found=True, start=pos, length=len(opt.needle))


def replace_once(request: ReplaceRequest) -> ReplaceResult:
    """
    Replace the selection if it is a live match, then select the next match.

    When the selection is not a match nothing is replaced and this behaves
    like a plain find.
    """
    opt = request.options
    text = request.text
    start, length = request.selection_start, request.selection_length
    replaced = 0

    if selection_matches(text, start, length, opt.needle, opt.match_case):
        text = text[:start] + request.replacement + text[start + length :]
        start, length = start + len(request.replacement), 0
        replaced = 1

    hit = find(SearchRequest(text, opt, start, length))
    if hit.found:
        return ReplaceResult(text, hit.start, hit.length, replaced=replaced, found=True)
    return ReplaceResult(text, start, length, replaced=replaced, found=replaced > 0)


def replace_everything(request: ReplaceRequest) -> ReplaceResult:
    opt = request.options
    count = count_occurrences(request.text, opt.needle, opt.match_case)
    if count == 0:
        return ReplaceResult(request.text, request.selection_start, request.selection_length)

    text = replace_all(request.text, opt.needle, request.replacement, opt.match_case)
    caret = min(request.selection_start, len(text))
    return ReplaceResult(text, caret, 0, replaced=count, found=True)
