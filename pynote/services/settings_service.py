from __future__ import annotations
from typing import Iterable
from PyQt6.QtCore import QSettings, QByteArray

from pynote.domain.interfaces import ISettingsService
from pynote.utils.constants import (
    MAX_RECENTS,
    SETTINGS_FIND_MATCH_CASE,
    SETTINGS_FIND_SEARCH_DOWN,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_WORD_WRAP,
)


def _as_bool(v: object, default: bool) -> bool:
    # INI-backed QSettings hands booleans back as "true"/"false" strings
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "yes", "on"}
    return default


class SettingsService(ISettingsService):
    """Persist small UI bits like geometry, word wrap, find flags and recent files."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_recent(self) -> list[str]:
        v = self._s.value(SETTINGS_RECENTS, [])
        if isinstance(v, str):
            v = [v]
        return [str(x) for x in v][:MAX_RECENTS] if isinstance(v, list) else []

    def set_recent(self, recent: Iterable[str]) -> None:
        self._s.setValue(SETTINGS_RECENTS, list(recent)[:MAX_RECENTS])

    def get_word_wrap(self, default: bool = False) -> bool:
        return _as_bool(self._s.value(SETTINGS_WORD_WRAP), default)

    def set_word_wrap(self, on: bool) -> None:
        self._s.setValue(SETTINGS_WORD_WRAP, bool(on))

    def get_find_flags(self) -> tuple[bool, bool]:
        """(match_case, search_down); the search text itself is never stored."""
        match_case = _as_bool(self._s.value(SETTINGS_FIND_MATCH_CASE), False)
        search_down = _as_bool(self._s.value(SETTINGS_FIND_SEARCH_DOWN), True)
        return match_case, search_down

    def set_find_flags(self, match_case: bool, search_down: bool) -> None:
        self._s.setValue(SETTINGS_FIND_MATCH_CASE, bool(match_case))
        self._s.setValue(SETTINGS_FIND_SEARCH_DOWN, bool(search_down))
