"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    FILE_FILTER,
    MAX_RECENTS,
    SETTINGS_FIND_MATCH_CASE,
    SETTINGS_FIND_SEARCH_DOWN,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_WORD_WRAP,
    STATUS_MSEC,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "FILE_FILTER",
    "SETTINGS_GEOMETRY",
    "SETTINGS_RECENTS",
    "SETTINGS_WORD_WRAP",
    "SETTINGS_FIND_MATCH_CASE",
    "SETTINGS_FIND_SEARCH_DOWN",
    "MAX_RECENTS",
    "STATUS_MSEC",
]
