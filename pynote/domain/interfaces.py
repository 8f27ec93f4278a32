from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Iterable, Protocol


class IFileService(Protocol):
    """Read/write raw file bytes. Writes should be atomic when possible."""

    def read_bytes(self, path: Path) -> bytes: ...
    def file_size(self, path: Path) -> int: ...
    def write_bytes_atomic(self, path: Path, data: bytes) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...
    def get_word_wrap(self, default: bool = False) -> bool: ...
    def set_word_wrap(self, on: bool) -> None: ...
    def get_find_flags(self) -> tuple[bool, bool]: ...
    def set_find_flags(self, match_case: bool, search_down: bool) -> None: ...


class IConfigService(Protocol):
    """Read-only access to INI configuration."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    """Configuration plus the typed settings the editor reads at startup."""

    def get_version(self) -> str: ...
    def large_file_warn_bytes(self) -> int: ...
    def ansi_codepage(self) -> str | None: ...
    def word_wrap(self) -> bool: ...
    def log_level(self) -> str: ...
