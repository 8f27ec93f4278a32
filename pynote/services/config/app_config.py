from __future__ import annotations

import codecs
import logging
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pynote.domain.interfaces import IAppConfig
from pynote.services.config.ini_config_service import IniConfigService

logger = logging.getLogger(__name__)

# "1.4.2", "v1.4.2", "1.4.2-rc.1", "1.4.2+build.9" -> "1.4.2"
_SEMVER = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

DEFAULT_LARGE_FILE_MB = 10


def _default_root() -> Path:
    # Frozen builds unpack next to sys._MEIPASS; from source, walk up from
    # pynote/services/config/ to the checkout.
    bundle = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    return Path(bundle) if bundle else Path(__file__).resolve().parents[3]


def _semver(raw: str | None) -> str | None:
    m = _SEMVER.match((raw or "").strip())
    return m.group(1) if m else None


@dataclass(frozen=True)
class AppConfig(IAppConfig):
    """
    The editor's view of its configuration.

    Wraps an IniConfigService with typed, validated accessors. The version
    shown to users comes from ``<project_root>/version`` when that holds a
    semantic version, then from ``[app] version``, then "0.0.0".
    """

    ini: IniConfigService
    project_root: Path

    def get_version(self) -> str:
        try:
            from_file = _semver((self.project_root / "version").read_text(encoding="utf-8"))
        except OSError:
            from_file = None
        if from_file:
            return from_file

        configured = (self.ini.app_version() or "").strip()
        return _semver(configured) or configured or "0.0.0"

    # ---- editor settings ----

    def large_file_warn_bytes(self) -> int:
        mb = self.ini.get_int("files", "large_file_warn_mb", DEFAULT_LARGE_FILE_MB)
        if mb is None or mb < 0:
            mb = DEFAULT_LARGE_FILE_MB
        return mb * 1024 * 1024

    def ansi_codepage(self) -> str | None:
        """Configured codec for "ANSI" files, or None for the locale default."""
        raw = (self.ini.get("encoding", "ansi_codepage", "") or "").strip()
        if not raw:
            return None
        try:
            return codecs.lookup(raw).name
        except LookupError:
            logger.warning("Unknown ansi_codepage %r in config; using locale default", raw)
            return None

    def word_wrap(self) -> bool:
        return bool(self.ini.get_bool("editor", "word_wrap", False))

    def log_level(self) -> str:
        level = (self.ini.get("logging", "level", "WARNING") or "WARNING").strip().upper()
        return level if level in _LOG_LEVELS else "WARNING"

    # ---- raw IConfigService access ----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self.ini.get(section, key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self.ini.get_int(section, key, default)

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return self.ini.get_bool(section, key, default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()

    def app_version(self) -> str:
        return self.ini.app_version()

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    """Read config.ini for the editor; `project_root` defaults to the checkout or bundle."""
    root = project_root or _default_root()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
