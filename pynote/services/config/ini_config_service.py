# pynote/services/config/ini_config_service.py
from __future__ import annotations

import configparser
import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path

try:
    from platformdirs import user_config_dir  # type: ignore
except ImportError:
    user_config_dir = None  # falls back to ~/.config/<app>

from pynote.domain.interfaces import IConfigService

logger = logging.getLogger(__name__)


class IniConfigService(IConfigService):
    r"""
    Reads the editor's ``config.ini``.

    The first readable file wins:
      1. ``explicit_path`` (tests, ``--config`` style overrides)
      2. the per-user config dir, e.g. ~/.config/PyNotepad/config.ini
         or %APPDATA%\PyNotepad\config.ini
      3. <project_root>/config/config.ini shipped next to the sources

    Recognised keys::

        [app]       version
        [files]     large_file_warn_mb
        [encoding]  ansi_codepage
        [editor]    word_wrap
        [logging]   level
    """

    DEFAULT_APP_DIR = "PyNotepad"
    DEFAULT_FILE = "config.ini"

    def __init__(self, explicit_path: Path | None = None, project_root: Path | None = None):
        self._explicit = explicit_path
        self._project_root = project_root
        self._parser = configparser.ConfigParser()
        self._loaded_from: Path | None = None

        for path in self._candidates():
            if self._try_load(path):
                break

        if not self._parser.has_section("app"):
            self._parser.add_section("app")
        self._parser["app"].setdefault("version", "0.0.0")

    def _candidates(self) -> Iterator[Path]:
        if self._explicit:
            yield self._explicit
        if user_config_dir:
            yield Path(user_config_dir(self.DEFAULT_APP_DIR)) / self.DEFAULT_FILE
        else:
            yield Path(os.path.expanduser("~")) / ".config" / self.DEFAULT_APP_DIR / self.DEFAULT_FILE
        if self._project_root:
            yield self._project_root / "config" / self.DEFAULT_FILE

    def _try_load(self, path: Path) -> bool:
        if not path.is_file():
            return False
        parser = configparser.ConfigParser()
        try:
            with path.open("r", encoding="utf-8") as fh:
                parser.read_file(fh)
        except (OSError, UnicodeDecodeError, configparser.Error) as e:
            # A broken file is skipped; the editor still starts on defaults.
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return False
        self._parser = parser
        self._loaded_from = path
        logger.debug("Loaded config from %s", path)
        return True

    # ----- IConfigService -----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self._parser.get(section, key, fallback=default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        raw = self.get(section, key)
        if raw is None:
            return default
        try:
            return int(raw.strip())
        except ValueError:
            logger.warning("Config [%s] %s=%r is not an integer", section, key, raw)
            return default

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        raw = self.get(section, key)
        if raw is None:
            return default
        # ConfigParser's own table: 1/0, yes/no, true/false, on/off
        return self._parser.BOOLEAN_STATES.get(raw.strip().lower(), default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return {name: dict(self._parser[name]) for name in self._parser.sections()}

    def app_version(self) -> str:
        return self.get("app", "version") or "0.0.0"

    @property
    def loaded_from(self) -> Path | None:
        """Which file was read, for diagnostics; None when running on defaults."""
        return self._loaded_from
