# tests/test_app_config.py
from __future__ import annotations

import codecs
from pathlib import Path

import pytest

from pynote.services.config.app_config import AppConfig, build_app_config


def _write(p: Path, text: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


class FakeIni:
    """
    Minimal IniConfigService-like fake backed by a dict of sections.
    Only implements what AppConfig calls.
    """

    def __init__(
        self,
        *,
        version: str = "0.0.0",
        values: dict[str, dict[str, str]] | None = None,
        loaded_from: Path | None = None,
    ) -> None:
        self._version = version
        self._values = values or {}
        self._loaded_from = loaded_from

    def app_version(self) -> str:
        return self._version

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self._values.get(section, {}).get(key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        raw = self.get(section, key)
        try:
            return int(raw) if raw is not None else default
        except ValueError:
            return default

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        raw = self.get(section, key)
        return default if raw is None else raw.lower() in {"1", "true", "yes", "on"}

    def as_dict(self) -> dict[str, dict[str, str]]:
        return {"app": {"version": self._version}, **self._values}

    @property
    def loaded_from(self) -> Path | None:
        return self._loaded_from


def _cfg(tmp_path: Path, **kw) -> AppConfig:
    return AppConfig(ini=FakeIni(**kw), project_root=tmp_path / "proj")


# ------------------------------
# get_version()
# ------------------------------
@pytest.mark.parametrize(
    "raw,expected",
    [("1.2.3", "1.2.3"), ("v1.2.3", "1.2.3"), ("V1.2.3+build.7", "1.2.3"), ("1.2.3-rc.1", "1.2.3")],
)
def test_get_version_prefers_version_file(tmp_path: Path, raw: str, expected: str):
    _write(tmp_path / "proj" / "version", raw)
    assert _cfg(tmp_path, version="9.9.9").get_version() == expected


def test_get_version_falls_back_to_ini(tmp_path: Path):
    assert _cfg(tmp_path, version="v2.3.4").get_version() == "2.3.4"
    _write(tmp_path / "proj" / "version", "not-a-version")
    assert _cfg(tmp_path, version="2.0.1").get_version() == "2.0.1"


def test_get_version_last_resort(tmp_path: Path):
    assert _cfg(tmp_path, version="   ").get_version() == "0.0.0"
    assert _cfg(tmp_path, version="dev").get_version() == "dev"


# ------------------------------
# editor settings
# ------------------------------
def test_large_file_threshold_default_and_override(tmp_path: Path):
    assert _cfg(tmp_path).large_file_warn_bytes() == 10 * 1024 * 1024
    cfg = _cfg(tmp_path, values={"files": {"large_file_warn_mb": "2"}})
    assert cfg.large_file_warn_bytes() == 2 * 1024 * 1024


def test_large_file_threshold_rejects_negative(tmp_path: Path):
    cfg = _cfg(tmp_path, values={"files": {"large_file_warn_mb": "-5"}})
    assert cfg.large_file_warn_bytes() == 10 * 1024 * 1024


def test_large_file_threshold_zero_disables_prompt(tmp_path: Path):
    cfg = _cfg(tmp_path, values={"files": {"large_file_warn_mb": "0"}})
    assert cfg.large_file_warn_bytes() == 0


def test_ansi_codepage(tmp_path: Path):
    assert _cfg(tmp_path).ansi_codepage() is None
    cfg = _cfg(tmp_path, values={"encoding": {"ansi_codepage": "windows-1252"}})
    assert cfg.ansi_codepage() == codecs.lookup("cp1252").name


def test_unknown_ansi_codepage_is_ignored(tmp_path: Path, caplog):
    cfg = _cfg(tmp_path, values={"encoding": {"ansi_codepage": "klingon-8"}})
    assert cfg.ansi_codepage() is None
    assert "klingon-8" in caplog.text


def test_word_wrap_and_log_level(tmp_path: Path):
    assert _cfg(tmp_path).word_wrap() is False
    assert _cfg(tmp_path).log_level() == "WARNING"
    cfg = _cfg(tmp_path, values={"editor": {"word_wrap": "yes"}, "logging": {"level": "debug"}})
    assert cfg.word_wrap() is True
    assert cfg.log_level() == "DEBUG"
    assert _cfg(tmp_path, values={"logging": {"level": "loud"}}).log_level() == "WARNING"


# ------------------------------
# Delegation / build_app_config()
# ------------------------------
def test_loaded_from_and_as_dict_delegate(tmp_path: Path):
    ini_path = tmp_path / "settings.ini"
    cfg = _cfg(tmp_path, version="3.3.3", loaded_from=ini_path)
    assert cfg.loaded_from == ini_path
    assert cfg.as_dict()["app"]["version"] == "3.3.3"


def test_build_app_config_reads_explicit_ini_and_version_file(tmp_path: Path):
    root = tmp_path / "repo"
    _write(root / "version", "v1.0.0")
    explicit_ini = tmp_path / "explicit.ini"
    _write(explicit_ini, "[app]\nversion = 9.9.9\n[files]\nlarge_file_warn_mb = 1\n")

    cfg = build_app_config(explicit_ini=explicit_ini, project_root=root)
    assert cfg.project_root == root
    assert cfg.loaded_from == explicit_ini
    assert cfg.get_version() == "1.0.0"
    assert cfg.large_file_warn_bytes() == 1024 * 1024
