from __future__ import annotations

import os
from pathlib import Path

import pytest

# Headless Qt for CI; must be set before QApplication is created.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QSettings  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from pynote.domain.models import TextEncoding  # noqa: E402
from pynote.services.document_service import DocumentService  # noqa: E402
from pynote.services.file_service import FileService  # noqa: E402
from pynote.services.settings_service import SettingsService  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        if created:
            app.quit()


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def latin1() -> TextEncoding:
    """A fixed "ANSI" codepage so tests don't depend on the host locale."""
    return TextEncoding.ansi("cp1252")


@pytest.fixture()
def document_service(file_service: FileService, latin1: TextEncoding) -> DocumentService:
    return DocumentService(file_service, ansi=latin1)
