from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings

from pynote.domain.interfaces import IAppConfig, IFileService, ISettingsService
from pynote.domain.models import TextEncoding
from pynote.services.config.app_config import build_app_config
from pynote.services.document_service import DocumentService
from pynote.services.file_service import FileService
from pynote.services.settings_service import SettingsService
from pynote.services.ui.adapters import QtFileDialogService, QtMessageService
from pynote.services.ui.main_window import MainWindow
from pynote.services.ui.ports.dialogs import IFileDialogService
from pynote.services.ui.ports.messages import IMessageService
from pynote.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Derives the ANSI codec and large-file threshold from configuration
      - Builds the main window with everything injected
    """

    def __init__(
        self,
        config: IAppConfig | None = None,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
    ) -> None:
        self.config: IAppConfig = config or build_app_config()
        self.ansi = TextEncoding.ansi(self.config.ansi_codepage())

        self.file_service: IFileService = files or FileService()
        self.document_service = DocumentService(
            self.file_service,
            ansi=self.ansi,
            large_file_bytes=self.config.large_file_warn_bytes(),
        )
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )

        self.dialogs: IFileDialogService = dialogs or QtFileDialogService(self.ansi)
        self.messages: IMessageService = messages or QtMessageService()

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        organization: str = APP_ORG,
        application: str = APP_NAME,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(qsettings=qsettings)

    # ---------- UI factories ----------

    def build_main_window(
        self,
        *,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        return MainWindow(
            documents=self.document_service,
            settings=self.settings_service,
            messages=self.messages,
            dialogs=self.dialogs,
            start_path=start_path,
            word_wrap=self.config.word_wrap(),
            app_version=self.config.get_version(),
            app_title=app_title,
        )
