from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from pynote.di.container import Container
from pynote.utils.constants import APP_NAME, APP_ORG

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING), format=LOG_FORMAT)


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container,
    and launches the main window.
    """
    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default()
    configure_logging(container.config.log_level())
    logging.getLogger(__name__).debug(
        "Starting %s %s (config: %s)",
        APP_NAME,
        container.config.get_version(),
        getattr(container.config, "loaded_from", None),
    )

    # Optional file path to open passed as first CLI argument
    start_path = Path(argv[1]) if len(argv) > 1 else None

    win = container.build_main_window(start_path=start_path, app_title=APP_NAME)
    win.show()

    return app.exec()
