from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from niti.di.container import Container
from niti.services.config.app_config import AppConfig
from niti.utils.constants import APP_NAME, APP_ORG

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    level = getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container,
    and launches the main window. Extra arguments are files to open.
    """
    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default()
    configure_logging(container.config)
    logger.info(
        "starting %s %s (config: %s)",
        APP_NAME,
        container.config.get_version(),
        container.config.loaded_from or "defaults",
    )

    start_paths = [Path(a) for a in argv[1:]]
    win = container.build_main_window(start_paths=start_paths, app_title=APP_NAME)
    win.show()

    code = app.exec()
    container.serial.shutdown()
    return code
