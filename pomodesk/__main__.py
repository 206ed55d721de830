"""Allow running Pomodesk as a module: python -m pomodesk."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .logging_config import configure_logging
from .settings import load_settings

log = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    init_db()
    log.info("Pomodesk ready")

    app = QApplication(sys.argv)
    app.setApplicationName("Pomodesk")
    app.setOrganizationName("Pomodesk")
    app.setQuitOnLastWindowClosed(False)

    from .app import PomodeskApp

    window = PomodeskApp(settings=settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
