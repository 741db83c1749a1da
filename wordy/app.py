"""Application entry point and setup for the Wordy puzzle game."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from wordy.core.app_state import AppState
from wordy.core.config import GameConfig
from wordy.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Build the application state, show the main window, and run the event loop."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Wordy")
    app.setApplicationDisplayName("Wordy")

    app_state = AppState.create(GameConfig.from_env())
    app.aboutToQuit.connect(app_state.shutdown)

    window = MainWindow(app_state=app_state)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(geometry.width(), 900), geometry.height())
    window.show()

    sys.exit(app.exec())

