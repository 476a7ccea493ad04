import logging
import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths
from PySide6.QtWidgets import QApplication

APP_NAME = "Clinometer"
APP_VERSION = "0.1.0"


def ensure_user_config_dir() -> Path:
    """Ensure a writable config directory exists and return it."""
    config_dir = Path(QStandardPaths.writableLocation(QStandardPaths.AppConfigLocation))
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def create_application() -> QApplication:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s - %(message)s")
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    ensure_user_config_dir()
    return app


def create_main_window() -> "MainWindow":
    from .config import load_app_config
    from .sensors.attitude_source import SimulatedAttitudeSource
    from .ui.main_window import MainWindow  # Local import keeps Qt widgets out of headless imports.

    cfg = load_app_config()
    source = SimulatedAttitudeSource(
        sway_degrees=cfg.sensor.sway_degrees,
        sway_period_s=cfg.sensor.sway_period_s,
    )
    return MainWindow(app_name=APP_NAME, version=APP_VERSION, source=source, config=cfg)
