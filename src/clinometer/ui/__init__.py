"""UI package for Clinometer.

Exports:
    MainWindow: Main application window.
    CameraView: Live camera preview background.
    LevelOverlay: Sighting dot and level line overlay.
    HeightPopup: Height calculation form.
"""

from .camera_view import CameraView
from .height_popup import HeightPopup
from .level_overlay import LevelOverlay
from .main_window import MainWindow

__all__ = [
    "MainWindow",
    "CameraView",
    "LevelOverlay",
    "HeightPopup",
]
