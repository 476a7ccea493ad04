"""Live camera preview used as the sighting background."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPalette
from PySide6.QtMultimedia import QCamera, QMediaCaptureSession, QMediaDevices
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import QVBoxLayout, QWidget

logger = logging.getLogger(__name__)


class CameraView(QWidget):
    """Full-bleed preview of the default camera.

    Falls back to a plain dark background when the preview is disabled or
    no camera is present; a missing camera is never fatal.
    """

    def __init__(self, *, enabled: bool = True, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._camera: QCamera | None = None
        self._session: QMediaCaptureSession | None = None
        self._video: QVideoWidget | None = None

        palette = self.palette()
        palette.setColor(QPalette.Window, QColor(15, 23, 42))
        self.setPalette(palette)
        self.setAutoFillBackground(True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        if enabled:
            self._setup_camera(layout)

    def _setup_camera(self, layout: QVBoxLayout) -> None:
        device = QMediaDevices.defaultVideoInput()
        if device.isNull():
            logger.info("No camera found; preview disabled")
            return

        self._video = QVideoWidget()
        self._video.setAspectRatioMode(Qt.AspectRatioMode.KeepAspectRatioByExpanding)
        layout.addWidget(self._video)

        self._camera = QCamera(device)
        self._camera.errorOccurred.connect(self._on_camera_error)
        self._session = QMediaCaptureSession()
        self._session.setCamera(self._camera)
        self._session.setVideoOutput(self._video)

    @property
    def has_camera(self) -> bool:
        return self._camera is not None

    def start(self) -> None:
        if self._camera is not None:
            self._camera.start()

    def stop(self) -> None:
        if self._camera is not None:
            self._camera.stop()

    def _on_camera_error(self, error, message: str) -> None:
        logger.warning("Camera error (%s): %s", error, message)
