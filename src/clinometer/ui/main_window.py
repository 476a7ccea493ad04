"""Main window for the Clinometer application.

Design notes:
- The window is a stack of layers sharing one grid cell: camera preview,
  level overlay, readouts, the "+" button and the height popup.
- Orientation state is produced on the sensor thread by
  `clinometer.orientation.OrientationTracker`; the window only polls the
  tracker's channel from a QTimer on the UI thread.
- Window size is persisted to `config.ini` via `clinometer.config`.
"""

from PySide6.QtCore import QTimer, Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from ..config import AppConfig, SensorConfig, UiConfig, save_ui_config
from ..orientation import OrientationState, OrientationTracker, SensorUnavailable
from ..readout import alignment_text, height_text, level_color, pitch_text
from ..sensors.attitude_source import AttitudeSource
from .camera_view import CameraView
from .height_popup import HeightPopup
from .level_overlay import LevelOverlay


class MainWindow(QMainWindow):
    """Camera sighting view with level indicator and height calculator."""

    def __init__(
        self,
        *,
        app_name: str,
        version: str,
        source: AttitudeSource,
        config: AppConfig | None = None,
    ) -> None:
        """Initialize the window, start orientation updates and the UI timer."""
        super().__init__()
        self._app_name = app_name
        self._version = version
        self._config = config or AppConfig(sensor=SensorConfig(), ui=UiConfig())
        self.setWindowTitle(f"{self._app_name} - v{self._version}")
        self.resize(self._config.ui.window_width, self._config.ui.window_height)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

        self._tracker = OrientationTracker(source)
        self._state_version = 0
        self._state: OrientationState | None = None
        self._last_height: float | None = None

        self._build_ui()
        self._setup_timers()
        self._start_tracking()
        self._render_orientation()

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _build_ui(self) -> None:
        self._camera_view = CameraView(enabled=self._config.ui.show_camera)
        self._overlay = LevelOverlay()

        self._pitch_label = QLabel()
        self._alignment_label = QLabel()
        self._height_label = QLabel(height_text(None))
        readout = QWidget()
        readout.setAttribute(Qt.WA_TransparentForMouseEvents)
        readout.setStyleSheet("QLabel { color: white; font-weight: 600; }")
        readout_layout = QVBoxLayout(readout)
        readout_layout.setContentsMargins(16, 16, 16, 16)
        for label in (self._pitch_label, self._alignment_label, self._height_label):
            label.setAlignment(Qt.AlignmentFlag.AlignHCenter)
            readout_layout.addWidget(label)

        self._popup_button = QPushButton()
        self._popup_button.setText("+")
        self._popup_button.setToolTip("Calculate height")
        self._popup_button.setFixedSize(44, 44)
        self._popup_button.setStyleSheet("font-size: 22px; font-weight: 700; border-radius: 22px;")
        self._popup_button.clicked.connect(self._on_popup_button_clicked)

        self._height_popup = HeightPopup(on_calculated=self._on_height_calculated)

        self._retry_button = QPushButton("Retry")
        self._retry_button.clicked.connect(self.retry_orientation)
        self._retry_button.hide()
        self._status_bar.addPermanentWidget(self._retry_button)

        central = QWidget()
        grid = QGridLayout(central)
        grid.setContentsMargins(0, 0, 0, 0)
        # Later widgets stack on top of earlier ones in the shared cell.
        grid.addWidget(self._camera_view, 0, 0)
        grid.addWidget(self._overlay, 0, 0)
        grid.addWidget(readout, 0, 0, Qt.AlignmentFlag.AlignBottom | Qt.AlignmentFlag.AlignHCenter)
        grid.addWidget(
            self._popup_button,
            0,
            0,
            Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignRight,
        )
        grid.addWidget(self._height_popup, 0, 0, Qt.AlignmentFlag.AlignCenter)
        self.setCentralWidget(central)

    def _setup_timers(self) -> None:
        hz = max(1, int(self._config.ui.update_hz))
        self._timer = QTimer(interval=max(1, int(1000 / hz)))
        self._timer.timeout.connect(self._on_tick)

    def _start_tracking(self) -> None:
        self._start_orientation()
        self._camera_view.start()
        self._timer.start()

    def _start_orientation(self) -> None:
        self._tracker.configure(self._config.sensor.sample_rate_hz)
        try:
            self._tracker.start()
        except SensorUnavailable as exc:
            self._status_bar.showMessage(f"Orientation unavailable: {exc}")
        else:
            self._status_bar.showMessage(f"Orientation: {self._tracker.sample_rate_hz:.0f} Hz")

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def tracker(self) -> OrientationTracker:
        return self._tracker

    @property
    def height_popup(self) -> HeightPopup:
        return self._height_popup

    @property
    def last_height(self) -> float | None:
        return self._last_height

    # -------------------------------------------------------------------------
    # Core functionality
    # -------------------------------------------------------------------------

    def retry_orientation(self) -> None:
        """Manual retry after the sensor was reported unavailable."""
        self._start_orientation()
        self._render_orientation()

    def _on_tick(self) -> None:
        """Timer tick: pick up the newest orientation state, if any."""
        update = self._tracker.poll(self._state_version)
        if update is not None:
            self._state_version, self._state = update
        self._render_orientation()

    def _render_orientation(self) -> None:
        status = self._tracker.status
        self._pitch_label.setText(pitch_text(self._state))
        self._alignment_label.setText(alignment_text(self._state, status))
        self._retry_button.setVisible(not self._tracker.is_available)
        self._overlay.set_level_color(level_color(self._state, status))

    def _on_popup_button_clicked(self) -> None:
        self._height_popup.toggle()

    def _on_height_calculated(self, height: float) -> None:
        self._last_height = height
        self._height_label.setText(height_text(height))

    def _save_ui_settings(self) -> None:
        """Persist UI-related settings (update rate, camera, window size)."""
        cfg = UiConfig(
            update_hz=self._config.ui.update_hz,
            show_camera=self._config.ui.show_camera,
            window_width=self.width(),
            window_height=self.height(),
        )
        save_ui_config(cfg)

    # -------------------------------------------------------------------------
    # Cleanup
    # -------------------------------------------------------------------------

    def closeEvent(self, event) -> None:  # noqa: N802 (Qt naming)
        """Stop sensors and camera and save settings before shutdown."""
        self._timer.stop()
        self._tracker.stop()
        self._camera_view.stop()
        self._save_ui_settings()
        super().closeEvent(event)
