"""Popup form for the tree height calculation."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..height import InvalidInput, SightingInput, calculate

logger = logging.getLogger(__name__)

_POPUP_WIDTH = 300
_POPUP_HEIGHT = 400


class HeightPopup(QFrame):
    """Three-field form that computes an object height on "Calculate".

    A valid calculation hands the height to ``on_calculated``, clears the
    fields and hides the popup. Invalid input keeps the popup open with an
    error message and never reports a height.
    """

    def __init__(
        self,
        *,
        on_calculated: Callable[[float], None] | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._on_calculated = on_calculated or (lambda _: None)
        self.setObjectName("heightPopup")
        self.setFixedSize(_POPUP_WIDTH, _POPUP_HEIGHT)
        self.setStyleSheet(
            "#heightPopup { background: white; border-radius: 20px; }"
            "#heightError { color: #dc2626; }"
            "#calculateButton { background: #2563eb; color: white; border-radius: 16px; padding: 8px 24px; }"
        )
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(20)
        shadow.setOffset(0, 0)
        shadow.setColor(QColor(0, 0, 0, 160))
        self.setGraphicsEffect(shadow)
        self._build_ui()
        self.hide()

    def _build_ui(self) -> None:
        self._distance_edit = QLineEdit()
        self._distance_edit.setPlaceholderText("Distance from tree")
        self._top_edit = QLineEdit()
        self._top_edit.setPlaceholderText("Angle to top of tree")
        self._bottom_edit = QLineEdit()
        self._bottom_edit.setPlaceholderText("Angle to bottom of tree")

        self._error_label = QLabel()
        self._error_label.setObjectName("heightError")
        self._error_label.setWordWrap(True)
        self._error_label.hide()

        self._calculate_button = QPushButton("Calculate")
        self._calculate_button.setObjectName("calculateButton")
        self._calculate_button.clicked.connect(self.calculate)
        self._bottom_edit.returnPressed.connect(self.calculate)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(30)
        layout.addWidget(self._distance_edit)
        layout.addWidget(self._top_edit)
        layout.addWidget(self._bottom_edit)
        layout.addWidget(self._error_label)
        layout.addWidget(self._calculate_button, alignment=Qt.AlignmentFlag.AlignHCenter)

    def sighting_input(self) -> SightingInput:
        return SightingInput(
            distance=self._distance_edit.text(),
            angle_to_top=self._top_edit.text(),
            angle_to_bottom=self._bottom_edit.text(),
        )

    def set_sighting_input(self, sighting: SightingInput) -> None:
        self._distance_edit.setText(sighting.distance)
        self._top_edit.setText(sighting.angle_to_top)
        self._bottom_edit.setText(sighting.angle_to_bottom)

    @property
    def error_text(self) -> str | None:
        """Current validation message, or None when no error is shown."""
        if self._error_label.isHidden():
            return None
        return self._error_label.text()

    def calculate(self) -> float | None:
        """Run the calculation; returns the height, or None on invalid input."""
        try:
            height = calculate(self.sighting_input()).height_units
        except InvalidInput as exc:
            logger.info("Height not calculated: %s", exc)
            self._error_label.setText(f"Invalid {exc.field}: enter a number")
            self._error_label.show()
            return None
        self.clear()
        self.hide()
        self._on_calculated(height)
        return height

    def clear(self) -> None:
        self._distance_edit.clear()
        self._top_edit.clear()
        self._bottom_edit.clear()
        self._error_label.clear()
        self._error_label.hide()

    def toggle(self) -> None:
        if self.isHidden():
            self._error_label.hide()
            self.show()
            self.raise_()
            self._distance_edit.setFocus()
        else:
            self.hide()
