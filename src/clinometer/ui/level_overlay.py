from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import QWidget

from ..readout import LevelColor

_SIGHT_DIAMETER = 25
_SIGHT_RING_WIDTH = 2
_LEVEL_LINE_OFFSET = 50  # Below the sight, px
_LEVEL_LINE_INSET = 50  # From each side, px
_LEVEL_LINE_THICKNESS = 2


class LevelOverlay(QWidget):
    """Transparent overlay with the sighting dot and the level line.

    The dot marks the window center; the line underneath is colored from
    the current level classification.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_NoSystemBackground)
        self._color = LevelColor.UNKNOWN

    @property
    def level_color(self) -> LevelColor:
        return self._color

    def set_level_color(self, color: LevelColor) -> None:
        if color is self._color:
            return
        self._color = color
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802 (Qt naming)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        center = QPointF(self.width() / 2.0, self.height() / 2.0)

        radius = _SIGHT_DIAMETER / 2.0
        painter.setPen(QPen(QColor("white"), _SIGHT_RING_WIDTH))
        painter.setBrush(QColor("red"))
        painter.drawEllipse(center, radius, radius)

        line_width = max(0.0, self.width() - 2.0 * _LEVEL_LINE_INSET)
        line_y = center.y() + _LEVEL_LINE_OFFSET - _LEVEL_LINE_THICKNESS / 2.0
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(self._color.value))
        painter.drawRect(QRectF(_LEVEL_LINE_INSET, line_y, line_width, _LEVEL_LINE_THICKNESS))
        painter.end()
