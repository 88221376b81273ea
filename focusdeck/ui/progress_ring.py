"""Timer dial: one arc for progress, three lines of text inside it."""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QPainter, QPen, QColor, QFont
from PyQt6.QtWidgets import QWidget

from .styles import STATE_COLORS, RING_IDLE, PALETTE

# (pixel size, weight, vertical offset from the ring centre)
_TIME_LINE = (48, QFont.Weight.Bold, -16)
_LABEL_LINE = (13, QFont.Weight.DemiBold, 30)
_SESSIONS_LINE = (11, QFont.Weight.Normal, 55)


class ProgressRing(QWidget):
    """Arc filled clockwise from 12 o'clock by ``percent``."""

    MARGIN = 20
    THICKNESS = 12

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._percent = 0.0
        self._time_text = "25:00"
        self._state_label = ""
        self._sessions_text = ""
        self._ring_state = RING_IDLE
        self._arc_color = QColor(STATE_COLORS[RING_IDLE])

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def state_label(self) -> str:
        return self._state_label

    @property
    def ring_state(self) -> str:
        return self._ring_state

    @property
    def arc_color(self) -> QColor:
        return QColor(self._arc_color)

    def set_percent(self, pct: float) -> None:
        self._percent = max(0.0, min(1.0, pct))
        self.update()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_state_label(self, text: str) -> None:
        self._state_label = text
        self.update()

    def set_sessions_text(self, text: str) -> None:
        self._sessions_text = text
        self.update()

    def apply_state(self, ring_state: str) -> None:
        """Switch the arc to the colour of *ring_state*; unknown ones look idle."""
        if ring_state not in STATE_COLORS:
            ring_state = RING_IDLE
        self._ring_state = ring_state
        self._arc_color = QColor(STATE_COLORS[ring_state])
        self.update()

    # ── painting ─────────────────────────────────────────────────────────

    def _ring_rect(self) -> QRectF:
        side = max(60, min(self.width(), self.height()) - 2 * self.MARGIN)
        return QRectF(
            (self.width() - side) / 2, (self.height() - side) / 2, side, side,
        )

    def paintEvent(self, event) -> None:  # type: ignore[override]
        rect = self._ring_rect()
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        track = QColor(self._arc_color)
        track.setAlpha(40)
        painter.setPen(QPen(track, self.THICKNESS))
        painter.drawEllipse(rect)

        if self._percent > 0:
            pen = QPen(self._arc_color, self.THICKNESS)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(pen)
            # angles are in 1/16 degree; negative span runs clockwise
            painter.drawArc(rect, 90 * 16, -round(self._percent * 360 * 16))

        muted = QColor(PALETTE["text_muted"])
        lines = (
            (self._time_text, _TIME_LINE, QColor(PALETTE["text"])),
            (self._state_label, _LABEL_LINE, self._arc_color),
            (self._sessions_text, _SESSIONS_LINE, muted),
        )
        for text, (size, weight, offset), color in lines:
            font = QFont()
            font.setPixelSize(size)
            font.setWeight(weight)
            painter.setFont(font)
            painter.setPen(color)
            painter.drawText(
                rect.translated(0, offset), Qt.AlignmentFlag.AlignCenter, text,
            )

        painter.end()
