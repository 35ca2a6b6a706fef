# -*- coding: utf-8 -*-
########################
# combo_board.py
########################
# Purpose:
# - Combo board Qt widget.
# - Renders the current combo as a row of arrows plus the timing line.
#
########################
# Key Logic:
# - Arrow colour follows ArrowStatus:
#   - pending: white, completed: dim grey
#   - success: pulsing green, error: pulsing red
# - Hidden elements (sightread mode) are drawn as an outlined placeholder, never as an arrow.
# - Strict boundaries:
#   - The widget only reads GameSnapshot values pushed by AppController.
#   - It never touches GameEngine state.
#
########################
# Interfaces:
# Public dataclasses:
# - BoardConfig(max_arrow_size_pixels: float, arrow_spacing_ratio: float, pulse_period_ms: int, ...)
#
# Public functions:
# - format_seconds(value_seconds: Optional[float]) -> str
# - stats_line(snapshot: GameSnapshot, window_size: int) -> str
#
# Public classes:
# - class ComboBoardWidget(PyQt6.QtWidgets.QWidget)
#   - set_snapshot(snapshot: GameSnapshot) -> None
#
########################

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Dict, Optional

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QPolygonF
from PyQt6.QtWidgets import QSizePolicy, QWidget

from gameplay_models import ArrowStatus, ComboElement, Direction, GameSnapshot
from score_tracker import MAX_TIMES_TO_CONSIDER


@dataclass(frozen=True)
class BoardConfig:
    max_arrow_size_pixels: float = 200.0
    arrow_spacing_ratio: float = 0.15
    side_margin_pixels: float = 40.0
    pulse_period_ms: int = 250
    stats_height_pixels: float = 48.0


_ROTATION_DEGREES: Dict[Direction, float] = {
    Direction.RIGHT: 0.0,
    Direction.DOWN: 90.0,
    Direction.LEFT: 180.0,
    Direction.UP: -90.0,
}

_STATUS_COLORS: Dict[ArrowStatus, QColor] = {
    ArrowStatus.PENDING: QColor(243, 240, 252),
    ArrowStatus.COMPLETED: QColor(90, 90, 96),
    ArrowStatus.SUCCESS: QColor(80, 220, 120),
    ArrowStatus.ERROR: QColor(240, 70, 70),
}


def format_seconds(value_seconds: Optional[float]) -> str:
    if value_seconds is None:
        return "-"
    return f"{float(value_seconds):.3f}s"


def stats_line(snapshot: GameSnapshot, window_size: int = MAX_TIMES_TO_CONSIDER) -> str:
    previous_seconds = None if snapshot.previous_time_ms is None else float(snapshot.previous_time_ms) / 1000.0
    filled = len(snapshot.window_times_ms)
    return (
        f"Previous {format_seconds(previous_seconds)}"
        f"   Average ({filled}/{int(window_size)}) {format_seconds(snapshot.rolling_average_seconds)}"
        f"   Best {format_seconds(snapshot.high_score_seconds)}"
    )


def _arrow_polygon(size: float) -> QPolygonF:
    """Right-pointing arrow centred on the origin."""
    half = size / 2.0
    shaft_half_height = size * 0.14
    head_start_x = size * 0.05
    return QPolygonF(
        [
            QPointF(-half, -shaft_half_height),
            QPointF(head_start_x, -shaft_half_height),
            QPointF(head_start_x, -half * 0.8),
            QPointF(half, 0.0),
            QPointF(head_start_x, half * 0.8),
            QPointF(head_start_x, shaft_half_height),
            QPointF(-half, shaft_half_height),
        ]
    )


class ComboBoardWidget(QWidget):
    def __init__(self, *, config: Optional[BoardConfig] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._config = config or BoardConfig()
        self._snapshot: Optional[GameSnapshot] = None
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumHeight(160)

    def set_snapshot(self, snapshot: GameSnapshot) -> None:
        if snapshot == self._snapshot and not self._is_pulsing(snapshot):
            return
        self._snapshot = snapshot
        self.update()

    @staticmethod
    def _is_pulsing(snapshot: GameSnapshot) -> bool:
        return any(element.status in (ArrowStatus.SUCCESS, ArrowStatus.ERROR) for element in snapshot.elements)

    def _arrow_size(self, count: int) -> float:
        config = self._config
        usable_width = max(1.0, float(self.width()) - 2.0 * float(config.side_margin_pixels))
        per_arrow = usable_width / (count + max(0, count - 1) * float(config.arrow_spacing_ratio))
        usable_height = max(1.0, float(self.height()) - float(config.stats_height_pixels))
        return max(8.0, min(float(config.max_arrow_size_pixels), per_arrow, usable_height * 0.8))

    def _pulse_opacity(self) -> float:
        period_seconds = max(0.05, float(self._config.pulse_period_ms) / 1000.0)
        phase = (time.monotonic() % period_seconds) / period_seconds
        return 1.0 if phase < 0.5 else 0.45

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), QBrush(QColor(0, 0, 0)))

        snapshot = self._snapshot
        if snapshot is not None and snapshot.elements:
            self._paint_combo(painter, snapshot)
            self._paint_stats(painter, snapshot)

        painter.end()

    def _paint_combo(self, painter: QPainter, snapshot: GameSnapshot) -> None:
        count = len(snapshot.elements)
        size = self._arrow_size(count)
        spacing = size * float(self._config.arrow_spacing_ratio)
        total_width = count * size + (count - 1) * spacing
        start_x = (float(self.width()) - total_width) / 2.0 + size / 2.0
        center_y = (float(self.height()) - float(self._config.stats_height_pixels)) / 2.0

        pulse_opacity = self._pulse_opacity()
        for index, element in enumerate(snapshot.elements):
            center = QPointF(start_x + index * (size + spacing), center_y)
            self._paint_element(painter, element, center, size, pulse_opacity)

    def _paint_element(
        self,
        painter: QPainter,
        element: ComboElement,
        center: QPointF,
        size: float,
        pulse_opacity: float,
    ) -> None:
        painter.save()
        painter.translate(center)

        if element.hidden:
            painter.setPen(QPen(QColor(120, 120, 130), max(2.0, size * 0.03), Qt.PenStyle.DashLine))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            half = size * 0.4
            painter.drawRoundedRect(QRectF(-half, -half, 2.0 * half, 2.0 * half), size * 0.08, size * 0.08)
            painter.restore()
            return

        if element.status in (ArrowStatus.SUCCESS, ArrowStatus.ERROR):
            painter.setOpacity(painter.opacity() * pulse_opacity)

        painter.rotate(_ROTATION_DEGREES[element.direction])
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(_STATUS_COLORS[element.status]))
        painter.drawPolygon(_arrow_polygon(size * 0.9))
        painter.restore()

    def _paint_stats(self, painter: QPainter, snapshot: GameSnapshot) -> None:
        stats_height = float(self._config.stats_height_pixels)
        painter.save()
        painter.setPen(QPen(QColor(220, 220, 220)))
        painter.setFont(QFont("Arial", 14))
        painter.drawText(
            QRectF(0.0, float(self.height()) - stats_height, float(self.width()), stats_height),
            int(Qt.AlignmentFlag.AlignCenter.value),
            stats_line(snapshot),
        )
        painter.restore()
