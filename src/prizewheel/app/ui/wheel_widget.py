"""
Wheel Widget
============
Draws the wheel and connects it to Qt's timer and mouse events.

Why is this file needed?
------------------------
1. Rendering: The model only knows angles. This widget turns the slice
   ranges into QPainter paths, labels, separators, a border and a pointer.
2. Scheduling: A QTimer calls `Wheel.advance()` once per frame, and only
   while a spin session is active. An idle wheel costs no CPU.
3. Input: Mouse presses, moves and releases become drag start/move/end
   calls in widget-local coordinates.
"""
from __future__ import annotations

import logging
import math

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer
from PySide6.QtGui import (
    QBrush, QColor, QFont, QMouseEvent, QPainter, QPainterPath, QPen, QPixmap, QPolygonF
)
from PySide6.QtWidgets import QWidget

from prizewheel.app.state import WheelStore
from prizewheel.config import ARC_ADJUST, AlignText, DEBUG_DRAG_EVENT_HUE, DEBUG_POINTER_LINE_COLOR
from prizewheel.model.angles import deg2rad
from prizewheel.model.geometry_primitives import Point
from prizewheel.model.wheel import Wheel
from prizewheel.model.wheel_config import WheelConfig

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16
LABEL_FONT_SIZE = 24.0  # px on the base canvas
POINTER_SIZE = 18.0  # px on the base canvas

_ALIGNMENT = {
    AlignText.LEFT: Qt.AlignmentFlag.AlignLeft,
    AlignText.RIGHT: Qt.AlignmentFlag.AlignRight,
    AlignText.CENTER: Qt.AlignmentFlag.AlignHCenter,
}


def point_on_circle(center: Point, radius: float, angle: float) -> QPointF:
    """Surface point at `angle` (0° north, clockwise) and `radius` from `center`."""
    rad = deg2rad(angle)
    return QPointF(center.x + radius * math.sin(rad), center.y - radius * math.cos(rad))


def to_qt_angle(angle: float) -> float:
    """Convert a north-zero clockwise angle into Qt's 3 o'clock counter-clockwise convention."""
    return -(angle + ARC_ADJUST)


class WheelWidget(QWidget):
    """Interactive view of a `Wheel` held by a `WheelStore`."""

    def __init__(self, store: WheelStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self.setMinimumSize(300, 300)
        self.setMouseTracking(True)

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

        self.store.spin_started.connect(self._ensure_animating)
        self.store.items_changed.connect(lambda *_: self.update())

    @property
    def wheel(self) -> Wheel:
        return self.store.wheel

    # ------------------------------------------------------------------
    # Frame scheduling
    # ------------------------------------------------------------------
    def _ensure_animating(self, *_) -> None:
        if self.wheel.is_animating and not self._frame_timer.isActive():
            self._frame_timer.start()
        self.update()

    def _on_frame(self) -> None:
        self.wheel.advance(self.wheel.clock())
        self.update()
        if not self.wheel.is_animating:
            self._frame_timer.stop()

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def resizeEvent(self, event) -> None:
        self.wheel.resize(max(1, self.width()), max(1, self.height()))
        super().resizeEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        point = self._event_point(event)
        if event.button() == Qt.MouseButton.LeftButton and self.wheel.hit_test(point):
            if self.wheel.drag_start(point):
                self.setCursor(Qt.CursorShape.ClosedHandCursor)
                event.accept()
                return
        event.ignore()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        point = self._event_point(event)
        if self.wheel.is_dragging:
            self.wheel.drag_move(point)
            self.update()
            return
        self._refresh_cursor(point)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self.wheel.is_dragging:
            self.wheel.drag_end()
            self._ensure_animating()
        self._refresh_cursor(self._event_point(event))

    def _event_point(self, event: QMouseEvent) -> Point:
        pos = event.position()
        return Point(pos.x(), pos.y())

    def _refresh_cursor(self, point: Point) -> None:
        if self.wheel.is_interactive and self.wheel.hit_test(point):
            self.setCursor(Qt.CursorShape.OpenHandCursor)
        else:
            self.unsetCursor()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        try:
            painter.drawPixmap(0, 0, self.render_pixmap())
        finally:
            painter.end()

    def render_pixmap(self) -> QPixmap:
        """
        Draw the wheel into an off-screen pixmap.

        The backing resolution follows the wheel's `pixel_ratio`, or the
        screen's ratio when it is 0; drawing stays in widget coordinates.
        """
        ratio = self.wheel.get_actual_pixel_ratio(self.devicePixelRatioF())
        pixmap = QPixmap(max(1, round(self.width() * ratio)), max(1, round(self.height() * ratio)))
        pixmap.setDevicePixelRatio(ratio)
        pixmap.fill(Qt.GlobalColor.transparent)

        config = self.wheel.config
        painter = QPainter(pixmap)
        painter.setRenderHints(QPainter.RenderHint.Antialiasing | QPainter.RenderHint.TextAntialiasing)
        try:
            angles = self.wheel.get_item_angles(config.rotation)
            self._draw_item_backgrounds(painter, config, angles)
            self._draw_item_lines(painter, config, angles)
            self._draw_item_labels(painter, config, angles)
            self._draw_border(painter, config)
            self._draw_pointer(painter)
            if config.debug:
                self._draw_debug(painter)
        finally:
            painter.end()
        return pixmap

    def _wheel_rect(self) -> QRectF:
        c, r = self.wheel.center, self.wheel.actual_radius
        return QRectF(c.x - r, c.y - r, 2 * r, 2 * r)

    def _draw_item_backgrounds(self, painter: QPainter, config: WheelConfig, angles) -> None:
        c = self.wheel.center
        rect = self._wheel_rect()
        painter.setPen(Qt.PenStyle.NoPen)

        for i, (item, a) in enumerate(zip(self.wheel.items, angles)):
            color = item.background_color
            if color is None and config.item_background_colors:
                color = config.item_background_colors[i % len(config.item_background_colors)]

            path = QPainterPath(QPointF(c.x, c.y))
            path.arcTo(rect, to_qt_angle(a.start), -a.extent)
            path.closeSubpath()
            painter.fillPath(path, QBrush(QColor(color or "#fff")))

    def _draw_item_lines(self, painter: QPainter, config: WheelConfig, angles) -> None:
        if config.line_width <= 0 or len(angles) < 2:
            return
        c = self.wheel.center
        pen = QPen(QColor(config.line_color), self.wheel.get_scaled_number(config.line_width))
        painter.setPen(pen)
        for a in angles:
            painter.drawLine(QPointF(c.x, c.y), point_on_circle(c, self.wheel.actual_radius, a.start))

    def _draw_item_labels(self, painter: QPainter, config: WheelConfig, angles) -> None:
        c, r = self.wheel.center, self.wheel.actual_radius

        font = QFont(config.item_label_font)
        font.setPixelSize(max(1, round(self.wheel.get_scaled_number(LABEL_FONT_SIZE))))
        painter.setFont(font)

        inner = r * config.item_label_radius_max
        outer = r * config.item_label_radius
        height = font.pixelSize() * 1.5

        for i, (item, a) in enumerate(zip(self.wheel.items, angles)):
            if not item.label:
                continue
            color = item.label_color
            if color is None and config.item_label_colors:
                color = config.item_label_colors[i % len(config.item_label_colors)]

            painter.save()
            painter.translate(c.x, c.y)
            # Positive x now points at the slice center
            painter.rotate(a.center + ARC_ADJUST + config.item_label_rotation)
            painter.setPen(QColor(color or "#000"))
            painter.drawText(
                QRectF(inner, -height / 2, outer - inner, height),
                _ALIGNMENT[config.item_label_align] | Qt.AlignmentFlag.AlignVCenter,
                item.label,
            )
            painter.restore()

    def _draw_border(self, painter: QPainter, config: WheelConfig) -> None:
        if config.border_width <= 0:
            return
        pen = QPen(QColor(config.border_color), self.wheel.get_scaled_number(config.border_width))
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawEllipse(self._wheel_rect())

    def _draw_pointer(self, painter: QPainter) -> None:
        c, r = self.wheel.center, self.wheel.actual_radius
        size = self.wheel.get_scaled_number(POINTER_SIZE)
        angle = self.wheel.pointer_angle
        tip = point_on_circle(c, r - size / 2, angle)
        half_width = math.degrees(size / (2 * (r + size))) if r > 0 else 0.0
        triangle = QPolygonF([
            tip,
            point_on_circle(c, r + size, angle - half_width),
            point_on_circle(c, r + size, angle + half_width),
        ])
        painter.setPen(QPen(QColor("#000"), 1))
        painter.setBrush(QBrush(QColor("#d32f2f")))
        painter.drawPolygon(triangle)

    def _draw_debug(self, painter: QPainter) -> None:
        c, r = self.wheel.center, self.wheel.actual_radius
        painter.setPen(QPen(QColor(DEBUG_POINTER_LINE_COLOR), 2))
        painter.drawLine(QPointF(c.x, c.y), point_on_circle(c, r, self.wheel.pointer_angle))

        events = self.wheel.drag_events
        for i, e in enumerate(events):
            lightness = 50 + int(150 * i / max(1, len(events)))
            color = QColor.fromHsl(DEBUG_DRAG_EVENT_HUE, 255, min(lightness, 255))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(color))
            painter.drawEllipse(QPointF(e.point.x, e.point.y), 4, 4)
