"""Qt stage widget drawing the timeline frame and feeding pointer input to the editor."""

from __future__ import annotations

import logging
import sys

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QCursor, QFont, QPainter, QPen
from PySide6.QtWidgets import QApplication, QHBoxLayout, QMainWindow, QPushButton, QVBoxLayout, QWidget

from timeline_editor.config import StageConfig
from timeline_editor.editing.facade import TimelineEditor
from timeline_editor.layout.geometry import PixelRect
from timeline_editor.models import PartialItem
from timeline_editor.ui.scene import LineShape, RectShape, Shape, TextShape

_CURSORS = {
    "default": Qt.CursorShape.ArrowCursor,
    "move": Qt.CursorShape.SizeAllCursor,
    "grab": Qt.CursorShape.OpenHandCursor,
    "grabbing": Qt.CursorShape.ClosedHandCursor,
    "ew-resize": Qt.CursorShape.SizeHorCursor,
}


class TimelineStageView(QWidget):
    def __init__(self, editor: TimelineEditor, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._editor = editor
        self._mounted = False
        self.setMouseTracking(True)
        self.setMinimumHeight(editor.config.height)

        self._drag_index: int | None = None
        self._drag_grab: QPointF = QPointF()
        self._drag_rect: PixelRect | None = None
        self._pan_origin: tuple[float, float] | None = None

        editor.store.subscribe(lambda _snapshot: self.update())

    def apply_cursor(self, style: str) -> None:
        self.setCursor(QCursor(_CURSORS.get(style, Qt.CursorShape.ArrowCursor)))

    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        if not self._mounted:
            # Width is measured once; later resizes do not re-mount.
            self._mounted = True
            self._editor.mount(self.width())
            self._editor.pan(-self._editor.config.range.min - self._editor.config.padding)

    def paintEvent(self, _event) -> None:  # type: ignore[override]
        frame = self._editor.frame()
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.translate(frame.offset_x + frame.padding, 0)
        for shape in frame.background:
            _draw_shape(painter, shape)
        for shape in frame.shapes:
            _draw_shape(painter, shape)
        if self._drag_rect is not None:
            self._draw_drag_preview(painter, self._drag_rect)

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        point = self._to_stage(event.position())
        index = self._hit_test(point)
        if index is None:
            self._pan_origin = (event.position().x(), self._editor.state.offset_x)
            self._editor.set_cursor("grabbing")
            return
        rect = self._editor.geometry.item_rect(self._editor.snapshot().items[index])
        self._drag_index = index
        self._drag_grab = QPointF(point.x() - rect.x, point.y() - rect.y)
        self._drag_rect = rect
        self._editor.drag_start(index)

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        point = self._to_stage(event.position())
        if self._pan_origin is not None:
            start_x, start_offset = self._pan_origin
            self._editor.pan(start_offset + event.position().x() - start_x)
            self.update()
            return
        if self._drag_index is not None and self._drag_rect is not None:
            y = self._editor.geometry.closest_layer_y(point.y() - self._drag_grab.y())
            self._drag_rect = PixelRect(x=point.x() - self._drag_grab.x(), y=y, width=self._drag_rect.width)
            self.update()
            return
        self._editor.set_cursor("move" if self._hit_test(point) is not None else "default")

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        if self._pan_origin is not None:
            self._pan_origin = None
            self._editor.set_cursor("default")
            return
        if self._drag_index is None or self._drag_rect is None:
            return
        index, rect = self._drag_index, self._drag_rect
        self._drag_index = None
        self._drag_rect = None
        if self.rect().contains(event.position().toPoint()):
            self._editor.drag_end(index, rect.x, rect.y, rect.width)
        else:
            self._editor.drag_cancel()
        self.update()

    def _to_stage(self, position: QPointF) -> QPointF:
        state = self._editor.state
        return QPointF(position.x() - state.offset_x - self._editor.config.padding, position.y())

    def _hit_test(self, point: QPointF) -> int | None:
        geometry = self._editor.geometry
        for index, item in reversed(list(enumerate(self._editor.snapshot().items))):
            rect = geometry.item_rect(item)
            if rect.x <= point.x() <= rect.x + rect.width and rect.y <= point.y() <= rect.y + geometry.layer_height:
                return index
        return None

    def _draw_drag_preview(self, painter: QPainter, rect: PixelRect) -> None:
        painter.setPen(QPen(QColor("#2f6fb3"), 1, Qt.PenStyle.DashLine))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(
            QRectF(rect.x, rect.y, rect.width, self._editor.geometry.layer_height)
        )


def _draw_shape(painter: QPainter, shape: Shape) -> None:
    if isinstance(shape, RectShape):
        painter.setPen(QPen(QColor(shape.stroke), 1) if shape.stroke else Qt.PenStyle.NoPen)
        painter.setBrush(QColor(shape.fill))
        painter.drawRect(QRectF(shape.x, shape.y, shape.width, shape.height))
    elif isinstance(shape, TextShape):
        painter.setPen(QPen(QColor(shape.color), 1))
        painter.setFont(QFont("Fira Sans", shape.size))
        painter.drawText(QPointF(shape.x, shape.y), shape.text)
    elif isinstance(shape, LineShape):
        x1, y1, x2, y2 = shape.points
        painter.setPen(QPen(QColor(shape.color), shape.width))
        painter.drawLine(QPointF(shape.x + x1, shape.y + y1), QPointF(shape.x + x2, shape.y + y2))


class TimelineWindow(QMainWindow):
    def __init__(self, config: StageConfig | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Timeline Editor")
        self.resize(960, 320)

        self._stage: TimelineStageView | None = None
        self.editor = TimelineEditor(config=config or StageConfig.from_env(), cursor_sink=self._apply_cursor)
        self._stage = TimelineStageView(self.editor)

        add_button = QPushButton("Add")
        add_button.clicked.connect(lambda: self._run(lambda: self.editor.add(PartialItem(attributes={"label": "Item"}))))
        duplicate_button = QPushButton("Duplicate")
        duplicate_button.clicked.connect(lambda: self._run(self.editor.duplicate_current))
        delete_button = QPushButton("Delete")
        delete_button.clicked.connect(lambda: self._run(self.editor.delete_current))

        buttons = QHBoxLayout()
        for button in (add_button, duplicate_button, delete_button):
            buttons.addWidget(button)
        buttons.addStretch(1)

        layout = QVBoxLayout()
        layout.addWidget(self._stage)
        layout.addLayout(buttons)
        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

    def _apply_cursor(self, style: str) -> None:
        if self._stage is not None:
            self._stage.apply_cursor(style)

    def _run(self, action) -> None:
        action()
        if self._stage is not None:
            self._stage.update()


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    app = QApplication.instance() or QApplication(sys.argv)
    window = TimelineWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
