"""
Canvas widget for PixelPaint.

CanvasView draws the pixel surface centered in the widget and turns Qt
mouse events into PointerEvents:

- presses are emitted through pointer_pressed for the ToolEngine
- moves and releases are published on the InputChannel, where an active
  drag session picks them up

Qt grabs the mouse for the widget that received the press, so a drag keeps
reporting moves and its release even when the pointer leaves the canvas.
"""

from typing import Optional

from PySide6.QtCore import QSize, Qt, Signal, Slot
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from pixelpaint.editor.drag import InputChannel, PointerEvent
from pixelpaint.editor.geometry import ReferenceFrame
from pixelpaint.editor.surface import PixelSurface
from pixelpaint.editor.tools import RectPreview
from pixelpaint.services.logging_service import get_logger


class CanvasView(QWidget):
    """
    Widget showing the surface and forwarding pointer input.

    Signals:
        pointer_pressed: Emitted with a PointerEvent on every button press.
    """

    pointer_pressed = Signal(object)

    BACKGROUND = QColor(26, 26, 26)
    BORDER = QColor(90, 90, 90)
    MARGIN = 20

    def __init__(
        self,
        surface: PixelSurface,
        channel: InputChannel,
        parent: Optional[QWidget] = None
    ) -> None:
        super().__init__(parent)
        self._logger = get_logger(__name__)
        self._surface = surface
        self._channel = channel
        self._preview: Optional[RectPreview] = None

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setCursor(Qt.CursorShape.CrossCursor)

    # ─── Geometry ─────────────────────────────────────────────────────────

    def reference_frame(self) -> ReferenceFrame:
        """
        Where the surface is currently drawn, in widget coordinates.

        An odd leftover column or row is trimmed from the element so the
        centered buffer origin is a whole pixel.
        """
        width = self.width() - (self.width() - self._surface.width) % 2
        height = self.height() - (self.height() - self._surface.height) % 2
        return ReferenceFrame(0, 0, width, height, self._surface.width, self._surface.height)

    def sizeHint(self) -> QSize:
        return QSize(
            self._surface.width + 2 * self.MARGIN,
            self._surface.height + 2 * self.MARGIN,
        )

    def minimumSizeHint(self) -> QSize:
        return QSize(self._surface.width, self._surface.height)

    @property
    def preview(self) -> Optional[RectPreview]:
        return self._preview

    @Slot(object)
    def set_preview(self, preview: Optional[RectPreview]) -> None:
        self._preview = preview
        self.update()

    @Slot()
    def surface_resized(self) -> None:
        self.updateGeometry()
        self.update()

    # ─── Event Handlers ───────────────────────────────────────────────────

    def paintEvent(self, event) -> None:
        """Paint the surface and the rectangle preview."""
        painter = QPainter(self)
        painter.fillRect(self.rect(), self.BACKGROUND)

        bounds = self.reference_frame().surface_rect
        painter.drawImage(bounds.left, bounds.top, self._surface.image)

        painter.setPen(QPen(self.BORDER, 1))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(bounds.to_qrect().adjusted(-1, -1, 0, 0))

        if self._preview is not None and not self._preview.rect.is_empty():
            painter.fillRect(self._preview.rect.to_qrect(), self._preview.color.to_qcolor())

        painter.end()

    @staticmethod
    def _pointer_event(event: QMouseEvent) -> PointerEvent:
        return PointerEvent(event.position(), event.button(), event.modifiers())

    def mousePressEvent(self, event: QMouseEvent) -> None:
        self.pointer_pressed.emit(self._pointer_event(event))
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        self._channel.publish_move(self._pointer_event(event))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        self._channel.publish_release(self._pointer_event(event))
        event.accept()
