"""
Pixel surface for PixelPaint.

PixelSurface owns the raster buffer being edited. The buffer is a QImage in
non-premultiplied ARGB32 so that a pixel written with set_pixel reads back
with exactly the same channels.

Pixel reads return a typed result: either a Color or AccessDenied when the
buffer was loaded from a source whose pixels may not be inspected. Out of
range coordinates are a caller defect and raise PreconditionViolation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QFont, QImage, QPainter, QPen

from pixelpaint.editor.color import Color, WHITE
from pixelpaint.editor.geometry import Point, Rect
from pixelpaint.services.logging_service import get_logger


IMAGE_FORMAT = QImage.Format.Format_ARGB32

ACCESS_DENIED_MESSAGE = "Unable to access the picture's pixel data"


class PreconditionViolation(AssertionError):
    """A buffer accessor was called with coordinates outside the surface."""


@dataclass(frozen=True)
class AccessDenied:
    """Result of a read on a surface whose pixels are locked."""
    reason: str = ACCESS_DENIED_MESSAGE


class CompositeMode(Enum):
    """How paint operations combine with the buffer."""
    NORMAL = "source-over"
    ERASE = "destination-out"

    @property
    def qt_mode(self) -> QPainter.CompositionMode:
        if self is CompositeMode.ERASE:
            return QPainter.CompositionMode.CompositionMode_DestinationOut
        return QPainter.CompositionMode.CompositionMode_SourceOver


PixelResult = Union[Color, AccessDenied]


class PixelSurface:
    """
    The rectangular pixel buffer being edited.

    Width, height and contents change together, either through the paint
    operations below or wholesale through replace().
    """

    def __init__(self, image: QImage, readable: bool = True) -> None:
        self._logger = get_logger(__name__)
        self._image = self._prepare(image)
        self._readable = readable

    @classmethod
    def blank(cls, width: int, height: int, color: Color = WHITE) -> "PixelSurface":
        """Create a surface filled with a single color."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        image = QImage(width, height, IMAGE_FORMAT)
        image.fill(color.to_qcolor())
        return cls(image)

    @staticmethod
    def _prepare(image: QImage) -> QImage:
        if image.isNull():
            raise ValueError("Cannot create a surface from a null image")
        if image.format() != IMAGE_FORMAT:
            return image.convertToFormat(IMAGE_FORMAT)
        return image

    # ─── Properties ───────────────────────────────────────────────────────

    @property
    def width(self) -> int:
        return self._image.width()

    @property
    def height(self) -> int:
        return self._image.height()

    @property
    def readable(self) -> bool:
        return self._readable

    @property
    def image(self) -> QImage:
        """The live buffer, for rendering only."""
        return self._image

    def contains(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def replace(self, image: QImage, readable: bool = True) -> None:
        """Swap in a new buffer; dimensions and contents change together."""
        prepared = self._prepare(image)
        self._image, self._readable = prepared, readable
        self._logger.info(
            f"Surface replaced: {prepared.width()}x{prepared.height()} (readable={readable})"
        )

    def snapshot(self) -> Union[QImage, AccessDenied]:
        """Copy of the buffer for export; denied when pixels are locked."""
        if not self._readable:
            return AccessDenied()
        return self._image.copy()

    # ─── Pixel Access ─────────────────────────────────────────────────────

    def _check_point(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise PreconditionViolation(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} surface"
            )

    def get_pixel(self, x: int, y: int) -> PixelResult:
        """Read one pixel, or AccessDenied when the buffer is not readable."""
        self._check_point(x, y)
        if not self._readable:
            return AccessDenied()
        return Color.from_qcolor(self._image.pixelColor(x, y))

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Overwrite one pixel with exactly the given channels."""
        self._check_point(x, y)
        self._image.setPixelColor(x, y, color.to_qcolor())

    # ─── Painting ─────────────────────────────────────────────────────────

    def _painter(self, mode: CompositeMode) -> QPainter:
        painter = QPainter(self._image)
        painter.setCompositionMode(mode.qt_mode)
        return painter

    def fill_rect(
        self,
        rect: Rect,
        color: Color,
        mode: CompositeMode = CompositeMode.NORMAL
    ) -> None:
        """Fill a rectangle that lies within [0, width] x [0, height]."""
        if not (0 <= rect.left <= rect.right <= self.width
                and 0 <= rect.top <= rect.bottom <= self.height):
            raise PreconditionViolation(
                f"Rectangle {rect} outside {self.width}x{self.height} surface"
            )
        if rect.is_empty():
            return

        painter = self._painter(mode)
        painter.fillRect(rect.to_qrect(), color.to_qcolor())
        painter.end()

    def draw_line(
        self,
        start: Point,
        end: Point,
        color: Color,
        width: int,
        mode: CompositeMode = CompositeMode.NORMAL
    ) -> None:
        """
        Stroke a round-capped segment between two pixel positions.

        Endpoints are pixel centers; parts of the stroke outside the buffer
        are clipped.
        """
        pen = QPen(color.to_qcolor())
        pen.setWidthF(float(width))
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)

        painter = self._painter(mode)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(pen)
        painter.drawLine(
            QPointF(start.x + 0.5, start.y + 0.5),
            QPointF(end.x + 0.5, end.y + 0.5),
        )
        painter.end()

    def draw_text(
        self,
        text: str,
        position: Point,
        font_size: int,
        color: Color,
        family: str = "sans-serif",
        mode: CompositeMode = CompositeMode.NORMAL
    ) -> None:
        """Stamp text with its baseline starting at position."""
        font = QFont(family)
        font.setPixelSize(font_size)

        painter = self._painter(mode)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        painter.setFont(font)
        painter.setPen(color.to_qcolor())
        painter.drawText(position.to_qpoint(), text)
        painter.end()
