"""
Geometry and coordinate mapping for PixelPaint.

Surface coordinates are integer pixel positions with the origin at the
top-left corner of the buffer and y growing downward. Raw positions come
from the input device in the coordinate system of the widget that shows
the surface.

The surface is drawn centered inside that widget, so a raw position is
mapped by subtracting the widget's top-left corner and the centering delta
((displayed size - buffer size) / 2 per axis), then flooring.
"""

import math
from dataclasses import dataclass
from typing import Tuple, Union

from PySide6.QtCore import QPoint, QPointF, QRect, QRectF


RawPosition = Union[QPointF, QPoint, Tuple[float, float]]


@dataclass(frozen=True)
class Point:
    """Integer point in surface coordinates."""
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __iter__(self):
        """Allow tuple unpacking: x, y = point"""
        return iter((self.x, self.y))

    @classmethod
    def floor(cls, raw: RawPosition) -> "Point":
        """Floor a raw (possibly fractional) position to a Point."""
        x, y = _raw_xy(raw)
        return cls(math.floor(x), math.floor(y))

    def to_qpoint(self) -> QPoint:
        return QPoint(self.x, self.y)


# 4-directional adjacency, y grows downward
NORTH = Point(0, -1)
EAST = Point(1, 0)
SOUTH = Point(0, 1)
WEST = Point(-1, 0)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; right and bottom are exclusive edges."""
    left: int
    top: int
    right: int
    bottom: int

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> "Rect":
        """Normalized rectangle spanning two corner points."""
        return cls(min(a.x, b.x), min(a.y, b.y), max(a.x, b.x), max(a.y, b.y))

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_qrect(self) -> QRect:
        return QRect(self.left, self.top, self.width, self.height)


@dataclass(frozen=True)
class ReferenceFrame:
    """
    Where the surface is shown on screen.

    left/top/width/height describe the displayed element (the whole canvas
    widget), buffer_width/buffer_height the pixel buffer drawn centered in it.
    """
    left: float
    top: float
    width: float
    height: float
    buffer_width: int
    buffer_height: int

    @classmethod
    def from_qrect(cls, rect: Union[QRect, QRectF], buffer_width: int, buffer_height: int) -> "ReferenceFrame":
        return cls(rect.left(), rect.top(), rect.width(), rect.height(), buffer_width, buffer_height)

    @property
    def centering_delta(self) -> Tuple[float, float]:
        return (
            (self.width - self.buffer_width) / 2,
            (self.height - self.buffer_height) / 2,
        )

    @property
    def surface_origin(self) -> Tuple[float, float]:
        """On-screen position of buffer pixel (0, 0)."""
        dx, dy = self.centering_delta
        return (self.left + dx, self.top + dy)

    @property
    def surface_rect(self) -> Rect:
        """On-screen rectangle occupied by the buffer, floored to whole pixels."""
        origin = Point.floor(self.surface_origin)
        return Rect(
            origin.x,
            origin.y,
            origin.x + self.buffer_width,
            origin.y + self.buffer_height,
        )


def _raw_xy(raw: RawPosition) -> Tuple[float, float]:
    if isinstance(raw, (QPointF, QPoint)):
        x, y = raw.x(), raw.y()
    else:
        x, y = raw
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"Non-finite position: ({x}, {y})")
    return x, y


def to_surface_coords(raw: RawPosition, frame: ReferenceFrame) -> Point:
    """
    Convert a raw input position to surface coordinates.

    Args:
        raw: Position in the coordinate system of the displayed element's parent.
        frame: Where the surface is displayed.

    Returns:
        The floored surface coordinate. It may lie outside the buffer.

    Raises:
        ValueError: If the position is NaN or infinite.
    """
    x, y = _raw_xy(raw)
    dx, dy = frame.centering_delta
    return Point(
        math.floor(x - frame.left - dx),
        math.floor(y - frame.top - dy),
    )


def clamp_to_rect(point: Point, rect: Rect) -> Point:
    """Clamp each axis to [rect.left, rect.right] and [rect.top, rect.bottom]."""
    return Point(
        min(max(point.x, rect.left), rect.right),
        min(max(point.y, rect.top), rect.bottom),
    )


def clamp_to_surface(point: Point, width: int, height: int) -> Point:
    """
    Clamp a point to [0, width] x [0, height].

    The upper bound is the dimension itself, one past the last pixel index,
    so a clamped point can serve as an exclusive rectangle corner.
    """
    return clamp_to_rect(point, Rect(0, 0, width, height))
