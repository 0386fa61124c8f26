"""
Tests for points, rectangles and coordinate mapping.

Verifies:
- Point arithmetic and direction vectors
- to_surface_coords offset, centering delta and flooring
- clamp_to_rect / clamp_to_surface bounds and idempotence
"""
import math

import pytest
from PySide6.QtCore import QPointF

from pixelpaint.editor.geometry import (
    EAST,
    NORTH,
    SOUTH,
    WEST,
    Point,
    Rect,
    ReferenceFrame,
    clamp_to_rect,
    clamp_to_surface,
    to_surface_coords,
)


class TestPoint:

    def test_add_direction(self):
        assert Point(2, 2) + NORTH == Point(2, 1)
        assert Point(2, 2) + EAST == Point(3, 2)
        assert Point(2, 2) + SOUTH == Point(2, 3)
        assert Point(2, 2) + WEST == Point(1, 2)

    def test_unpack(self):
        x, y = Point(4, 7)
        assert (x, y) == (4, 7)

    def test_floor(self):
        assert Point.floor(QPointF(3.9, -0.5)) == Point(3, -1)


class TestRect:

    def test_from_corners_normalizes(self):
        rect = Rect.from_corners(Point(40, 30), Point(10, 10))
        assert (rect.left, rect.top, rect.width, rect.height) == (10, 10, 30, 20)

    def test_empty(self):
        assert Rect.from_corners(Point(3, 3), Point(3, 9)).is_empty()


class TestToSurfaceCoords:

    def test_top_left_corner_maps_to_origin(self):
        frame = ReferenceFrame(15, 40, 100, 50, 100, 50)
        assert to_surface_coords(QPointF(15, 40), frame) == Point(0, 0)

    def test_subtracts_offset_and_floors(self):
        frame = ReferenceFrame(10, 20, 100, 50, 100, 50)
        assert to_surface_coords(QPointF(15.7, 29.2), frame) == Point(5, 9)

    def test_centering_delta(self):
        # Displayed 2px larger per axis than the buffer: 1px border each side
        frame = ReferenceFrame(0, 0, 102, 52, 100, 50)
        assert frame.centering_delta == (1, 1)
        assert to_surface_coords(QPointF(1, 1), frame) == Point(0, 0)
        assert to_surface_coords(QPointF(0.5, 0.5), frame) == Point(-1, -1)

    def test_accepts_tuples(self):
        frame = ReferenceFrame(0, 0, 10, 10, 10, 10)
        assert to_surface_coords((3.5, 4.5), frame) == Point(3, 4)

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, bad):
        frame = ReferenceFrame(0, 0, 10, 10, 10, 10)
        with pytest.raises(ValueError):
            to_surface_coords((bad, 0), frame)

    def test_surface_rect(self):
        frame = ReferenceFrame(0, 0, 120, 80, 100, 50)
        assert frame.surface_rect == Rect(10, 15, 110, 65)


class TestClamping:

    def test_clamp_to_rect(self):
        rect = Rect(10, 10, 20, 20)
        assert clamp_to_rect(Point(0, 15), rect) == Point(10, 15)
        assert clamp_to_rect(Point(25, 30), rect) == Point(20, 20)
        assert clamp_to_rect(Point(12, 13), rect) == Point(12, 13)

    def test_clamp_to_surface_upper_bound_is_dimension(self):
        assert clamp_to_surface(Point(99, 99), 5, 4) == Point(5, 4)
        assert clamp_to_surface(Point(-3, -1), 5, 4) == Point(0, 0)

    @pytest.mark.parametrize("point", [
        Point(-10, -10), Point(0, 0), Point(4, 3), Point(5, 4), Point(6, 2), Point(2, 100),
    ])
    def test_clamp_to_surface_idempotent(self, point):
        once = clamp_to_surface(point, 5, 4)
        assert clamp_to_surface(once, 5, 4) == once
