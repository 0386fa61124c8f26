"""
Tests for the wavefront flood fill.

Verifies:
- The 5x5 scenarios (open region, blocked by a boundary column)
- Each coordinate is read at most once
- A second fill with the same color changes nothing
- Reads clamp to the last valid pixel, so edge pixels revisit themselves
  instead of reaching past the buffer
- A denied read aborts the fill and keeps the paint applied so far
"""
from pixelpaint.editor.color import WHITE, Color
from pixelpaint.editor.flood_fill import flood_fill
from pixelpaint.editor.geometry import Point
from pixelpaint.editor.surface import AccessDenied

from conftest import CountingSurface, blank_counting_surface

RED = Color(255, 0, 0, 255)
BLUE = Color(0, 0, 255, 255)


def colors(surface):
    return {
        (x, y): surface.get_pixel(x, y)
        for y in range(surface.height)
        for x in range(surface.width)
    }


class TestFloodFillScenarios:

    def test_fills_whole_uniform_surface(self, surface):
        result = flood_fill(Point(2, 2), surface, RED)

        assert all(color == RED for color in colors(surface).values())
        assert len(result.visited) == 25
        assert result.painted == 25
        assert result.completed

    def test_stops_at_boundary_column(self, surface):
        for y in range(5):
            surface.set_pixel(2, y, BLUE)

        result = flood_fill(Point(0, 0), surface, RED)

        for (x, y), color in colors(surface).items():
            if x < 2:
                assert color == RED, (x, y)
            elif x == 2:
                assert color == BLUE, (x, y)
            else:
                assert color == WHITE, (x, y)
        assert result.painted == 10
        # The blue column is tested, nothing beyond it is
        assert all(p.x <= 2 for p in result.visited)

    def test_diagonal_gap_not_crossed(self):
        surface = blank_counting_surface(3, 3)
        # Blue anti-diagonal splits the corners
        for x, y in [(0, 2), (1, 1), (2, 0)]:
            surface.set_pixel(x, y, BLUE)

        flood_fill(Point(0, 0), surface, RED)

        assert surface.get_pixel(0, 0) == RED
        assert surface.get_pixel(2, 2) == WHITE

    def test_only_matching_pixels_change(self):
        surface = blank_counting_surface(6, 6)
        surface.set_pixel(3, 3, Color(254, 255, 255))
        surface.set_pixel(4, 4, BLUE)
        before = colors(surface)

        flood_fill(Point(0, 0), surface, RED)

        for point, color in colors(surface).items():
            if before[point] == WHITE:
                assert color == RED
            else:
                assert color == before[point]


class TestFloodFillInvariants:

    def test_each_pixel_read_at_most_once(self):
        surface = blank_counting_surface(12, 9)
        for y in range(9):
            surface.set_pixel(6, y, BLUE)

        flood_fill(Point(1, 1), surface, RED)

        assert surface.reads
        assert max(surface.reads.values()) == 1

    def test_each_pixel_written_at_most_once(self, surface):
        flood_fill(Point(4, 0), surface, RED)
        assert max(surface.writes.values()) == 1
        assert len(surface.writes) == 25

    def test_second_fill_is_noop(self, surface):
        flood_fill(Point(2, 2), surface, RED)
        surface.writes.clear()

        result = flood_fill(Point(2, 2), surface, RED)

        assert result.painted == 0
        assert sum(surface.writes.values()) == 0

    def test_corner_origin_visits_only_buffer_pixels(self, surface):
        result = flood_fill(Point(0, 0), surface, RED)

        assert result.visited == {Point(x, y) for x in range(5) for y in range(5)}
        assert all(0 <= x < 5 and 0 <= y < 5 for x, y in surface.reads)

    def test_single_pixel_surface(self):
        surface = blank_counting_surface(1, 1)
        result = flood_fill(Point(0, 0), surface, RED)
        assert surface.get_pixel(0, 0) == RED
        assert result.visited == {Point(0, 0)}


class DenyAfterReads(CountingSurface):
    """Surface whose pixel reads become locked after a number of reads."""

    def __init__(self, image, allowed_reads):
        super().__init__(image)
        self.allowed_reads = allowed_reads

    def get_pixel(self, x, y):
        if sum(self.reads.values()) >= self.allowed_reads:
            self.reads[(x, y)] += 1
            return AccessDenied()
        return super().get_pixel(x, y)


class TestFloodFillAccessDenied:

    def test_locked_origin_paints_nothing(self):
        surface = DenyAfterReads(blank_counting_surface(5, 5).image, allowed_reads=0)

        result = flood_fill(Point(2, 2), surface, RED)

        assert isinstance(result.denied, AccessDenied)
        assert result.painted == 0
        assert not surface.writes

    def test_denied_mid_traversal_keeps_partial_paint(self):
        surface = DenyAfterReads(blank_counting_surface(5, 5).image, allowed_reads=3)

        result = flood_fill(Point(2, 2), surface, RED)

        assert not result.completed
        # Origin plus the two neighbors read before the lock
        assert result.painted == 3
        painted = [p for p, n in surface.writes.items() if n]
        assert sorted(painted) == sorted([(2, 2), (2, 1), (3, 2)])
