"""
Flood fill for PixelPaint.

Breadth-first region growth over 4-connected pixels that share the exact
color of the origin. The traversal works in wavefronts: the origin is
painted first, then every member of the current wavefront tests its
neighbors in the order north, east, south, west. A coordinate is marked
visited before its color is read, so each pixel is read at most once and
the total work is bounded by width * height.

Neighbors are clamped to the last valid pixel index. A pixel on the edge
therefore gets itself back as its outward neighbor, which is already
visited and skipped.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Set

from pixelpaint.editor.color import Color
from pixelpaint.editor.geometry import EAST, NORTH, SOUTH, WEST, Point, clamp_to_surface
from pixelpaint.editor.surface import AccessDenied, PixelSurface
from pixelpaint.services.logging_service import get_logger

_logger = get_logger(__name__)

FILL_DIRECTIONS = (NORTH, EAST, SOUTH, WEST)


@dataclass(frozen=True)
class FillResult:
    """Outcome of a flood fill."""
    visited: FrozenSet[Point]
    painted: int
    denied: Optional[AccessDenied] = None

    @property
    def completed(self) -> bool:
        return self.denied is None


def flood_fill(origin: Point, surface: PixelSurface, fill_color: Color) -> FillResult:
    """
    Replace the 4-connected region around origin with fill_color.

    Args:
        origin: Starting pixel; must lie inside the surface.
        surface: The surface to paint.
        fill_color: Color written to every matching pixel.

    Returns:
        A FillResult. When a pixel read is denied the fill stops there and
        the pixels painted so far stay painted.
    """
    match_color = surface.get_pixel(origin.x, origin.y)
    if isinstance(match_color, AccessDenied):
        _logger.warning(f"Flood fill at {origin} denied: {match_color.reason}")
        return FillResult(frozenset(), 0, match_color)

    visited: Set[Point] = {origin}
    if match_color == fill_color:
        return FillResult(frozenset(visited), 0)

    surface.set_pixel(origin.x, origin.y, fill_color)
    painted = 1

    max_x = surface.width - 1
    max_y = surface.height - 1
    wavefront: List[Point] = [origin]

    while wavefront:
        next_wavefront: List[Point] = []
        for point in wavefront:
            for direction in FILL_DIRECTIONS:
                neighbor = clamp_to_surface(point + direction, max_x, max_y)
                if neighbor in visited:
                    continue
                visited.add(neighbor)

                color = surface.get_pixel(neighbor.x, neighbor.y)
                if isinstance(color, AccessDenied):
                    _logger.warning(
                        f"Flood fill aborted after {painted} pixels: {color.reason}"
                    )
                    return FillResult(frozenset(visited), painted, color)

                if color == match_color:
                    surface.set_pixel(neighbor.x, neighbor.y, fill_color)
                    painted += 1
                    next_wavefront.append(neighbor)
        wavefront = next_wavefront

    _logger.debug(f"Flood fill from {origin} painted {painted} pixels")
    return FillResult(frozenset(visited), painted)
