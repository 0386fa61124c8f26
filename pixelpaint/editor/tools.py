"""
Tool framework and implementations for PixelPaint.

Each tool reacts to a primary-button press delivered by the ToolEngine.
A tool either changes the surface right away and returns, or opens one
drag session whose move and end callbacks keep the per-stroke state in
their closure. Tools hold no state between presses.

Tools:
- LineTool: Freehand round-capped strokes
- EraseTool: Line strokes that remove paint
- RectangleTool: Filled rectangles with a live preview
- SprayTool: Timed spray of single-pixel dots
- TextTool: Stamp a line of text
- ColorMatcherTool: Pick the brush color from the picture
- FillTool: Flood fill
"""

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional, Tuple

from PySide6.QtCore import Qt

from pixelpaint.editor.color import BLACK, Color
from pixelpaint.editor.drag import PointerCallback, PointerEvent
from pixelpaint.editor.flood_fill import flood_fill
from pixelpaint.editor.geometry import Point, Rect, clamp_to_rect, clamp_to_surface
from pixelpaint.editor.surface import AccessDenied, CompositeMode
from pixelpaint.services.logging_service import get_logger

if TYPE_CHECKING:
    from pixelpaint.editor.engine import ToolEngine


SPRAY_INTERVAL_MS = 25
SPRAY_AREA_PER_DOT = 30
MIN_FONT_SIZE = 7


class ToolType(Enum):
    """Tool types; the value is the name the toolbar shows and dispatches."""
    LINE = "Line"
    ERASE = "Erase"
    RECTANGLE = "Rectangle"
    SPRAY = "Spray"
    TEXT = "Text"
    COLOR_MATCHER = "Color matcher"
    FILL = "Fill"


@dataclass
class ToolContext:
    """
    Drawing state shared by all tools.

    Owned by the editor that created the surface. Tools update the fields
    in place; the instance itself is never replaced.
    """
    color: Color = BLACK
    brush_width: int = 1
    composite_mode: CompositeMode = CompositeMode.NORMAL

    def snapshot(self) -> Tuple[Color, int]:
        """Brush color and width, to restore after an image load."""
        return (self.color, self.brush_width)

    def restore(self, snapshot: Tuple[Color, int]) -> None:
        self.color, self.brush_width = snapshot


@dataclass(frozen=True)
class RectPreview:
    """Rectangle shown while dragging, in widget coordinates."""
    rect: Rect
    color: Color = field(default=BLACK)


def dots_per_tick(brush_width: int) -> int:
    """Number of spray dots per tick, proportional to the brush area."""
    radius = brush_width / 2
    return math.ceil(math.pi * radius * radius / SPRAY_AREA_PER_DOT)


def random_point_in_radius(radius: float, rng: random.Random) -> Tuple[float, float]:
    """
    Uniform random offset inside a disk of the given radius.

    Samples the unit square and rejects points outside the unit circle.
    """
    while True:
        x = rng.random() * 2 - 1
        y = rng.random() * 2 - 1
        if x * x + y * y <= 1:
            return (x * radius, y * radius)


class ToolBase(ABC):
    """
    Base class for all tools.

    Subclasses implement on_press, which receives the press event and the
    engine that owns the surface and the drawing context.
    """

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    @property
    @abstractmethod
    def tool_type(self) -> ToolType:
        """Return the type of this tool."""
        pass

    @property
    def name(self) -> str:
        return self.tool_type.value

    @property
    def cursor(self) -> Qt.CursorShape:
        """Return the cursor to use when this tool is active."""
        return Qt.CursorShape.CrossCursor

    @abstractmethod
    def on_press(self, event: PointerEvent, engine: "ToolEngine") -> None:
        """Handle a primary-button press on the canvas."""
        pass


class LineTool(ToolBase):
    """
    Freehand drawing tool.

    Every pointer move draws a segment from the previous position to the
    new one, so discrete samples join into a continuous stroke.
    """

    @property
    def tool_type(self) -> ToolType:
        return ToolType.LINE

    def on_press(self, event: PointerEvent, engine: "ToolEngine") -> None:
        self.begin_stroke(event, engine)

    def begin_stroke(
        self,
        event: PointerEvent,
        engine: "ToolEngine",
        on_end: Optional[PointerCallback] = None
    ) -> None:
        context = engine.context
        position = engine.map_point(event)

        def on_move(move_event: PointerEvent) -> None:
            nonlocal position
            current = engine.map_point(move_event)
            engine.surface.draw_line(
                position,
                current,
                context.color,
                context.brush_width,
                context.composite_mode,
            )
            position = current
            engine.mark_changed()

        engine.track_drag(on_move, on_end)


class EraseTool(LineTool):
    """Line strokes drawn in erase mode for the duration of the drag."""

    @property
    def tool_type(self) -> ToolType:
        return ToolType.ERASE

    @property
    def cursor(self) -> Qt.CursorShape:
        return Qt.CursorShape.PointingHandCursor

    def on_press(self, event: PointerEvent, engine: "ToolEngine") -> None:
        context = engine.context
        context.composite_mode = CompositeMode.ERASE

        def on_end(end_event: PointerEvent) -> None:
            context.composite_mode = CompositeMode.NORMAL

        self.begin_stroke(event, engine, on_end)


class RectangleTool(ToolBase):
    """
    Filled rectangle tool.

    While dragging, a preview follows the pointer in widget coordinates,
    kept inside the area where the surface is shown. The rectangle is
    committed to the surface once, on release.
    """

    @property
    def tool_type(self) -> ToolType:
        return ToolType.RECTANGLE

    def on_press(self, event: PointerEvent, engine: "ToolEngine") -> None:
        context = engine.context
        surface = engine.surface
        surface_start = engine.map_point(event)
        display_start = Point.floor(event.position)

        def on_move(move_event: PointerEvent) -> None:
            bounds = engine.frame().surface_rect
            rect = Rect.from_corners(
                clamp_to_rect(display_start, bounds),
                clamp_to_rect(Point.floor(move_event.position), bounds),
            )
            engine.show_preview(RectPreview(rect, context.color))

        def on_end(end_event: PointerEvent) -> None:
            engine.show_preview(None)
            rect = Rect.from_corners(
                clamp_to_surface(surface_start, surface.width, surface.height),
                clamp_to_surface(engine.map_point(end_event), surface.width, surface.height),
            )
            if rect.is_empty():
                return
            surface.fill_rect(rect, context.color, context.composite_mode)
            self._logger.debug(f"Rectangle committed: {rect}")
            engine.mark_changed()

        engine.track_drag(on_move, on_end)


class SprayTool(ToolBase):
    """
    Spray can tool.

    Emits dots on a fixed period while the button is held, independent of
    pointer moves; moves only update the spray center.
    """

    def __init__(self, interval_ms: int = SPRAY_INTERVAL_MS) -> None:
        super().__init__()
        self.interval_ms = interval_ms

    @property
    def tool_type(self) -> ToolType:
        return ToolType.SPRAY

    def on_press(self, event: PointerEvent, engine: "ToolEngine") -> None:
        context = engine.context
        surface = engine.surface
        radius = context.brush_width / 2
        dots = dots_per_tick(context.brush_width)
        center = engine.map_point(event)

        def emit() -> None:
            for _ in range(dots):
                dx, dy = random_point_in_radius(radius, engine.rng)
                dot = Point(math.floor(center.x + dx), math.floor(center.y + dy))
                if surface.contains(dot):
                    surface.fill_rect(
                        Rect(dot.x, dot.y, dot.x + 1, dot.y + 1),
                        context.color,
                        context.composite_mode,
                    )
            engine.mark_changed()

        timer = engine.scheduler.schedule_repeating(self.interval_ms, emit)

        def on_move(move_event: PointerEvent) -> None:
            nonlocal center
            center = engine.map_point(move_event)

        def on_end(end_event: PointerEvent) -> None:
            timer.cancel()

        engine.track_drag(on_move, on_end)


class TextTool(ToolBase):
    """Ask for a line of text and stamp it at the pressed point."""

    @property
    def tool_type(self) -> ToolType:
        return ToolType.TEXT

    @property
    def cursor(self) -> Qt.CursorShape:
        return Qt.CursorShape.IBeamCursor

    def on_press(self, event: PointerEvent, engine: "ToolEngine") -> None:
        position = engine.map_point(event)
        text = engine.prompt_text("Text:")
        if not text:
            return

        context = engine.context
        font_size = max(MIN_FONT_SIZE, context.brush_width)
        engine.surface.draw_text(text, position, font_size, context.color)
        engine.mark_changed()


class ColorMatcherTool(ToolBase):
    """Set the brush color to the color of the pressed pixel."""

    @property
    def tool_type(self) -> ToolType:
        return ToolType.COLOR_MATCHER

    def on_press(self, event: PointerEvent, engine: "ToolEngine") -> None:
        position = engine.map_point(event)
        if not engine.surface.contains(position):
            self._logger.debug(f"Color matcher pressed outside the surface at {position}")
            return

        sample = engine.surface.get_pixel(position.x, position.y)
        if isinstance(sample, AccessDenied):
            engine.notify(sample.reason)
            return

        # Brushes take the paint string, which has no alpha channel
        color = sample.with_alpha(255)
        engine.context.color = color
        engine.sample_color(color)


class FillTool(ToolBase):
    """Flood fill the region around the pressed pixel."""

    @property
    def tool_type(self) -> ToolType:
        return ToolType.FILL

    def on_press(self, event: PointerEvent, engine: "ToolEngine") -> None:
        position = engine.map_point(event)
        if not engine.surface.contains(position):
            self._logger.debug(f"Fill pressed outside the surface at {position}")
            return

        result = flood_fill(position, engine.surface, engine.context.color)
        if result.painted:
            engine.mark_changed()
        if result.denied is not None:
            engine.notify(result.denied.reason)


def create_tool(tool_type: ToolType, spray_interval_ms: int = SPRAY_INTERVAL_MS) -> ToolBase:
    """
    Factory function to create tools by type.

    Args:
        tool_type: The type of tool to create.
        spray_interval_ms: Emission period for the spray tool.

    Returns:
        A new instance of the requested tool.
    """
    if tool_type is ToolType.SPRAY:
        return SprayTool(spray_interval_ms)

    tool_classes = {
        ToolType.LINE: LineTool,
        ToolType.ERASE: EraseTool,
        ToolType.RECTANGLE: RectangleTool,
        ToolType.TEXT: TextTool,
        ToolType.COLOR_MATCHER: ColorMatcherTool,
        ToolType.FILL: FillTool,
    }

    if tool_type not in tool_classes:
        raise ValueError(f"Unknown tool type: {tool_type}")

    return tool_classes[tool_type]()


def create_tool_table(spray_interval_ms: int = SPRAY_INTERVAL_MS) -> Mapping[str, ToolBase]:
    """Build the read-only name -> tool table, in toolbar order."""
    table = {
        tool_type.value: create_tool(tool_type, spray_interval_ms)
        for tool_type in ToolType
    }
    return MappingProxyType(table)
