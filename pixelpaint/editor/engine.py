"""
Tool engine for PixelPaint.

The ToolEngine owns nothing but wiring: it looks up the active tool in a
read-only name -> tool table built at startup and hands it the press
event together with itself, through which the tool reaches the surface,
the drawing context, the input channel and the UI.

Signals:
    surface_changed: The surface was painted.
    notice: A message the user should see (e.g. locked pixel data).
    color_sampled: The color matcher picked a Color.
    preview_changed: A RectPreview to draw, or None to clear it.
"""

import random
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from pixelpaint.editor.color import Color
from pixelpaint.editor.drag import DragSession, InputChannel, PointerCallback, PointerEvent
from pixelpaint.editor.geometry import Point, ReferenceFrame, to_surface_coords
from pixelpaint.editor.surface import PixelSurface
from pixelpaint.editor.tools import RectPreview, ToolBase, ToolContext
from pixelpaint.services.logging_service import get_logger


class TimerHandle:
    """Cancelable repeating callback created by a scheduler."""

    def __init__(self, timer: QTimer) -> None:
        self._timer = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtScheduler:
    """Runs repeating callbacks on the Qt event loop."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def schedule_repeating(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = QTimer(self._parent)
        timer.setInterval(interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        return TimerHandle(timer)


def _no_prompt(label: str) -> Optional[str]:
    return None


class ToolEngine(QObject):
    """
    Dispatches canvas presses to the active tool.

    Args:
        surface: The surface tools paint on.
        context: Shared drawing state.
        tools: Name -> tool table; copied into a read-only mapping.
        channel: Input channel carrying pointer moves and releases.
        frame_provider: Returns where the surface is currently displayed.
        scheduler: Source of repeating timers (spray). Defaults to QTimer.
        prompt: Asks the user for a line of text; None means cancelled.
        rng: Random source for the spray tool.
    """

    surface_changed = Signal()
    notice = Signal(str)
    color_sampled = Signal(object)
    preview_changed = Signal(object)

    def __init__(
        self,
        surface: PixelSurface,
        context: ToolContext,
        tools: Mapping[str, ToolBase],
        channel: InputChannel,
        frame_provider: Callable[[], ReferenceFrame],
        scheduler=None,
        prompt: Optional[Callable[[str], Optional[str]]] = None,
        rng: Optional[random.Random] = None,
        parent: Optional[QObject] = None
    ) -> None:
        super().__init__(parent)
        self._logger = get_logger(__name__)
        self._surface = surface
        self._context = context
        self._tools = MappingProxyType(dict(tools))
        self._channel = channel
        self._frame_provider = frame_provider
        self._scheduler = scheduler if scheduler is not None else QtScheduler(self)
        self._prompt = prompt or _no_prompt
        self._rng = rng or random.Random()

    # ─── Properties ───────────────────────────────────────────────────────

    @property
    def surface(self) -> PixelSurface:
        return self._surface

    @property
    def context(self) -> ToolContext:
        return self._context

    @property
    def tools(self) -> Mapping[str, ToolBase]:
        return self._tools

    @property
    def tool_names(self):
        return list(self._tools)

    @property
    def channel(self) -> InputChannel:
        return self._channel

    @property
    def scheduler(self):
        return self._scheduler

    @property
    def rng(self) -> random.Random:
        return self._rng

    # ─── Dispatch ─────────────────────────────────────────────────────────

    def dispatch(self, event: PointerEvent, active_tool_name: str) -> bool:
        """
        Run the named tool for a press event.

        Returns True if a tool handled the press. Secondary buttons and
        unregistered tool names are ignored.
        """
        if not event.is_primary:
            return False

        tool = self._tools.get(active_tool_name)
        if tool is None:
            self._logger.debug(f"No tool registered as '{active_tool_name}'")
            return False

        tool.on_press(event, self)
        return True

    # ─── Services for Tools ───────────────────────────────────────────────

    def frame(self) -> ReferenceFrame:
        return self._frame_provider()

    def map_point(self, event: PointerEvent) -> Point:
        """Surface coordinates of a pointer event."""
        return to_surface_coords(event.position, self.frame())

    def track_drag(
        self,
        on_move: PointerCallback,
        on_end: Optional[PointerCallback] = None
    ) -> DragSession:
        return DragSession(self._channel, on_move, on_end).start()

    def prompt_text(self, label: str) -> Optional[str]:
        return self._prompt(label)

    def notify(self, message: str) -> None:
        self._logger.warning(message)
        self.notice.emit(message)

    def show_preview(self, preview: Optional[RectPreview]) -> None:
        self.preview_changed.emit(preview)

    def sample_color(self, color: Color) -> None:
        self._logger.info(f"Color sampled: {color.hex_string}")
        self.color_sampled.emit(color)

    def mark_changed(self) -> None:
        self.surface_changed.emit()
