"""
Shared fixtures for PixelPaint tests.

Provides surfaces, instrumented surfaces, a manual scheduler for the spray
tool and a ready-wired ToolEngine.
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import random
from collections import Counter

import pytest

from pixelpaint.editor.color import WHITE
from pixelpaint.editor.drag import InputChannel
from pixelpaint.editor.engine import ToolEngine
from pixelpaint.editor.geometry import ReferenceFrame
from pixelpaint.editor.surface import PixelSurface
from pixelpaint.editor.tools import ToolContext, create_tool_table


@pytest.fixture(autouse=True, scope="session")
def _qt_application(qapp):
    """QPainter and fonts need a QGuiApplication for the whole session."""
    return qapp


# ── Test doubles ────────────────────────────────────────────────────────

class CountingSurface(PixelSurface):
    """PixelSurface that records every pixel read and write."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads = Counter()
        self.writes = Counter()
        self.rect_fills = []

    def get_pixel(self, x, y):
        self.reads[(x, y)] += 1
        return super().get_pixel(x, y)

    def set_pixel(self, x, y, color):
        self.writes[(x, y)] += 1
        super().set_pixel(x, y, color)

    def fill_rect(self, rect, color, mode=None):
        self.rect_fills.append((rect, color))
        if mode is None:
            super().fill_rect(rect, color)
        else:
            super().fill_rect(rect, color, mode)


class ManualTimer:
    def __init__(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.cancelled = False

    @property
    def active(self):
        return not self.cancelled

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose repeating callbacks only run when tick() is called."""

    def __init__(self):
        self.timers = []

    def schedule_repeating(self, interval_ms, callback):
        timer = ManualTimer(interval_ms, callback)
        self.timers.append(timer)
        return timer

    def tick(self, count=1):
        for _ in range(count):
            for timer in list(self.timers):
                if not timer.cancelled:
                    timer.callback()


class ScriptedPrompt:
    """Prompt that returns a fixed answer and remembers its labels."""

    def __init__(self, answer):
        self.answer = answer
        self.labels = []

    def __call__(self, label):
        self.labels.append(label)
        return self.answer


def identity_frame(surface):
    """Frame where raw positions equal surface coordinates."""
    return ReferenceFrame(0, 0, surface.width, surface.height, surface.width, surface.height)


def blank_counting_surface(width, height, color=WHITE):
    base = PixelSurface.blank(width, height, color)
    return CountingSurface(base.image)


# ── Fixtures ────────────────────────────────────────────────────────────

@pytest.fixture
def surface():
    """5x5 all-white surface"""
    return blank_counting_surface(5, 5)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_engine(scheduler):
    """Factory building a ToolEngine around a surface with an identity frame."""

    def _make(surface, prompt=None, context=None, frame=None):
        channel = InputChannel()
        engine = ToolEngine(
            surface,
            context or ToolContext(),
            create_tool_table(),
            channel,
            (lambda: frame) if frame is not None else (lambda: identity_frame(surface)),
            scheduler=scheduler,
            prompt=prompt,
            rng=random.Random(1234),
        )
        engine.test_events = {"notices": [], "samples": [], "previews": [], "changes": 0}

        def _changed():
            engine.test_events["changes"] += 1

        engine.notice.connect(engine.test_events["notices"].append)
        engine.color_sampled.connect(engine.test_events["samples"].append)
        engine.preview_changed.connect(engine.test_events["previews"].append)
        engine.surface_changed.connect(_changed)
        return engine

    return _make
