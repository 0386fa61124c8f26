"""
Pointer drag tracking for PixelPaint.

The canvas widget publishes every pointer move and release on an
InputChannel. A DragSession subscribes when a press starts a stroke and
holds the returned Subscription until the primary button is released:

    Idle --start()--> Active --primary release--> Idle

The subscription is closed before the end callback runs, so on_move can
never be called during or after on_end. Everything runs on the Qt event
loop; callbacks never overlap.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional

from PySide6.QtCore import QPointF, Qt

from pixelpaint.services.logging_service import get_logger


@dataclass(frozen=True)
class PointerEvent:
    """A press, move or release delivered by the input source."""
    position: QPointF
    button: Qt.MouseButton = Qt.MouseButton.LeftButton
    modifiers: Qt.KeyboardModifier = field(default=Qt.KeyboardModifier.NoModifier)

    @property
    def is_primary(self) -> bool:
        return self.button == Qt.MouseButton.LeftButton


PointerCallback = Callable[[PointerEvent], None]


class Subscription:
    """Handle returned by InputChannel.subscribe; closes exactly once."""

    def __init__(
        self,
        channel: "InputChannel",
        on_move: PointerCallback,
        on_release: PointerCallback
    ) -> None:
        self._channel = channel
        self.on_move = on_move
        self.on_release = on_release
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._channel._unsubscribe(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class InputChannel:
    """Synchronous fan-out of pointer moves and releases to subscribers."""

    def __init__(self) -> None:
        self._logger = get_logger(__name__)
        self._subscriptions: List[Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, on_move: PointerCallback, on_release: PointerCallback) -> Subscription:
        subscription = Subscription(self, on_move, on_release)
        self._subscriptions.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def publish_move(self, event: PointerEvent) -> None:
        # Copy: a callback may close its own subscription
        for subscription in list(self._subscriptions):
            if not subscription.closed:
                subscription.on_move(event)

    def publish_release(self, event: PointerEvent) -> None:
        for subscription in list(self._subscriptions):
            if not subscription.closed:
                subscription.on_release(event)


class DragState(Enum):
    IDLE = auto()
    ACTIVE = auto()


class DragSession:
    """
    Tracks one press -> move* -> release sequence.

    Args:
        channel: The channel carrying pointer moves and releases.
        on_move: Called synchronously for every move while active.
        on_end: Optional, called once after the primary button is released.
    """

    def __init__(
        self,
        channel: InputChannel,
        on_move: PointerCallback,
        on_end: Optional[PointerCallback] = None
    ) -> None:
        self._logger = get_logger(__name__)
        self._channel = channel
        self._on_move = on_move
        self._on_end = on_end
        self._state = DragState.IDLE
        self._started = False
        self._subscription: Optional[Subscription] = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is DragState.ACTIVE

    def start(self) -> "DragSession":
        if self._started:
            raise RuntimeError("A drag session can only be started once")
        self._started = True
        self._subscription = self._channel.subscribe(self._handle_move, self._handle_release)
        self._state = DragState.ACTIVE
        return self

    def _handle_move(self, event: PointerEvent) -> None:
        if self._state is DragState.ACTIVE:
            self._on_move(event)

    def _handle_release(self, event: PointerEvent) -> None:
        if self._state is not DragState.ACTIVE or not event.is_primary:
            return

        try:
            self._subscription.close()
        finally:
            self._state = DragState.IDLE
        self._logger.debug("Drag session ended")

        if self._on_end is not None:
            self._on_end(event)
