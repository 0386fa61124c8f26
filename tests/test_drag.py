"""
Tests for the input channel and drag sessions.

Verifies:
- on_move runs once per move, in arrival order
- on_end runs exactly once, after the last move, with listeners removed
- Secondary-button releases do not end a drag
- Subscriptions close exactly once
"""
import pytest
from PySide6.QtCore import QPointF, Qt

from pixelpaint.editor.drag import DragSession, DragState, InputChannel, PointerEvent


def move(x, y=0):
    return PointerEvent(QPointF(x, y), Qt.MouseButton.NoButton)


def release(button=Qt.MouseButton.LeftButton):
    return PointerEvent(QPointF(0, 0), button)


class TestDragSession:

    @pytest.mark.parametrize("moves", [0, 1, 7])
    def test_moves_in_order_then_single_end(self, moves):
        channel = InputChannel()
        log = []
        session = DragSession(
            channel,
            lambda e: log.append(("move", e.position.x())),
            lambda e: log.append(("end", channel.subscriber_count)),
        ).start()

        for i in range(moves):
            channel.publish_move(move(i))
        channel.publish_release(release())

        assert log == [("move", float(i)) for i in range(moves)] + [("end", 0)]
        assert session.state is DragState.IDLE

    def test_moves_after_release_ignored(self):
        channel = InputChannel()
        moves = []
        DragSession(channel, moves.append).start()
        channel.publish_release(release())
        channel.publish_move(move(1))
        assert moves == []

    def test_second_release_does_not_end_again(self):
        channel = InputChannel()
        ends = []
        DragSession(channel, lambda e: None, ends.append).start()
        channel.publish_release(release())
        channel.publish_release(release())
        assert len(ends) == 1

    def test_secondary_release_keeps_session_active(self):
        channel = InputChannel()
        ends = []
        session = DragSession(channel, lambda e: None, ends.append).start()
        channel.publish_release(release(Qt.MouseButton.RightButton))
        assert session.active
        assert ends == []
        channel.publish_release(release())
        assert not session.active
        assert len(ends) == 1

    def test_end_callback_optional(self):
        channel = InputChannel()
        session = DragSession(channel, lambda e: None).start()
        channel.publish_release(release())
        assert channel.subscriber_count == 0
        assert session.state is DragState.IDLE

    def test_start_twice_rejected(self):
        channel = InputChannel()
        session = DragSession(channel, lambda e: None).start()
        with pytest.raises(RuntimeError):
            session.start()

    def test_starts_idle(self):
        session = DragSession(InputChannel(), lambda e: None)
        assert session.state is DragState.IDLE
        assert not session.active


class TestSubscription:

    def test_close_once(self):
        channel = InputChannel()
        subscription = channel.subscribe(lambda e: None, lambda e: None)
        assert channel.subscriber_count == 1
        subscription.close()
        subscription.close()
        assert subscription.closed
        assert channel.subscriber_count == 0

    def test_context_manager_closes(self):
        channel = InputChannel()
        moves = []
        with channel.subscribe(moves.append, lambda e: None):
            channel.publish_move(move(1))
        channel.publish_move(move(2))
        assert [e.position.x() for e in moves] == [1.0]
        assert channel.subscriber_count == 0

    def test_pointer_event_primary(self):
        assert PointerEvent(QPointF(0, 0)).is_primary
        assert not PointerEvent(QPointF(0, 0), Qt.MouseButton.RightButton).is_primary
