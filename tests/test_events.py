"""
Tests for chainlaunch/events.py
"""

from unittest.mock import Mock

from chainlaunch.events import Event, EventBus, EventStatus, new_event


class TestEvent:
    """Tests for Event."""

    def test_new_event(self):
        event = new_event(EventStatus.ONGOING, "Publishing the network")
        assert event.status == EventStatus.ONGOING
        assert event.in_progress
        assert str(event) == "Publishing the network"
        assert event.timestamp > 0

    def test_to_dict(self):
        event = Event(EventStatus.DONE, "done", timestamp=1.0)
        assert event.to_dict() == {"status": "done", "description": "done", "timestamp": 1.0}


class TestEventBus:
    """Tests for EventBus."""

    def test_delivers_to_subscribers(self):
        bus = EventBus()
        callback = Mock()
        bus.subscribe(callback)

        event = new_event(EventStatus.DONE, "finished")
        bus.send(event)

        callback.assert_called_once_with(event)
        assert bus.sent_count == 1

    def test_subscribe_twice_delivers_once(self):
        bus = EventBus()
        callback = Mock()
        bus.subscribe(callback)
        bus.subscribe(callback)

        bus.send(new_event(EventStatus.NEUTRAL, "x"))

        assert callback.call_count == 1

    def test_unsubscribe(self):
        bus = EventBus()
        callback = Mock()
        bus.subscribe(callback)
        bus.unsubscribe(callback)

        bus.send(new_event(EventStatus.NEUTRAL, "x"))

        callback.assert_not_called()

    def test_subscriber_error_does_not_propagate(self):
        """A failing subscriber neither raises nor blocks the others."""
        bus = EventBus()
        good = Mock()
        bus.subscribe(Mock(side_effect=RuntimeError("boom")))
        bus.subscribe(good)

        bus.send(new_event(EventStatus.ONGOING, "x"))

        good.assert_called_once()

    def test_history_is_bounded(self):
        bus = EventBus(history=2)
        for i in range(3):
            bus.send(new_event(EventStatus.NEUTRAL, f"event {i}"))

        assert [event.description for event in bus.history] == ["event 1", "event 2"]

    def test_no_history_by_default(self):
        bus = EventBus()
        bus.send(new_event(EventStatus.NEUTRAL, "x"))
        assert bus.history == []
