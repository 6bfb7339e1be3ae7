"""Tests for the event bus."""

import logging

from statement_import.core.events import IMPORT_FAILED, IMPORT_PARSED, EventBus


class TestEventBus:
    """Test suite for EventBus."""

    def test_publish_in_subscription_order(self):
        bus = EventBus()
        calls = []
        bus.subscribe(IMPORT_PARSED, lambda p: calls.append(("first", p)))
        bus.subscribe(IMPORT_PARSED, lambda p: calls.append(("second", p)))

        delivered = bus.publish(IMPORT_PARSED, "payload")

        assert delivered == 2
        assert calls == [("first", "payload"), ("second", "payload")]

    def test_topics_are_isolated(self):
        bus = EventBus()
        calls = []
        bus.subscribe(IMPORT_FAILED, calls.append)

        assert bus.publish(IMPORT_PARSED, "payload") == 0
        assert calls == []

    def test_duplicate_subscription_is_ignored(self):
        bus = EventBus()
        calls = []
        bus.subscribe(IMPORT_PARSED, calls.append)
        bus.subscribe(IMPORT_PARSED, calls.append)

        bus.publish(IMPORT_PARSED, 1)

        assert calls == [1]

    def test_unsubscribe(self):
        bus = EventBus()
        calls = []
        bus.subscribe(IMPORT_PARSED, calls.append)
        bus.unsubscribe(IMPORT_PARSED, calls.append)
        bus.unsubscribe(IMPORT_PARSED, calls.append)

        bus.publish(IMPORT_PARSED, 1)

        assert calls == []
        assert bus.get_topics() == []

    def test_failing_handler_is_skipped(self, caplog):
        """Test a raising handler doesn't stop the others or the publisher."""
        bus = EventBus()
        calls = []

        def broken(_):
            raise ValueError("bad handler")

        bus.subscribe(IMPORT_PARSED, broken)
        bus.subscribe(IMPORT_PARSED, calls.append)

        with caplog.at_level(logging.WARNING):
            delivered = bus.publish(IMPORT_PARSED, "payload")

        assert delivered == 1
        assert calls == ["payload"]
        assert "Event handler failed" in caplog.text

    def test_buses_are_independent(self):
        first, second = EventBus(), EventBus()
        first.subscribe(IMPORT_PARSED, print)
        assert first.get_topics() == [IMPORT_PARSED]
        assert second.get_topics() == []
