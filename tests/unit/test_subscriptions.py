"""
Unit tests for SubscriptionRegistry and LiveEventBus
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from live_dashboard.application.realtime.events import LiveEvent, LiveEventBus, LiveEventKind
from live_dashboard.application.realtime.subscriptions import SubscriptionRegistry
from live_dashboard.core.exceptions import ChannelClosedError
from live_dashboard.domain.constants.data_types import SubscriptionDataType


class TestSubscriptionRegistry:
    """Tests for SubscriptionRegistry"""

    def test_default_declares_every_category(self):
        message = SubscriptionRegistry().build_message()
        assert message == {
            "type": "subscribe",
            "data_types": ["alerts", "behaviors", "camera_status", "detections", "performance", "system_health"],
        }

    def test_add_and_remove(self):
        registry = SubscriptionRegistry([SubscriptionDataType.ALERTS])
        registry.add(SubscriptionDataType.DETECTIONS)
        registry.remove(SubscriptionDataType.ALERTS)
        assert registry.build_message()["data_types"] == ["detections"]

    def test_plain_strings_accepted(self):
        registry = SubscriptionRegistry(["alerts"])
        assert registry.wanted == frozenset({SubscriptionDataType.ALERTS})

    @pytest.mark.asyncio
    async def test_declare_sends_and_records(self):
        channel = MagicMock()
        channel.send = AsyncMock()
        registry = SubscriptionRegistry([SubscriptionDataType.ALERTS])
        assert await registry.declare(channel) is True
        channel.send.assert_awaited_once_with({"type": "subscribe", "data_types": ["alerts"]})
        assert registry.last_declared == frozenset({SubscriptionDataType.ALERTS})

    @pytest.mark.asyncio
    async def test_declare_failure_is_reported_not_raised(self):
        channel = MagicMock()
        channel.send = AsyncMock(side_effect=ChannelClosedError("gone"))
        registry = SubscriptionRegistry()
        assert await registry.declare(channel) is False
        assert registry.last_declared is None


class TestLiveEventBus:
    """Tests for LiveEventBus"""

    def test_publish_only_to_matching_kind(self):
        bus = LiveEventBus()
        alerts = MagicMock()
        detections = MagicMock()
        bus.subscribe(LiveEventKind.NEW_ALERT, alerts)
        bus.subscribe(LiveEventKind.NEW_DETECTION, detections)
        event = LiveEvent(kind=LiveEventKind.NEW_ALERT, data={"id": "a1"})
        assert bus.publish(event) == 1
        alerts.assert_called_once_with(event)
        detections.assert_not_called()

    def test_failing_handler_does_not_stop_delivery(self):
        bus = LiveEventBus()
        healthy = MagicMock()
        bus.subscribe(LiveEventKind.CONNECTED, MagicMock(side_effect=RuntimeError("bug")))
        bus.subscribe(LiveEventKind.CONNECTED, healthy)
        assert bus.publish(LiveEvent(kind=LiveEventKind.CONNECTED)) == 1
        healthy.assert_called_once()

    def test_unsubscribe(self):
        bus = LiveEventBus()
        handler = MagicMock()
        unsubscribe = bus.subscribe(LiveEventKind.ERROR, handler)
        unsubscribe()
        bus.publish(LiveEvent(kind=LiveEventKind.ERROR))
        handler.assert_not_called()

    def test_unknown_kind_rejected(self):
        with pytest.raises(TypeError):
            LiveEventBus().subscribe("new_alert", MagicMock())

    def test_lifecycle_kinds(self):
        assert LiveEventKind.DISCONNECTED.is_lifecycle
        assert not LiveEventKind.NEW_ALERT.is_lifecycle
