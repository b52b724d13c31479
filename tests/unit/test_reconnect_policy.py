"""
Unit tests for ReconnectPolicy and ReconnectSupervisor
"""
import asyncio
from types import SimpleNamespace

import pytest
from live_dashboard.application.realtime.connection_manager import ConnectionManager
from live_dashboard.application.realtime.reconnect_policy import ReconnectPolicy, ReconnectSupervisor
from live_dashboard.domain.models.dashboard_state import ConnectionStatus


class TestReconnectPolicy:
    """Tests for the backoff schedule"""

    def test_default_schedule(self):
        policy = ReconnectPolicy()
        assert [policy.delay_for(n) for n in range(1, 6)] == [5.0, 10.0, 20.0, 30.0, 30.0]

    def test_gives_up_after_max_attempts(self):
        policy = ReconnectPolicy()
        assert policy.delay_for(10) == 30.0
        assert policy.delay_for(11) is None
        assert policy.delay_for(0) is None

    def test_from_settings(self):
        settings = SimpleNamespace(reconnect_interval_ms=1000, reconnect_max_delay_ms=4000, reconnect_max_attempts=3)
        policy = ReconnectPolicy.from_settings(settings)
        assert [policy.delay_for(n) for n in range(1, 5)] == [1.0, 2.0, 4.0, None]

    def test_jitter_stays_within_bounds(self):
        policy = ReconnectPolicy(jitter=True)
        for _ in range(20):
            assert 2.5 <= policy.delay_for(1) <= 7.5

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            ReconnectPolicy(initial_delay_s=0)


FAST_POLICY = ReconnectPolicy(initial_delay_s=0.01, max_delay_s=0.02, max_attempts=5)


@pytest.fixture
def manager(store, channel_factory):
    return ConnectionManager(store, channel_factory, heartbeat_interval_s=0, connect_timeout_s=1.0)


class TestReconnectSupervisor:
    """Tests for reconnect scheduling"""

    @pytest.mark.asyncio
    async def test_retries_failed_connect_until_success(self, store, channel_factory, manager):
        supervisor = ReconnectSupervisor(manager, FAST_POLICY)
        supervisor.start()
        channel_factory.fail_next = 2

        assert await manager.connect() is False
        await asyncio.sleep(0.2)

        assert len(channel_factory.channels) == 3
        assert store.state.connection == ConnectionStatus.CONNECTED
        assert supervisor.attempts == 0
        await supervisor.stop()
        await manager.close()

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, store, channel_factory, manager):
        supervisor = ReconnectSupervisor(manager, ReconnectPolicy(initial_delay_s=0.01, max_attempts=2))
        supervisor.start()
        channel_factory.fail_next = 10

        await manager.connect()
        await asyncio.sleep(0.2)

        assert len(channel_factory.channels) == 3
        assert not supervisor.pending
        assert store.state.connection == ConnectionStatus.DISCONNECTED
        await supervisor.stop()

    @pytest.mark.asyncio
    async def test_unclean_drop_reconnects(self, store, channel_factory, manager):
        supervisor = ReconnectSupervisor(manager, FAST_POLICY)
        supervisor.start()
        await manager.connect()

        channel_factory.latest.drop(clean=False)
        await asyncio.sleep(0.1)

        assert len(channel_factory.channels) == 2
        assert store.state.connection == ConnectionStatus.CONNECTED
        await supervisor.stop()
        await manager.close()

    @pytest.mark.asyncio
    async def test_clean_close_does_not_reconnect(self, store, channel_factory, manager):
        supervisor = ReconnectSupervisor(manager, FAST_POLICY)
        supervisor.start()
        await manager.connect()

        channel_factory.latest.drop(clean=True)
        await asyncio.sleep(0.1)

        assert len(channel_factory.channels) == 1
        assert store.state.connection == ConnectionStatus.DISCONNECTED
        await supervisor.stop()

    @pytest.mark.asyncio
    async def test_manual_disconnect_does_not_reconnect(self, channel_factory, manager):
        supervisor = ReconnectSupervisor(manager, FAST_POLICY)
        supervisor.start()
        await manager.connect()
        await manager.disconnect()
        await asyncio.sleep(0.1)

        assert len(channel_factory.channels) == 1
        await supervisor.stop()

    @pytest.mark.asyncio
    async def test_stop_cancels_pending_attempt(self, channel_factory, manager):
        supervisor = ReconnectSupervisor(manager, ReconnectPolicy(initial_delay_s=0.05))
        supervisor.start()
        channel_factory.fail_next = 1

        await manager.connect()
        assert supervisor.pending
        await supervisor.stop()
        await asyncio.sleep(0.1)

        assert len(channel_factory.channels) == 1
        assert not supervisor.pending
