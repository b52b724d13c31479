"""
End-to-end scenarios for a fully wired LiveDashboard.

The HTTP gateway and WebSocket channel are replaced by the in-memory fakes
from conftest; everything else is the production wiring from the container.
"""
import asyncio
from unittest.mock import MagicMock

import pytest
from live_dashboard.application.realtime.events import LiveEventKind
from live_dashboard.di.container import create_live_dashboard
from live_dashboard.domain.gateway.dashboard_gateway import CommandResult
from live_dashboard.domain.models.alert import AlertStatus
from live_dashboard.domain.models.dashboard_state import ConnectionStatus


@pytest.fixture
def make_dashboard(mock_settings, gateway, channel_factory):
    mock_settings.refresh_interval_ms = 50
    mock_settings.heartbeat_interval_s = 0
    mock_settings.reconnect_interval_ms = 20
    mock_settings.reconnect_max_delay_ms = 40
    mock_settings.reconnect_max_attempts = 3

    def make(reconnect=True):
        return create_live_dashboard(
            settings=mock_settings, gateway=gateway, channel_factory=channel_factory, reconnect=reconnect,
        )

    return make


@pytest.mark.asyncio
async def test_initial_load(make_dashboard, gateway, channel_factory):
    gateway.summary = {"cameras": [{"id": "c1", "status": "online"}], "alerts": []}

    async with make_dashboard() as dashboard:
        state = dashboard.state
        assert [c.id for c in state.cameras] == ["c1"]
        assert state.alerts == ()
        assert state.loading is False
        assert state.error is None
        assert state.last_updated is not None
        assert state.connection == ConnectionStatus.CONNECTED
        assert channel_factory.latest.sent_types() == ["subscribe", "get_summary"]


@pytest.mark.asyncio
async def test_pushed_alert_then_acknowledge(make_dashboard, channel_factory, settle_tasks):
    async with make_dashboard() as dashboard:
        pushed = MagicMock()
        dashboard.on_live_event(LiveEventKind.NEW_ALERT, pushed)

        channel_factory.latest.push({
            "type": "new_alert",
            "data": {"id": "a1", "severity": "critical", "status": "new"},
        })
        await settle_tasks()
        assert await dashboard.commands.acknowledge_alert("a1", "operator") is True

        alerts = dashboard.state.alerts
        assert len(alerts) == 1
        assert alerts[0].id == "a1"
        assert alerts[0].status == AlertStatus.ACKNOWLEDGED
        pushed.assert_called_once()


@pytest.mark.asyncio
async def test_fallback_polling_until_connected(make_dashboard, gateway, channel_factory):
    channel_factory.fail_next = 100
    dashboard = make_dashboard(reconnect=False)
    await dashboard.start()

    assert dashboard.state.connection == ConnectionStatus.DISCONNECTED
    assert dashboard.state.error.startswith("Failed to connect to live data stream")
    assert dashboard.poller.interval_ms == 50
    baseline = gateway.count("get_dashboard_summary")
    await asyncio.sleep(0.18)
    # One summary request per 50ms tick, never a second timer
    assert 2 <= gateway.count("get_dashboard_summary") - baseline <= 4

    channel_factory.fail_next = 0
    assert await dashboard.connect() is True
    polled = gateway.count("get_dashboard_summary")
    await asyncio.sleep(0.15)
    assert gateway.count("get_dashboard_summary") == polled
    assert not dashboard.poller.is_running
    await dashboard.close()


@pytest.mark.asyncio
async def test_failed_stream_creation_records_no_session(make_dashboard, gateway):
    gateway.command_results["create_webrtc_stream"] = CommandResult.failed("HTTP 500")

    async with make_dashboard() as dashboard:
        assert await dashboard.commands.create_webrtc_stream("c1") is None
        assert dict(dashboard.state.peer_sessions) == {}


@pytest.mark.asyncio
async def test_reconnects_after_unclean_drop(make_dashboard, gateway, channel_factory):
    async with make_dashboard() as dashboard:
        channel_factory.latest.drop(clean=False)
        await asyncio.sleep(0.01)
        assert dashboard.state.connection == ConnectionStatus.DISCONNECTED
        assert dashboard.poller.is_running

        await asyncio.sleep(0.1)
        assert len(channel_factory.channels) == 2
        assert dashboard.state.connection == ConnectionStatus.CONNECTED
        assert dashboard.state.error is None
        assert not dashboard.poller.is_running


@pytest.mark.asyncio
async def test_auto_refresh_off_never_polls(make_dashboard, gateway, channel_factory):
    channel_factory.fail_next = 100
    dashboard = make_dashboard(reconnect=False)
    dashboard.set_auto_refresh(False)
    await dashboard.start()
    await asyncio.sleep(0.12)
    assert gateway.count("get_dashboard_summary") == 1
    await dashboard.close()


@pytest.mark.asyncio
async def test_close_releases_everything(make_dashboard, channel_factory):
    dashboard = make_dashboard()
    listener = MagicMock()
    await dashboard.start()
    dashboard.subscribe(listener)

    await dashboard.close()
    await dashboard.close()

    assert channel_factory.latest.closed
    assert not dashboard.poller.is_running
    assert dashboard.store.closed
    version = dashboard.state.version
    dashboard.select_camera("c1")
    assert dashboard.state.version == version
    with pytest.raises(RuntimeError):
        await dashboard.start()


@pytest.mark.asyncio
async def test_dashboards_are_independent(make_dashboard):
    first = make_dashboard(reconnect=False)
    second = make_dashboard(reconnect=False)
    first.select_camera("c1")
    assert second.state.selection.camera is None
    assert first.store is not second.store


@pytest.mark.asyncio
async def test_settings_validation(make_dashboard):
    dashboard = make_dashboard(reconnect=False)
    with pytest.raises(ValueError):
        dashboard.update_filters(colour="red")
    with pytest.raises(ValueError):
        dashboard.set_refresh_interval(0)
    state = dashboard.update_filters(time_range_hours=6)
    assert state.filters.time_range_hours == 6
    assert dashboard.set_refresh_interval(2000).refresh_interval_ms == 2000
