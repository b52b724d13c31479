"""
Unit tests for CommandDispatcher
"""
import pytest
from live_dashboard.application.commands.command_dispatcher import CommandDispatcher
from live_dashboard.application.state import actions as a
from live_dashboard.application.use_cases.load_dashboard_data import DashboardDataLoader
from live_dashboard.core.exceptions import CommandError, CommandTimeoutError
from live_dashboard.domain.gateway.dashboard_gateway import CommandResult
from live_dashboard.domain.models.alert import Alert, AlertSeverity, AlertStatus
from live_dashboard.domain.models.camera import CameraStatus


@pytest.fixture
def commands(gateway, store):
    return CommandDispatcher(gateway, store, DashboardDataLoader(gateway, store), timeout_s=0.5)


class TestAcknowledgeAlert:
    """Tests for acknowledge_alert"""

    @pytest.mark.asyncio
    async def test_success_marks_alert_acknowledged(self, commands, store, gateway):
        store.dispatch(a.AlertAppended(Alert(id="a1", severity=AlertSeverity.HIGH)))
        assert await commands.acknowledge_alert("a1", "operator") is True
        assert store.state.alert("a1").status == AlertStatus.ACKNOWLEDGED
        assert gateway.calls[-1] == ("acknowledge_alert", ("a1", "operator"))
        assert commands.last_error is None

    @pytest.mark.asyncio
    async def test_rejection_leaves_state_unchanged(self, commands, store, gateway):
        store.dispatch(a.AlertAppended(Alert(id="a1")))
        before = store.state
        gateway.command_results["acknowledge_alert"] = CommandResult.failed("HTTP 404")

        assert await commands.acknowledge_alert("a1", "operator") is False
        assert store.state is before
        assert isinstance(commands.last_error, CommandError)
        assert commands.last_error.command == "acknowledge_alert"


class TestCameraCommands:
    """Tests for camera management commands"""

    @pytest.mark.asyncio
    async def test_add_camera_reloads_camera_list(self, commands, store, gateway):
        gateway.cameras = [{"id": "c1", "status": "online"}]
        assert await commands.add_camera({"name": "Lobby", "url": "rtsp://lobby"}) is True
        assert gateway.count("get_camera_status") == 1
        assert [c.id for c in store.state.cameras] == ["c1"]

    @pytest.mark.asyncio
    async def test_failed_start_does_not_reload(self, commands, gateway):
        gateway.command_results["start_camera"] = CommandResult.failed("camera busy")
        assert await commands.start_camera("c1", quality="high") is False
        assert gateway.count("get_camera_status") == 0

    @pytest.mark.asyncio
    async def test_remove_camera_drops_it_and_its_session(self, commands, store, gateway):
        store.dispatch(a.CameraStatusReceived((CameraStatus(id="c1", name="Lobby"),)))
        store.dispatch(a.PeerSessionAdded("c1", "s1"))
        gateway.cameras = []

        assert await commands.remove_camera("c1") is True
        assert store.state.camera("c1") is None
        assert dict(store.state.peer_sessions) == {}
        assert gateway.count("get_camera_status") == 1

    @pytest.mark.asyncio
    async def test_update_detection_config_has_no_state_effect(self, commands, store):
        version = store.state.version
        assert await commands.update_detection_config("c1", {"confidence_threshold": 0.6}) is True
        assert store.state.version == version

    @pytest.mark.asyncio
    async def test_timeout_is_a_failure(self, commands, store, gateway):
        gateway.command_delay_s = 2.0
        before = store.state
        assert await commands.stop_camera("c1") is False
        assert isinstance(commands.last_error, CommandTimeoutError)
        assert store.state is before


class TestPeerSessions:
    """Tests for peer video session commands"""

    @pytest.mark.asyncio
    async def test_create_records_session(self, commands, store):
        session_id = await commands.create_webrtc_stream("c1")
        assert session_id == "session-c1"
        assert dict(store.state.peer_sessions) == {"c1": "session-c1"}

    @pytest.mark.asyncio
    async def test_failed_create_records_nothing(self, commands, store, gateway):
        gateway.command_results["create_webrtc_stream"] = CommandResult.failed("HTTP 500")
        assert await commands.create_webrtc_stream("c1") is None
        assert dict(store.state.peer_sessions) == {}
        assert commands.last_error is not None

    @pytest.mark.asyncio
    async def test_create_without_session_id(self, commands, store, gateway):
        gateway.command_results["create_webrtc_stream"] = CommandResult(success=True, data={})
        assert await commands.create_webrtc_stream("c1") is None
        assert dict(store.state.peer_sessions) == {}

    @pytest.mark.asyncio
    async def test_destroy_removes_session(self, commands, store):
        await commands.create_webrtc_stream("c1")
        assert await commands.destroy_webrtc_stream("session-c1") is True
        assert dict(store.state.peer_sessions) == {}
