"""
Shared pytest fixtures for live_dashboard tests.

The fake gateway and live channel are in-memory implementations of the
domain interfaces so engine components can be exercised end to end without
a network.
"""
import asyncio
import json
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple
from unittest.mock import MagicMock, patch

import pytest

from live_dashboard.application.state.store import DashboardStore
from live_dashboard.core.exceptions import ChannelClosedError, ChannelConnectError, GatewayError
from live_dashboard.domain.gateway.dashboard_gateway import CommandResult, DashboardGateway
from live_dashboard.domain.gateway.live_channel import LiveChannel
from live_dashboard.domain.models.dashboard_state import initial_dashboard_state


# -----------------------------------------------------------------------------
# In-memory fakes
# -----------------------------------------------------------------------------


class FakeGateway(DashboardGateway):
    """Gateway serving canned payloads and recording every call."""

    def __init__(self) -> None:
        self.summary: Any = {"active_cameras": 0, "total_detections": 0, "active_alerts": 0}
        self.cameras: Any = []
        self.detections: Any = []
        self.alerts: Any = []
        self.performance: Any = {}
        self.behaviors: Any = {}
        self.logs: Any = []
        self.fail_reads = False
        self.command_results: Dict[str, CommandResult] = {}
        self.command_delay_s = 0.0
        self.read_delay_s = 0.0
        self.calls: List[Tuple[str, tuple]] = []

    def count(self, name: str) -> int:
        return sum(1 for call_name, _ in self.calls if call_name == name)

    async def _read(self, name: str, payload: Any, *args: Any) -> Any:
        self.calls.append((name, args))
        if self.read_delay_s:
            await asyncio.sleep(self.read_delay_s)
        if self.fail_reads:
            raise GatewayError(f"{name} unavailable", status_code=503)
        return payload

    async def _command(self, name: str, *args: Any, default: Optional[CommandResult] = None) -> CommandResult:
        self.calls.append((name, args))
        if self.command_delay_s:
            await asyncio.sleep(self.command_delay_s)
        return self.command_results.get(name, default or CommandResult(success=True))

    async def get_dashboard_summary(self) -> Any:
        return await self._read("get_dashboard_summary", self.summary)

    async def get_camera_status(self) -> Any:
        return await self._read("get_camera_status", self.cameras)

    async def get_recent_detections(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._read("get_recent_detections", self.detections, dict(filters or {}))

    async def get_active_alerts(self, limit: int = 50) -> Any:
        return await self._read("get_active_alerts", self.alerts, limit)

    async def get_performance_summary(self) -> Any:
        return await self._read("get_performance_summary", self.performance)

    async def get_recent_behaviors(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._read("get_recent_behaviors", self.behaviors, dict(filters or {}))

    async def get_system_logs(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._read("get_system_logs", self.logs, dict(filters or {}))

    async def acknowledge_alert(self, alert_id: str, acknowledged_by: str) -> CommandResult:
        return await self._command("acknowledge_alert", alert_id, acknowledged_by)

    async def add_camera(self, config: Mapping[str, Any]) -> CommandResult:
        return await self._command("add_camera", dict(config))

    async def remove_camera(self, camera_id: str) -> CommandResult:
        return await self._command("remove_camera", camera_id)

    async def start_camera(self, camera_id: str, quality: str = "medium") -> CommandResult:
        return await self._command("start_camera", camera_id, quality)

    async def stop_camera(self, camera_id: str) -> CommandResult:
        return await self._command("stop_camera", camera_id)

    async def update_detection_config(self, camera_id: str, config: Mapping[str, Any]) -> CommandResult:
        return await self._command("update_detection_config", camera_id, dict(config))

    async def create_webrtc_stream(self, camera_id: str, quality: str = "medium") -> CommandResult:
        return await self._command(
            "create_webrtc_stream", camera_id, quality,
            default=CommandResult(success=True, data={"session_id": f"session-{camera_id}"}),
        )

    async def destroy_webrtc_stream(self, session_id: str) -> CommandResult:
        return await self._command("destroy_webrtc_stream", session_id)

    async def add_demo_cameras(self) -> CommandResult:
        return await self._command("add_demo_cameras")


class FakeLiveChannel(LiveChannel):
    """Live channel fed from a queue; ``push`` delivers frames, ``drop`` closes it."""

    def __init__(self, fail_open: bool = False) -> None:
        self.fail_open = fail_open
        self.sent: List[Dict[str, Any]] = []
        self.closed = False
        self._open = False
        self._frames: "asyncio.Queue[Any]" = asyncio.Queue()

    @property
    def is_open(self) -> bool:
        return self._open

    async def open(self) -> None:
        if self.fail_open:
            raise ChannelConnectError("connection refused")
        self._open = True

    async def send(self, message: Mapping[str, Any]) -> None:
        if not self._open:
            raise ChannelClosedError("channel is not open")
        self.sent.append(dict(message))

    async def receive(self) -> str:
        item = await self._frames.get()
        if isinstance(item, ChannelClosedError):
            self._open = False
            raise item
        return item

    async def close(self) -> None:
        self._open = False
        self.closed = True

    def push(self, message: Any) -> None:
        self._frames.put_nowait(message if isinstance(message, str) else json.dumps(message))

    def drop(self, clean: bool = False) -> None:
        self._frames.put_nowait(ChannelClosedError("connection lost", clean=clean))

    def sent_types(self) -> List[str]:
        return [m.get("type") for m in self.sent]


class FakeChannelFactory:
    """Creates FakeLiveChannels; ``fail_next`` makes the next N opens fail."""

    def __init__(self) -> None:
        self.channels: List[FakeLiveChannel] = []
        self.fail_next = 0

    def __call__(self) -> FakeLiveChannel:
        channel = FakeLiveChannel(fail_open=self.fail_next > 0)
        if self.fail_next:
            self.fail_next -= 1
        self.channels.append(channel)
        return channel

    @property
    def latest(self) -> FakeLiveChannel:
        return self.channels[-1]


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "DASHBOARD_API_URL": "http://dashboard.test:8001",
        "LOCAL_TIMEZONE": "UTC",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings():
    """Fixture to mock dashboard settings. Patches the modules that call get_settings."""
    mock = MagicMock()
    mock.api_url = "http://dashboard.test:8001"
    mock.ws_url = "ws://dashboard.test:8001/api/v1/dashboard/ws/live"
    mock.http_timeout_s = 5.0
    mock.command_timeout_s = 1.0
    mock.active_alert_limit = 50
    mock.auto_refresh = True
    mock.refresh_interval_ms = 5000
    mock.detection_capacity = 100
    mock.connect_timeout_s = 1.0
    mock.heartbeat_interval_s = 30.0
    mock.reconnect_interval_ms = 5000
    mock.reconnect_max_delay_ms = 30000
    mock.reconnect_max_attempts = 10
    mock.local_timezone = "UTC"

    with patch("live_dashboard.core.config.get_settings", return_value=mock), patch(
        "live_dashboard.utils.datetime_utils.get_settings", return_value=mock
    ), patch("live_dashboard.infrastructure.external.dashboard_api_client.get_settings", return_value=mock):
        yield mock


@pytest.fixture
def store():
    return DashboardStore(initial_dashboard_state(), record_actions=True)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def channel_factory():
    return FakeChannelFactory()


@pytest.fixture
def settle_tasks():
    """Returns a coroutine function that lets scheduled tasks run."""
    return settle
