"""
Operator command dispatcher.

Commands are confirm-then-apply: the gateway call is awaited first and
the store only changes after the server confirmed success. No optimistic
updates are made, so a failed or timed-out command leaves the state as it
was.
"""
import asyncio
import logging
from typing import Any, Awaitable, Mapping, Optional

from ..state import actions as a
from ..state.store import DashboardStore
from ..use_cases.load_dashboard_data import DashboardDataLoader
from ...core.exceptions import CommandError, CommandTimeoutError, DashboardError
from ...domain.gateway.dashboard_gateway import CommandResult, DashboardGateway

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Executes operator commands through the gateway and applies confirmed effects"""

    def __init__(
        self,
        gateway: DashboardGateway,
        store: DashboardStore,
        loader: DashboardDataLoader,
        timeout_s: float = 15.0,
    ):
        self._gateway = gateway
        self._store = store
        self._loader = loader
        self._timeout_s = timeout_s
        self._last_error: Optional[DashboardError] = None

    @property
    def last_error(self) -> Optional[DashboardError]:
        """Error of the most recent failed command, None after a success."""
        return self._last_error

    # Alerts

    async def acknowledge_alert(self, alert_id: str, acknowledged_by: str) -> bool:
        result = await self._call("acknowledge_alert", self._gateway.acknowledge_alert(alert_id, acknowledged_by))
        if not result.success:
            return False
        self._store.dispatch(a.AlertAcknowledged(alert_id))
        return True

    # Cameras

    async def add_camera(self, config: Mapping[str, Any]) -> bool:
        result = await self._call("add_camera", self._gateway.add_camera(config))
        return await self._reload_cameras_on_success(result)

    async def remove_camera(self, camera_id: str) -> bool:
        result = await self._call("remove_camera", self._gateway.remove_camera(camera_id))
        if not result.success:
            return False
        self._store.dispatch(a.CameraRemoved(camera_id))
        await self._loader.load_camera_status()
        return True

    async def start_camera(self, camera_id: str, quality: str = "medium") -> bool:
        result = await self._call("start_camera", self._gateway.start_camera(camera_id, quality))
        return await self._reload_cameras_on_success(result)

    async def stop_camera(self, camera_id: str) -> bool:
        result = await self._call("stop_camera", self._gateway.stop_camera(camera_id))
        return await self._reload_cameras_on_success(result)

    async def add_demo_cameras(self) -> bool:
        result = await self._call("add_demo_cameras", self._gateway.add_demo_cameras())
        return await self._reload_cameras_on_success(result)

    async def update_detection_config(self, camera_id: str, config: Mapping[str, Any]) -> bool:
        result = await self._call(
            "update_detection_config", self._gateway.update_detection_config(camera_id, config)
        )
        return result.success

    # Peer video sessions

    async def create_webrtc_stream(self, camera_id: str, quality: str = "medium") -> Optional[str]:
        """
        Create a peer video session for ``camera_id``.

        Returns:
            The session id, or None if the session could not be created
        """
        result = await self._call("create_webrtc_stream", self._gateway.create_webrtc_stream(camera_id, quality))
        if not result.success:
            return None
        session_id = result.data.get("session_id")
        if not session_id:
            logger.warning(f"Stream created for camera {camera_id} but no session id was returned")
            return None
        self._store.dispatch(a.PeerSessionAdded(camera_id=camera_id, session_id=session_id))
        return session_id

    async def destroy_webrtc_stream(self, session_id: str) -> bool:
        result = await self._call("destroy_webrtc_stream", self._gateway.destroy_webrtc_stream(session_id))
        if not result.success:
            return False
        self._store.dispatch(a.PeerSessionRemoved(session_id=session_id))
        return True

    # Helpers

    async def _reload_cameras_on_success(self, result: CommandResult) -> bool:
        if not result.success:
            return False
        await self._loader.load_camera_status()
        return True

    async def _call(self, command: str, call: Awaitable[CommandResult]) -> CommandResult:
        try:
            result = await asyncio.wait_for(call, timeout=self._timeout_s)
        except asyncio.TimeoutError:
            error = CommandTimeoutError(command, self._timeout_s)
            logger.warning(error.message)
            self._last_error = error
            return CommandResult.failed(error.message)
        except Exception as e:
            logger.error(f"Command {command} failed: {e}", exc_info=True)
            self._last_error = CommandError(str(e), command=command)
            return CommandResult.failed(str(e))

        if result.success:
            self._last_error = None
        else:
            logger.warning(f"Command {command} rejected: {result.error}")
            self._last_error = CommandError(result.error or f"{command} failed", command=command)
        return result
