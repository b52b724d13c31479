"""
LiveDashboard facade.

One explicitly constructed, explicitly torn down dashboard instance. It owns
the store, connection manager, reconnect supervisor, poll scheduler, loader
and command dispatcher, and is the only object a UI layer talks to.

    async with create_live_dashboard() as dashboard:
        dashboard.subscribe(render)
        ...
"""
import logging
from typing import Any, Callable, Mapping, Optional

from .commands.command_dispatcher import CommandDispatcher
from .polling.poll_scheduler import FallbackPollScheduler
from .realtime.connection_manager import ConnectionManager
from .realtime.events import LiveEventHandler, LiveEventKind
from .realtime.reconnect_policy import ReconnectSupervisor
from .state import actions as a
from .state.store import DashboardStore, StateListener
from .use_cases.load_dashboard_data import DashboardDataLoader
from ..domain.models.dashboard_state import DashboardState

logger = logging.getLogger(__name__)


class LiveDashboard:
    def __init__(
        self,
        store: DashboardStore,
        connection: ConnectionManager,
        loader: DashboardDataLoader,
        commands: CommandDispatcher,
        poller: FallbackPollScheduler,
        reconnect: Optional[ReconnectSupervisor] = None,
    ):
        self._store = store
        self._connection = connection
        self._loader = loader
        self._commands = commands
        self._poller = poller
        self._reconnect = reconnect
        self._started = False
        self._closed = False

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self, connect: bool = True) -> None:
        """
        Load the initial summary, start fallback polling and open the live
        channel. A failed connect is reported through the state; it does not
        raise.
        """
        if self._closed:
            raise RuntimeError("LiveDashboard has been closed")
        if self._started:
            return
        self._started = True

        self._poller.start()
        if self._reconnect is not None:
            self._reconnect.start()

        await self._loader.load_dashboard_summary()
        if connect:
            await self._connection.connect()

    async def close(self) -> None:
        """Stop every background task and release the live channel. Idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._reconnect is not None:
            await self._reconnect.stop()
        await self._poller.stop()
        await self._connection.close()
        self._store.close()
        logger.info("Live dashboard closed")

    async def __aenter__(self) -> "LiveDashboard":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    @property
    def state(self) -> DashboardState:
        return self._store.state

    @property
    def store(self) -> DashboardStore:
        return self._store

    @property
    def commands(self) -> CommandDispatcher:
        return self._commands

    @property
    def loader(self) -> DashboardDataLoader:
        return self._loader

    @property
    def poller(self) -> FallbackPollScheduler:
        return self._poller

    @property
    def connection(self) -> ConnectionManager:
        return self._connection

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Observe state changes; returns an unsubscribe callable."""
        return self._store.subscribe(listener)

    def on_live_event(self, kind: LiveEventKind, handler: LiveEventHandler) -> Callable[[], None]:
        return self._connection.subscribe(kind, handler)

    # -------------------------------------------------------------------------
    # Connection
    # -------------------------------------------------------------------------

    async def connect(self) -> bool:
        if self._reconnect is not None:
            self._reconnect.reset()
        return await self._connection.connect()

    async def disconnect(self) -> None:
        await self._connection.disconnect()

    # -------------------------------------------------------------------------
    # Loaders
    # -------------------------------------------------------------------------

    async def load_dashboard_summary(self) -> bool:
        return await self._loader.load_dashboard_summary()

    async def load_camera_status(self) -> bool:
        return await self._loader.load_camera_status()

    async def load_recent_detections(self, filters: Optional[Mapping[str, Any]] = None) -> bool:
        return await self._loader.load_recent_detections(filters)

    async def load_active_alerts(self, limit: Optional[int] = None) -> bool:
        return await self._loader.load_active_alerts(limit)

    async def load_performance_summary(self) -> bool:
        return await self._loader.load_performance_summary()

    async def load_recent_behaviors(self, filters: Optional[Mapping[str, Any]] = None) -> bool:
        return await self._loader.load_recent_behaviors(filters)

    async def load_system_logs(self, filters: Optional[Mapping[str, Any]] = None) -> bool:
        return await self._loader.load_system_logs(filters)

    # -------------------------------------------------------------------------
    # Client-side settings
    # -------------------------------------------------------------------------

    def update_filters(self, **changes: Any) -> DashboardState:
        """
        Shallow-merge filter changes.

        Raises:
            ValueError: If a change names an unknown filter field
        """
        # Validate before dispatch so the caller sees the error
        self._store.state.filters.merged(changes)
        return self._store.dispatch(a.FiltersUpdated(changes))

    def select_camera(self, camera_id: Optional[str]) -> DashboardState:
        return self._store.dispatch(a.CameraSelected(camera_id))

    def select_alert(self, alert_id: Optional[str]) -> DashboardState:
        return self._store.dispatch(a.AlertSelected(alert_id))

    def set_auto_refresh(self, enabled: bool) -> DashboardState:
        return self._store.dispatch(a.AutoRefreshChanged(bool(enabled)))

    def set_refresh_interval(self, interval_ms: int) -> DashboardState:
        """
        Raises:
            ValueError: If ``interval_ms`` is not positive
        """
        if interval_ms <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval_ms}")
        return self._store.dispatch(a.RefreshIntervalChanged(int(interval_ms)))
