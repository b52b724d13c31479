"""
Fallback poll scheduler.

While the live channel is not connected and auto refresh is enabled, the
dashboard summary is re-fetched every ``refresh_interval_ms``. The scheduler
follows the store: whenever auto_refresh, connection or the interval change
it stops the running timer and starts a new one if polling is still wanted.
"""
import asyncio
import logging
from typing import Callable, Optional, Tuple

from ..state.actions import Action
from ..state.store import DashboardStore
from ..use_cases.load_dashboard_data import DashboardDataLoader
from ...domain.models.dashboard_state import ConnectionStatus, DashboardState

logger = logging.getLogger(__name__)

_PollKey = Tuple[bool, ConnectionStatus, int]


def _poll_key(state: DashboardState) -> _PollKey:
    return (state.auto_refresh, state.connection, state.refresh_interval_ms)


def should_poll(state: DashboardState) -> bool:
    return state.auto_refresh and not state.is_connected


class FallbackPollScheduler:
    """Owns at most one polling task"""

    def __init__(self, store: DashboardStore, loader: DashboardDataLoader):
        self._store = store
        self._loader = loader
        self._task: Optional[asyncio.Task] = None
        self._interval_ms: Optional[int] = None
        self._last_key: Optional[_PollKey] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval_ms(self) -> Optional[int]:
        """Interval of the running timer, None when stopped."""
        return self._interval_ms if self.is_running else None

    def start(self) -> None:
        """Attach to the store and apply the current state. Requires a running loop."""
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_state_changed)
        self._apply(self._store.state)

    async def stop(self) -> None:
        """Detach from the store and cancel the timer."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        task = self._cancel()
        self._last_key = None
        if task is not None and task is not asyncio.current_task():
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _on_state_changed(self, new_state: DashboardState, old_state: DashboardState, action: Action) -> None:
        if _poll_key(new_state) == self._last_key:
            return
        self._apply(new_state)

    def _apply(self, state: DashboardState) -> None:
        self._last_key = _poll_key(state)
        self._cancel()
        if not should_poll(state):
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; fallback polling not started")
            return

        interval_ms = state.refresh_interval_ms
        self._interval_ms = interval_ms
        self._task = loop.create_task(self._poll(interval_ms / 1000.0))
        logger.info(f"Fallback polling started every {interval_ms}ms")

    def _cancel(self) -> Optional[asyncio.Task]:
        task, self._task = self._task, None
        self._interval_ms = None
        if task is None or task.done():
            return None
        task.cancel()
        logger.debug("Fallback polling stopped")
        return task

    async def _poll(self, interval_s: float) -> None:
        while True:
            await asyncio.sleep(interval_s)
            # Loader failures are reported through the store; keep polling
            await self._loader.load_dashboard_summary()
