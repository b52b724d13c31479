"""
Reconnect policy and supervisor.

The connection manager never retries on its own. ReconnectSupervisor listens
for unclean DISCONNECTED events and schedules connect() attempts with delays
computed by ReconnectPolicy (exponential backoff, capped, bounded attempts).
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Optional

from .connection_manager import ConnectionManager
from .events import LiveEvent, LiveEventKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconnectPolicy:
    """
    Exponential backoff schedule.

    delay(n) = initial_delay_s * multiplier ** (n - 1), capped at max_delay_s,
    for attempts 1..max_attempts. Defaults give 5s, 10s, 20s, 30s, 30s...
    """
    initial_delay_s: float = 5.0
    max_delay_s: float = 30.0
    multiplier: float = 2.0
    max_attempts: int = 10
    jitter: bool = False

    def __post_init__(self) -> None:
        if self.initial_delay_s <= 0 or self.max_delay_s <= 0:
            raise ValueError("Reconnect delays must be positive")
        if self.max_attempts < 0:
            raise ValueError("max_attempts cannot be negative")

    @classmethod
    def from_settings(cls, settings) -> "ReconnectPolicy":
        return cls(
            initial_delay_s=settings.reconnect_interval_ms / 1000.0,
            max_delay_s=settings.reconnect_max_delay_ms / 1000.0,
            max_attempts=settings.reconnect_max_attempts,
        )

    def delay_for(self, attempt: int) -> Optional[float]:
        """
        Delay before reconnect ``attempt`` (1-based), or None when the
        policy has given up.
        """
        if attempt < 1 or attempt > self.max_attempts:
            return None
        delay = min(self.initial_delay_s * (self.multiplier ** (attempt - 1)), self.max_delay_s)
        if self.jitter:
            # Add jitter to prevent thundering herd
            delay = delay * (0.5 + random.random())
        return delay


class ReconnectSupervisor:
    """Drives reconnect attempts for one ConnectionManager"""

    def __init__(self, manager: ConnectionManager, policy: Optional[ReconnectPolicy] = None):
        self._manager = manager
        self._policy = policy or ReconnectPolicy()
        self._attempts = 0
        self._task: Optional[asyncio.Task] = None
        self._unsubscribers = []
        self._active = False

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self._active:
            return
        self._active = True
        self._unsubscribers = [
            self._manager.subscribe(LiveEventKind.DISCONNECTED, self._on_disconnected),
            self._manager.subscribe(LiveEventKind.CONNECTED, self._on_connected),
        ]

    async def stop(self) -> None:
        """Cancel any pending attempt and stop listening."""
        self._active = False
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        await self._cancel_pending()

    def reset(self) -> None:
        self._attempts = 0

    def _on_connected(self, event: LiveEvent) -> None:
        if self._attempts:
            logger.info(f"Live channel restored after {self._attempts} reconnect attempt(s)")
        self._attempts = 0

    def _on_disconnected(self, event: LiveEvent) -> None:
        if not self._active or event.clean or self.pending:
            return
        self._schedule_next()

    def _schedule_next(self) -> None:
        delay = self._policy.delay_for(self._attempts + 1)
        if delay is None:
            logger.error(
                f"Giving up on live channel after {self._attempts} reconnect attempt(s); "
                "polling remains active while auto refresh is enabled"
            )
            return
        self._attempts += 1
        logger.warning(
            f"Live channel lost. Reconnect attempt {self._attempts}/{self._policy.max_attempts} "
            f"in {delay:.1f}s"
        )
        self._task = asyncio.create_task(self._reconnect_after(delay))

    async def _reconnect_after(self, delay: float) -> None:
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            return
        if not self._active:
            return
        connected = await self._manager.connect()
        # A failed open reports DISCONNECTED while this task is still pending
        if not connected and self._active:
            self._schedule_next()

    async def _cancel_pending(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        if task is asyncio.current_task():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
