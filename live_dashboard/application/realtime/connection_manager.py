"""
Live channel connection manager.

Owns at most one LiveChannel at a time. Opens it, declares subscriptions,
runs the receive and heartbeat tasks, and reports its lifecycle both to the
state store (ConnectionChanged / ErrorOccurred actions) and to typed event
subscribers. It never retries on its own; see ReconnectSupervisor.
"""

import asyncio
import logging
from typing import Any, Callable, Mapping, Optional

from .event_translator import translate_event
from .events import LiveEvent, LiveEventBus, LiveEventHandler, LiveEventKind
from .message_parser import parse_frame
from .subscriptions import SubscriptionRegistry
from ..state import actions as a
from ..state.store import DashboardStore
from ...core.exceptions import ChannelClosedError, PayloadError, TransportError
from ...domain.constants.message_types import ClientMessageTypes, MessageFields, ServerMessageTypes
from ...domain.gateway.live_channel import LiveChannel, LiveChannelFactory
from ...domain.models.dashboard_state import ConnectionStatus

logger = logging.getLogger(__name__)

CONNECT_FAILED_MESSAGE = "Failed to connect to live data stream"
CONNECTION_LOST_MESSAGE = "Live data stream disconnected"


class ConnectionManager:
    """Manages the lifecycle of the live event channel"""

    def __init__(
        self,
        store: DashboardStore,
        channel_factory: LiveChannelFactory,
        subscriptions: Optional[SubscriptionRegistry] = None,
        heartbeat_interval_s: float = 30.0,
        connect_timeout_s: float = 10.0,
    ):
        self._store = store
        self._channel_factory = channel_factory
        self._subscriptions = subscriptions or SubscriptionRegistry()
        self._heartbeat_interval_s = heartbeat_interval_s
        self._connect_timeout_s = connect_timeout_s

        self._bus = LiveEventBus()
        self._channel: Optional[LiveChannel] = None
        self._receive_task: Optional[asyncio.Task] = None
        self._heartbeat_task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._channel is not None and self._channel.is_open

    @property
    def subscriptions(self) -> SubscriptionRegistry:
        return self._subscriptions

    def subscribe(self, kind: LiveEventKind, handler: LiveEventHandler) -> Callable[[], None]:
        """Subscribe to one kind of live event; returns an unsubscribe callable."""
        return self._bus.subscribe(kind, handler)

    async def connect(self) -> bool:
        """
        Open a fresh live channel, tearing down any existing one first.

        Returns:
            True if the channel is open and subscriptions were sent
        """
        async with self._lock:
            await self._teardown()
            self._store.dispatch(a.ConnectionChanged(ConnectionStatus.CONNECTING))

            channel = self._channel_factory()
            try:
                await asyncio.wait_for(channel.open(), timeout=self._connect_timeout_s)
            except asyncio.TimeoutError:
                await self._report_connect_failure(channel, f"timed out after {self._connect_timeout_s:.1f}s")
                return False
            except (TransportError, OSError) as e:
                await self._report_connect_failure(channel, getattr(e, "message", None) or str(e))
                return False

            self._channel = channel
            logger.info("Live channel connected")
            self._store.dispatch(a.ConnectionChanged(ConnectionStatus.CONNECTED))
            self._store.dispatch(a.ErrorCleared())
            self._bus.publish(LiveEvent(kind=LiveEventKind.CONNECTED))

            await self._subscriptions.declare(channel)
            await self._send_quietly(channel, {MessageFields.TYPE: ClientMessageTypes.GET_SUMMARY})

            self._receive_task = asyncio.create_task(self._receive_loop(channel))
            if self._heartbeat_interval_s > 0:
                self._heartbeat_task = asyncio.create_task(self._heartbeat_loop(channel))
            return True

    async def disconnect(self) -> None:
        """Close the live channel. Always legal and idempotent."""
        async with self._lock:
            had_channel = await self._teardown()
            self._store.dispatch(a.ConnectionChanged(ConnectionStatus.DISCONNECTED))
            if had_channel:
                logger.info("Live channel disconnected")
                self._bus.publish(LiveEvent(kind=LiveEventKind.DISCONNECTED, clean=True))

    async def close(self) -> None:
        await self.disconnect()
        self._bus.clear()

    async def request_summary(self) -> bool:
        return await self.send({MessageFields.TYPE: ClientMessageTypes.GET_SUMMARY})

    async def request_detections(self, filters: Optional[Mapping[str, Any]] = None) -> bool:
        return await self.send({
            MessageFields.TYPE: ClientMessageTypes.GET_DETECTIONS,
            MessageFields.FILTERS: dict(filters or {}),
        })

    async def request_alerts(self) -> bool:
        return await self.send({MessageFields.TYPE: ClientMessageTypes.GET_ALERTS})

    async def send(self, message: Mapping[str, Any]) -> bool:
        """Send a message if connected; returns False when it could not be sent."""
        channel = self._channel
        if channel is None or not channel.is_open:
            logger.debug(f"Live channel not connected; cannot send {message.get(MessageFields.TYPE)}")
            return False
        return await self._send_quietly(channel, message)

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    async def _receive_loop(self, channel: LiveChannel) -> None:
        try:
            while True:
                raw = await channel.receive()
                self._handle_frame(raw)
        except asyncio.CancelledError:
            raise
        except ChannelClosedError as e:
            await self._on_channel_lost(channel, clean=e.clean, reason=e.message)
        except Exception as e:
            logger.error(f"Live channel receive loop failed: {e}", exc_info=True)
            await self._on_channel_lost(channel, clean=False, reason=str(e))

    async def _heartbeat_loop(self, channel: LiveChannel) -> None:
        ping = {MessageFields.TYPE: ClientMessageTypes.PING}
        while channel.is_open:
            await asyncio.sleep(self._heartbeat_interval_s)
            try:
                await channel.send(ping)
            except TransportError as e:
                # The receive loop reports the closure
                logger.debug(f"Heartbeat ping failed: {e.message}")
                return

    def _handle_frame(self, raw: Any) -> None:
        try:
            frame = parse_frame(raw)
        except PayloadError as e:
            logger.warning(f"Dropping undecodable live frame: {e.message}")
            return
        if frame is None:
            return

        if frame.is_control:
            if frame.control_type == ServerMessageTypes.SUBSCRIPTION_CONFIRMED:
                self._subscriptions.confirm(frame.data)
            return

        for action in translate_event(frame.event, self._store.state):
            self._store.dispatch(action)
        self._bus.publish(frame.event)

    # -------------------------------------------------------------------------
    # Lifecycle helpers
    # -------------------------------------------------------------------------

    async def _on_channel_lost(self, channel: LiveChannel, clean: bool, reason: str) -> None:
        if channel is not self._channel:
            return
        self._channel = None
        await self._cancel(self._heartbeat_task)
        self._heartbeat_task = None
        self._receive_task = None
        await self._close_channel(channel)

        level = logging.INFO if clean else logging.WARNING
        logger.log(level, f"Live channel closed ({'clean' if clean else 'unclean'}): {reason}")
        self._store.dispatch(a.ConnectionChanged(ConnectionStatus.DISCONNECTED))
        self._store.dispatch(a.ErrorOccurred(f"{CONNECTION_LOST_MESSAGE}: {reason}"))
        self._bus.publish(LiveEvent(kind=LiveEventKind.DISCONNECTED, clean=clean, reason=reason))

    async def _report_connect_failure(self, channel: LiveChannel, reason: str) -> None:
        logger.error(f"{CONNECT_FAILED_MESSAGE}: {reason}")
        await self._close_channel(channel)
        message = f"{CONNECT_FAILED_MESSAGE}: {reason}"
        self._store.dispatch(a.ConnectionChanged(ConnectionStatus.ERRORING))
        self._store.dispatch(a.ErrorOccurred(message))
        self._bus.publish(LiveEvent(kind=LiveEventKind.ERROR, reason=message))
        self._store.dispatch(a.ConnectionChanged(ConnectionStatus.DISCONNECTED))
        self._bus.publish(LiveEvent(kind=LiveEventKind.DISCONNECTED, clean=False, reason=message))

    async def _teardown(self) -> bool:
        """Cancel tasks and close the current channel; returns True if one was open."""
        channel, self._channel = self._channel, None
        await self._cancel(self._receive_task)
        await self._cancel(self._heartbeat_task)
        self._receive_task = None
        self._heartbeat_task = None
        if channel is None:
            return False
        await self._close_channel(channel)
        return True

    async def _send_quietly(self, channel: LiveChannel, message: Mapping[str, Any]) -> bool:
        try:
            await channel.send(message)
            return True
        except TransportError as e:
            logger.warning(f"Failed to send {message.get(MessageFields.TYPE)}: {e.message}")
            return False

    @staticmethod
    async def _close_channel(channel: LiveChannel) -> None:
        try:
            await channel.close()
        except Exception as e:
            logger.debug(f"Error while closing live channel: {e}")

    @staticmethod
    async def _cancel(task: Optional[asyncio.Task]) -> None:
        if task is None or task.done() or task is asyncio.current_task():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
