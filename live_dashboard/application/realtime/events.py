"""Typed live events and the event bus used by the connection manager"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ...domain.constants.message_types import ServerMessageTypes

logger = logging.getLogger(__name__)


class LiveEventKind(str, Enum):
    """
    Closed set of events the connection manager publishes.

    Lifecycle kinds (CONNECTED, DISCONNECTED, ERROR) are raised by the manager
    itself; the remaining kinds mirror the server's push message types.
    """
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"

    DASHBOARD_SUMMARY = ServerMessageTypes.DASHBOARD_SUMMARY
    CAMERA_STATUS_UPDATE = ServerMessageTypes.CAMERA_STATUS_UPDATE
    RECENT_DETECTIONS = ServerMessageTypes.RECENT_DETECTIONS
    ACTIVE_ALERTS = ServerMessageTypes.ACTIVE_ALERTS
    PERFORMANCE_UPDATE = ServerMessageTypes.PERFORMANCE_UPDATE
    NEW_DETECTION = ServerMessageTypes.NEW_DETECTION
    NEW_ALERT = ServerMessageTypes.NEW_ALERT
    CAMERA_ONLINE = ServerMessageTypes.CAMERA_ONLINE
    CAMERA_OFFLINE = ServerMessageTypes.CAMERA_OFFLINE
    SYSTEM_HEALTH_UPDATE = ServerMessageTypes.SYSTEM_HEALTH_UPDATE

    @property
    def is_lifecycle(self) -> bool:
        return self in _LIFECYCLE_KINDS


_LIFECYCLE_KINDS = frozenset({LiveEventKind.CONNECTED, LiveEventKind.DISCONNECTED, LiveEventKind.ERROR})


@dataclass(frozen=True)
class LiveEvent:
    """
    One event from the live channel.

    ``data`` is the raw payload; ``clean`` is only meaningful for
    DISCONNECTED and tells whether the close was requested.
    """
    kind: LiveEventKind
    data: Any = None
    timestamp: Optional[datetime] = None
    clean: bool = True
    reason: Optional[str] = None


LiveEventHandler = Callable[[LiveEvent], None]


class LiveEventBus:
    """Synchronous typed pub/sub keyed by LiveEventKind"""

    def __init__(self):
        self._handlers: Dict[LiveEventKind, List[LiveEventHandler]] = defaultdict(list)

    def subscribe(self, kind: LiveEventKind, handler: LiveEventHandler) -> Callable[[], None]:
        """Register ``handler`` for ``kind``; returns an unsubscribe callable."""
        if not isinstance(kind, LiveEventKind):
            raise TypeError(f"Unknown live event kind: {kind!r}")
        self._handlers[kind].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(kind, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, event: LiveEvent) -> int:
        """
        Deliver ``event`` to every handler of its kind.

        Handler failures are logged and do not stop delivery.

        Returns:
            Number of handlers that ran without raising
        """
        delivered = 0
        for handler in list(self._handlers.get(event.kind, [])):
            try:
                handler(event)
                delivered += 1
            except Exception as e:
                logger.error(f"Live event handler failed for {event.kind.value}: {e}", exc_info=True)
        return delivered

    def clear(self) -> None:
        self._handlers.clear()
