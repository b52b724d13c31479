# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

# Local application imports
from .alert import Alert
from .behavior import BehaviorEvent
from .camera import CameraStatus
from .detection import Detection
from .filters import FilterSet
from .log_entry import LogEntry
from .performance import PerformanceSummary
from .summary import DashboardSummary


DEFAULT_DETECTION_CAPACITY = 100
DEFAULT_REFRESH_INTERVAL_MS = 5000


class ConnectionStatus(str, Enum):
    """Live channel connection states."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERRORING = "erroring"


@dataclass(frozen=True)
class Selection:
    camera: Optional[str] = None
    alert: Optional[str] = None


def _empty_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class DashboardState:
    """
    Complete client-side view of the dashboard.

    Instances are immutable snapshots produced by the state store; a new
    instance is created for every applied action. ``version`` counts the
    state-changing actions applied so far.
    """
    connection: ConnectionStatus = ConnectionStatus.DISCONNECTED
    loading: bool = False
    error: Optional[str] = None
    last_updated: Optional[datetime] = None
    summary: Optional[DashboardSummary] = None
    cameras: Tuple[CameraStatus, ...] = ()
    detections: Tuple[Detection, ...] = ()
    alerts: Tuple[Alert, ...] = ()
    performance: Optional[PerformanceSummary] = None
    behaviors: Tuple[BehaviorEvent, ...] = ()
    logs: Tuple[LogEntry, ...] = ()
    system_health: Optional[Mapping[str, Any]] = None
    peer_sessions: Mapping[str, str] = field(default_factory=_empty_mapping)
    filters: FilterSet = field(default_factory=FilterSet)
    selection: Selection = field(default_factory=Selection)
    auto_refresh: bool = True
    refresh_interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS
    detection_capacity: int = DEFAULT_DETECTION_CAPACITY
    version: int = 0

    @property
    def is_connected(self) -> bool:
        return self.connection == ConnectionStatus.CONNECTED

    @property
    def is_stale(self) -> bool:
        """True when data is shown but the live channel is not delivering updates."""
        return not self.is_connected and self.last_updated is not None

    def camera(self, camera_id: str) -> Optional[CameraStatus]:
        return next((c for c in self.cameras if c.id == camera_id), None)

    def alert(self, alert_id: str) -> Optional[Alert]:
        return next((a for a in self.alerts if a.id == alert_id), None)


def initial_dashboard_state(
    auto_refresh: bool = True,
    refresh_interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS,
    detection_capacity: int = DEFAULT_DETECTION_CAPACITY,
) -> DashboardState:
    """Build the empty starting state for a new dashboard instance."""
    if refresh_interval_ms <= 0:
        raise ValueError("refresh_interval_ms must be positive")
    if detection_capacity <= 0:
        raise ValueError("detection_capacity must be positive")
    return DashboardState(
        auto_refresh=auto_refresh,
        refresh_interval_ms=refresh_interval_ms,
        detection_capacity=detection_capacity,
    )
