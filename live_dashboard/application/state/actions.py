"""
Store actions.

Every change to DashboardState is described by one of these immutable
action objects. Live push events, poll responses, snapshot loads and
command confirmations all normalize into the same action types.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple

from ...domain.models.alert import Alert
from ...domain.models.behavior import BehaviorEvent
from ...domain.models.camera import CameraStatus
from ...domain.models.dashboard_state import ConnectionStatus
from ...domain.models.detection import Detection
from ...domain.models.log_entry import LogEntry
from ...domain.models.performance import PerformanceSummary
from ...domain.models.summary import DashboardSummary
from ...utils.datetime_utils import utc_now


@dataclass(frozen=True)
class Action:
    """Base class for all store actions"""

    @property
    def name(self) -> str:
        return type(self).__name__


# Connectivity and request lifecycle

@dataclass(frozen=True)
class ConnectionChanged(Action):
    status: ConnectionStatus


@dataclass(frozen=True)
class LoadingChanged(Action):
    loading: bool


@dataclass(frozen=True)
class ErrorOccurred(Action):
    message: str


@dataclass(frozen=True)
class ErrorCleared(Action):
    pass


# Snapshots and collections

@dataclass(frozen=True)
class SummaryReceived(Action):
    summary: DashboardSummary
    received_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class CameraStatusReceived(Action):
    cameras: Tuple[CameraStatus, ...]


@dataclass(frozen=True)
class CameraStatusUpdated(Action):
    camera: CameraStatus


@dataclass(frozen=True)
class CameraRemoved(Action):
    camera_id: str


@dataclass(frozen=True)
class DetectionsReceived(Action):
    detections: Tuple[Detection, ...]


@dataclass(frozen=True)
class DetectionAppended(Action):
    detection: Detection


@dataclass(frozen=True)
class AlertsReceived(Action):
    alerts: Tuple[Alert, ...]


@dataclass(frozen=True)
class AlertAppended(Action):
    alert: Alert


@dataclass(frozen=True)
class AlertAcknowledged(Action):
    alert_id: str


@dataclass(frozen=True)
class PerformanceReceived(Action):
    performance: PerformanceSummary


@dataclass(frozen=True)
class BehaviorsReceived(Action):
    behaviors: Tuple[BehaviorEvent, ...]


@dataclass(frozen=True)
class LogsReceived(Action):
    logs: Tuple[LogEntry, ...]


@dataclass(frozen=True)
class SystemHealthReceived(Action):
    health: Mapping[str, Any]


# Peer video sessions

@dataclass(frozen=True)
class PeerSessionAdded(Action):
    camera_id: str
    session_id: str


@dataclass(frozen=True)
class PeerSessionRemoved(Action):
    """Remove a session by camera id, by session id, or both."""
    camera_id: Optional[str] = None
    session_id: Optional[str] = None


# Client-side settings

@dataclass(frozen=True)
class FiltersUpdated(Action):
    changes: Mapping[str, Any]


@dataclass(frozen=True)
class CameraSelected(Action):
    camera_id: Optional[str]


@dataclass(frozen=True)
class AlertSelected(Action):
    alert_id: Optional[str]


@dataclass(frozen=True)
class AutoRefreshChanged(Action):
    enabled: bool


@dataclass(frozen=True)
class RefreshIntervalChanged(Action):
    interval_ms: int
