from .alert import Alert, AlertSeverity, AlertStatus
from .behavior import BehaviorEvent
from .camera import CameraState, CameraStatus
from .dashboard_state import (
    ConnectionStatus,
    DashboardState,
    Selection,
    initial_dashboard_state,
)
from .detection import BoundingBox, Detection
from .filters import FilterSet
from .log_entry import LogEntry
from .performance import PerformanceSummary
from .summary import DashboardSummary

__all__ = [
    "Alert",
    "AlertSeverity",
    "AlertStatus",
    "BehaviorEvent",
    "CameraState",
    "CameraStatus",
    "ConnectionStatus",
    "DashboardState",
    "Selection",
    "initial_dashboard_state",
    "BoundingBox",
    "Detection",
    "FilterSet",
    "LogEntry",
    "PerformanceSummary",
    "DashboardSummary",
]
