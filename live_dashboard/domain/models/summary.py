# Standard library imports
from dataclasses import dataclass
from typing import Optional, Tuple

# Local application imports
from .alert import Alert
from .behavior import BehaviorEvent
from .camera import CameraStatus
from .performance import PerformanceSummary


@dataclass(frozen=True)
class DashboardSummary:
    """
    Full point-in-time snapshot of the dashboard.

    Embedded collections are ``None`` when the server did not include them;
    an absent collection must never wipe previously known data.
    """
    active_cameras: int = 0
    total_detections: int = 0
    active_alert_count: int = 0
    system_status: str = "healthy"
    uptime: float = 0.0
    cameras: Optional[Tuple[CameraStatus, ...]] = None
    alerts: Optional[Tuple[Alert, ...]] = None
    performance: Optional[PerformanceSummary] = None
    behaviors: Optional[Tuple[BehaviorEvent, ...]] = None
