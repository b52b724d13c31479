# Standard library imports
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AlertStatus(str, Enum):
    """
    Alert lifecycle states.

    NEW and ACTIVE are equivalent "not yet handled" states; the lifecycle only
    moves forward: NEW/ACTIVE -> ACKNOWLEDGED -> RESOLVED.
    """
    NEW = "new"
    ACTIVE = "active"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK = {
    AlertStatus.NEW: 0,
    AlertStatus.ACTIVE: 0,
    AlertStatus.ACKNOWLEDGED: 1,
    AlertStatus.RESOLVED: 2,
}


@dataclass(frozen=True)
class Alert:
    """Domain model for an operator-facing alert"""
    id: str
    severity: AlertSeverity = AlertSeverity.MEDIUM
    status: AlertStatus = AlertStatus.NEW
    camera_id: Optional[str] = None
    message: str = ""
    created_at: Optional[datetime] = None
    title: Optional[str] = None
    alert_type: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Alert ID is required")

    def advanced_to(self, status: AlertStatus) -> "Alert":
        """
        Return this alert moved to ``status`` unless that would move the
        lifecycle backwards, in which case the alert is returned unchanged.
        """
        if status.rank < self.status.rank or status == self.status:
            return self
        return replace(self, status=status)
