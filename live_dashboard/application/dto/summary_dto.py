from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class DashboardSummaryPayload(BaseModel):
    """
    Dashboard summary envelope.

    Only the scalar counters are validated here; embedded collections are
    kept raw and normalized item by item so one bad camera or alert cannot
    invalidate the whole snapshot. ``active_alerts`` is either a count or a
    list of alerts depending on the backend version.
    """
    model_config = ConfigDict(extra="ignore")

    active_cameras: Optional[int] = Field(default=None, validation_alias=AliasChoices("activeCameras", "active_cameras"))
    total_detections: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("totalDetections", "total_detections")
    )
    active_alerts: Any = Field(default=None, validation_alias=AliasChoices("activeAlerts", "active_alerts", "alerts"))
    system_status: Optional[str] = Field(default=None, validation_alias=AliasChoices("systemStatus", "system_status"))
    uptime: Optional[float] = None
    camera_status: Any = Field(default=None, validation_alias=AliasChoices("cameraStatus", "camera_status", "cameras"))
    performance_summary: Any = Field(
        default=None, validation_alias=AliasChoices("performanceSummary", "performance_summary")
    )
    recent_behaviors: Any = Field(
        default=None, validation_alias=AliasChoices("recentBehaviors", "recent_behaviors")
    )
