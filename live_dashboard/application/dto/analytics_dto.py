from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ._coercion import coerce_optional_float, coerce_str
from ...domain.models.behavior import BehaviorEvent
from ...domain.models.log_entry import LogEntry
from ...domain.models.performance import PerformanceSummary
from ...utils.datetime_utils import parse_timestamp


class PerformancePayload(BaseModel):
    """Performance summary; the backend mixes camelCase and avg_* keys"""
    model_config = ConfigDict(extra="ignore")

    average_fps: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("averageFPS", "avg_fps", "average_fps", "fps")
    )
    average_latency_ms: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("avg_latency", "averageLatency", "latency")
    )
    gpu_utilization: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("avg_gpu_utilization", "gpuUtilization", "gpu_utilization")
    )
    availability: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("avg_availability", "availability")
    )
    active_cameras: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("activeCameras", "active_cameras")
    )
    total_cameras: Optional[int] = Field(default=None, validation_alias=AliasChoices("totalCameras", "total_cameras"))
    total_detections: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("totalDetections", "total_detections")
    )
    average_confidence: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("averageConfidence", "average_confidence", "avg_confidence")
    )
    system_uptime: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("systemUptime", "system_uptime", "uptime")
    )

    @field_validator(
        "average_fps",
        "average_latency_ms",
        "gpu_utilization",
        "availability",
        "average_confidence",
        "system_uptime",
        mode="before",
    )
    @classmethod
    def optional_numbers(cls, value: Any) -> Any:
        return coerce_optional_float(value)

    def to_domain(self) -> PerformanceSummary:
        return PerformanceSummary(
            average_fps=self.average_fps or 0.0,
            average_latency_ms=self.average_latency_ms,
            gpu_utilization=self.gpu_utilization,
            availability=self.availability,
            active_cameras=self.active_cameras or 0,
            total_cameras=self.total_cameras or 0,
            total_detections=self.total_detections or 0,
            average_confidence=self.average_confidence or 0.0,
            system_uptime=self.system_uptime or 0.0,
        )


class BehaviorPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    suspicious_activities: int = Field(
        default=0, validation_alias=AliasChoices("suspiciousActivities", "suspicious_activities")
    )
    normal_behavior: int = Field(default=0, validation_alias=AliasChoices("normalBehavior", "normal_behavior"))
    alerts_generated: int = Field(default=0, validation_alias=AliasChoices("alertsGenerated", "alerts_generated"))
    false_positives: int = Field(default=0, validation_alias=AliasChoices("falsePositives", "false_positives"))

    def to_domain(self) -> BehaviorEvent:
        return BehaviorEvent(
            suspicious_activities=self.suspicious_activities,
            normal_behavior=self.normal_behavior,
            alerts_generated=self.alerts_generated,
            false_positives=self.false_positives,
        )


class LogEntryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    level: str = "info"
    message: str = ""
    component: str = ""
    timestamp: Any = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_identifier(cls, value: Any) -> Any:
        return coerce_str(value)

    def to_domain(self) -> LogEntry:
        return LogEntry(
            id=self.id,
            level=self.level.lower(),
            message=self.message,
            component=self.component,
            timestamp=parse_timestamp(self.timestamp),
        )
