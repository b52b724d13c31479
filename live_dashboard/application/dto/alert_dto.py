from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ._coercion import coerce_lower, coerce_str
from ...domain.models.alert import Alert, AlertSeverity, AlertStatus
from ...utils.datetime_utils import parse_timestamp


# Detection alert levels used by the backend mapped onto alert severities
_SEVERITY_SYNONYMS = {
    "suspicious": AlertSeverity.HIGH,
    "warning": AlertSeverity.MEDIUM,
    "info": AlertSeverity.LOW,
}


class AlertPayload(BaseModel):
    """Alert as sent by the backend"""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "alert_id", "alertId"), min_length=1)
    severity: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("severity", "alert_level", "level")
    )
    status: Optional[str] = None
    acknowledged: Optional[bool] = None
    resolved: Optional[bool] = None
    camera_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("cameraId", "camera_id"))
    message: Optional[str] = Field(default=None, validation_alias=AliasChoices("message", "description"))
    created_at: Any = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at", "timestamp")
    )
    title: Optional[str] = None
    alert_type: Optional[str] = Field(default=None, validation_alias=AliasChoices("alert_type", "alertType", "type"))

    @field_validator("id", "camera_id", mode="before")
    @classmethod
    def coerce_identifiers(cls, value: Any) -> Any:
        return coerce_str(value)

    @field_validator("severity", "status", mode="before")
    @classmethod
    def lower_enums(cls, value: Any) -> Any:
        return coerce_lower(value)

    def resolve_severity(self) -> AlertSeverity:
        if self.severity:
            try:
                return AlertSeverity(self.severity)
            except ValueError:
                return _SEVERITY_SYNONYMS.get(self.severity, AlertSeverity.MEDIUM)
        return AlertSeverity.MEDIUM

    def resolve_status(self) -> AlertStatus:
        if self.status:
            try:
                return AlertStatus(self.status)
            except ValueError:
                pass
        if self.resolved:
            return AlertStatus.RESOLVED
        if self.acknowledged:
            return AlertStatus.ACKNOWLEDGED
        return AlertStatus.NEW

    def to_domain(self) -> Alert:
        return Alert(
            id=self.id,
            severity=self.resolve_severity(),
            status=self.resolve_status(),
            camera_id=self.camera_id,
            message=self.message or self.title or "",
            created_at=parse_timestamp(self.created_at),
            title=self.title,
            alert_type=self.alert_type,
        )
