from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ._coercion import coerce_lower, coerce_optional_float, coerce_str
from ...domain.models.camera import CameraState, CameraStatus
from ...utils.datetime_utils import parse_timestamp


_STATE_SYNONYMS = {
    "active": CameraState.ONLINE,
    "running": CameraState.ONLINE,
    "streaming": CameraState.ONLINE,
    "inactive": CameraState.OFFLINE,
    "stopped": CameraState.OFFLINE,
    "disconnected": CameraState.OFFLINE,
    "failed": CameraState.ERROR,
}


class CameraStatusPayload(BaseModel):
    """Camera status as sent by the backend (camelCase or snake_case keys)"""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "camera_id", "cameraId"), min_length=1)
    name: str = ""
    status: Optional[str] = None
    url: str = Field(default="", validation_alias=AliasChoices("url", "stream_url", "rtsp_url"))
    location: str = ""
    last_seen: Any = Field(
        default=None, validation_alias=AliasChoices("lastSeen", "last_seen", "last_seen_at")
    )
    fps: Optional[float] = None
    resolution: str = ""
    is_active: Optional[bool] = Field(default=None, validation_alias=AliasChoices("is_active", "isActive"))

    @field_validator("id", mode="before")
    @classmethod
    def coerce_identifier(cls, value: Any) -> Any:
        return coerce_str(value)

    @field_validator("status", mode="before")
    @classmethod
    def lower_status(cls, value: Any) -> Any:
        return coerce_lower(value)

    @field_validator("fps", mode="before")
    @classmethod
    def optional_fps(cls, value: Any) -> Any:
        return coerce_optional_float(value)

    @field_validator("name", "url", "location", "resolution", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def resolve_state(self) -> CameraState:
        if self.status:
            try:
                return CameraState(self.status)
            except ValueError:
                if self.status in _STATE_SYNONYMS:
                    return _STATE_SYNONYMS[self.status]
        if self.is_active is not None:
            return CameraState.ONLINE if self.is_active else CameraState.OFFLINE
        return CameraState.OFFLINE

    def to_domain(self) -> CameraStatus:
        return CameraStatus(
            id=self.id,
            name=self.name or self.id,
            status=self.resolve_state(),
            url=self.url,
            location=self.location,
            last_seen_at=parse_timestamp(self.last_seen),
            fps=self.fps or 0.0,
            resolution=self.resolution,
        )
