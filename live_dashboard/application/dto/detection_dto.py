from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ._coercion import coerce_optional_float, coerce_str
from ...domain.models.detection import BoundingBox, Detection
from ...utils.datetime_utils import parse_timestamp


class DetectionPayload(BaseModel):
    """Detection as sent by the backend"""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "detection_id", "detectionId"), min_length=1)
    camera_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("cameraId", "camera_id"))
    timestamp: Any = Field(default=None, validation_alias=AliasChoices("timestamp", "created_at", "createdAt"))
    detection_class: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("class", "class_name", "detection_class", "type")
    )
    confidence: Optional[float] = None
    bounding_box: Any = Field(default=None, validation_alias=AliasChoices("boundingBox", "bounding_box", "bbox"))
    alert_level: Optional[str] = None
    camera_name: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("id", "camera_id", mode="before")
    @classmethod
    def coerce_identifiers(cls, value: Any) -> Any:
        return coerce_str(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def optional_confidence(cls, value: Any) -> Any:
        return coerce_optional_float(value)

    def resolve_bounding_box(self) -> Optional[BoundingBox]:
        box = self.bounding_box
        if isinstance(box, dict):
            return BoundingBox(
                x=float(box.get("x", 0.0)),
                y=float(box.get("y", 0.0)),
                width=float(box.get("width", box.get("w", 0.0))),
                height=float(box.get("height", box.get("h", 0.0))),
            )
        if isinstance(box, (list, tuple)) and len(box) == 4:
            x, y, width, height = (float(v) for v in box)
            return BoundingBox(x=x, y=y, width=width, height=height)
        return None

    def to_domain(self) -> Detection:
        return Detection(
            id=self.id,
            camera_id=self.camera_id,
            timestamp=parse_timestamp(self.timestamp),
            detection_class=self.detection_class or "unknown",
            confidence=self.confidence or 0.0,
            bounding_box=self.resolve_bounding_box(),
            alert_level=self.alert_level,
            camera_name=self.camera_name,
            metadata=dict(self.metadata or {}),
        )
