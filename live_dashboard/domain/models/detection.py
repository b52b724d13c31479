# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class BoundingBox:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Detection:
    """
    A single detection produced by the vision pipeline.

    Detections are immutable once created and identified by ``id``.
    """
    id: str
    camera_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    detection_class: str = "unknown"
    confidence: float = 0.0
    bounding_box: Optional[BoundingBox] = None
    alert_level: Optional[str] = None
    camera_name: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Detection ID is required")
