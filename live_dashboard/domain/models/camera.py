# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class CameraState(str, Enum):
    """Operational state reported by the server for a camera."""
    ONLINE = "online"
    OFFLINE = "offline"
    MAINTENANCE = "maintenance"
    ERROR = "error"


@dataclass(frozen=True)
class CameraStatus:
    """
    Server-reported status of one camera.

    Identity is ``id``; collections of cameras are replaced by id and never
    hold two entries with the same id.
    """
    id: str
    name: str
    status: CameraState = CameraState.OFFLINE
    url: str = ""
    location: str = ""
    last_seen_at: Optional[datetime] = None
    fps: float = 0.0
    resolution: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Camera ID is required")
