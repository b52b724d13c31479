# Standard library imports
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PerformanceSummary:
    """Latest-wins performance snapshot; no history is kept."""
    average_fps: float = 0.0
    average_latency_ms: Optional[float] = None
    gpu_utilization: Optional[float] = None
    availability: Optional[float] = None
    active_cameras: int = 0
    total_cameras: int = 0
    total_detections: int = 0
    average_confidence: float = 0.0
    system_uptime: float = 0.0
