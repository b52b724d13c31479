from .alert_dto import AlertPayload
from .analytics_dto import BehaviorPayload, LogEntryPayload, PerformancePayload
from .camera_dto import CameraStatusPayload
from .detection_dto import DetectionPayload
from .summary_dto import DashboardSummaryPayload
from .payload_parsers import (
    parse_alert,
    parse_alerts,
    parse_behaviors,
    parse_camera,
    parse_cameras,
    parse_detection,
    parse_detections,
    parse_logs,
    parse_performance,
    parse_summary,
    unwrap_list,
)

__all__ = [
    "AlertPayload",
    "BehaviorPayload",
    "LogEntryPayload",
    "PerformancePayload",
    "CameraStatusPayload",
    "DetectionPayload",
    "DashboardSummaryPayload",
    "parse_alert",
    "parse_alerts",
    "parse_behaviors",
    "parse_camera",
    "parse_cameras",
    "parse_detection",
    "parse_detections",
    "parse_logs",
    "parse_performance",
    "parse_summary",
    "unwrap_list",
]
