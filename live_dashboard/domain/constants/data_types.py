"""Categories of server-pushed data a client can subscribe to"""

from enum import Enum


class SubscriptionDataType(str, Enum):
    CAMERA_STATUS = "camera_status"
    DETECTIONS = "detections"
    ALERTS = "alerts"
    PERFORMANCE = "performance"
    BEHAVIORS = "behaviors"
    SYSTEM_HEALTH = "system_health"


ALL_DATA_TYPES = tuple(SubscriptionDataType)
