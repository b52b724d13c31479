"""Constants for live channel wire messages"""


class MessageFields:
    """Envelope field names: {"type": ..., "data": ..., "timestamp": ...}"""
    TYPE = "type"
    DATA = "data"
    TIMESTAMP = "timestamp"
    DATA_TYPES = "data_types"
    FILTERS = "filters"


class ServerMessageTypes:
    """Message types pushed by the server"""
    DASHBOARD_SUMMARY = "dashboard_summary"
    CAMERA_STATUS_UPDATE = "camera_status_update"
    RECENT_DETECTIONS = "recent_detections"
    ACTIVE_ALERTS = "active_alerts"
    PERFORMANCE_UPDATE = "performance_update"
    NEW_DETECTION = "new_detection"
    NEW_ALERT = "new_alert"
    CAMERA_ONLINE = "camera_online"
    CAMERA_OFFLINE = "camera_offline"
    SYSTEM_HEALTH_UPDATE = "system_health_update"

    # Control frames (consumed by the connection manager)
    PONG = "pong"
    HEARTBEAT = "heartbeat"
    SUBSCRIPTION_CONFIRMED = "subscription_confirmed"


class ClientMessageTypes:
    """Message types sent by the client"""
    SUBSCRIBE = "subscribe"
    GET_SUMMARY = "get_summary"
    GET_DETECTIONS = "get_detections"
    GET_ALERTS = "get_alerts"
    PING = "ping"
