"""
Payload normalization.

Turns raw JSON payloads (from gateway reads, poll responses and live push
events) into domain models. Collections are validated item by item: a
malformed item is logged and skipped, while a payload that is not a
collection at all raises PayloadError.
"""
import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .alert_dto import AlertPayload
from .analytics_dto import BehaviorPayload, LogEntryPayload, PerformancePayload
from .camera_dto import CameraStatusPayload
from .detection_dto import DetectionPayload
from .summary_dto import DashboardSummaryPayload
from ...core.exceptions import PayloadError
from ...domain.models.alert import Alert
from ...domain.models.behavior import BehaviorEvent
from ...domain.models.camera import CameraStatus
from ...domain.models.detection import Detection
from ...domain.models.log_entry import LogEntry
from ...domain.models.performance import PerformanceSummary
from ...domain.models.summary import DashboardSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Keys under which list endpoints wrap their items
_LIST_KEYS = ("data", "items", "results")


def unwrap_list(payload: Any, kind: str, *extra_keys: str) -> list:
    """
    Return the list carried by ``payload``.

    Accepts a bare list or a mapping that wraps it under "data", "items",
    "results" or one of ``extra_keys``.

    Raises:
        PayloadError: If no list can be found
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in (*_LIST_KEYS, *extra_keys):
            value = payload.get(key)
            if isinstance(value, list):
                return value
    raise PayloadError(f"Expected a list of {kind}, got {type(payload).__name__}", kind=kind)


def _parse_item(model: Type[BaseModel], item: Any, kind: str) -> Any:
    """
    Validate one item and convert it to its domain model.

    Raises:
        PayloadError: If the item is not a valid ``kind``
    """
    if not isinstance(item, Mapping):
        raise PayloadError(f"Expected a {kind} object, got {type(item).__name__}", kind=kind)
    try:
        return model.model_validate(item).to_domain()
    except (ValidationError, ValueError, TypeError) as e:
        raise PayloadError(f"Invalid {kind} payload: {e}", kind=kind) from e


def _parse_items(model: Type[BaseModel], items: Iterable[Any], kind: str) -> Tuple[Any, ...]:
    parsed = []
    for item in items:
        try:
            parsed.append(_parse_item(model, item, kind))
        except PayloadError as e:
            logger.warning(f"Dropping malformed {kind}: {e.message}")
    return tuple(parsed)


def _dedupe_by_id(items: Tuple[T, ...], key: Callable[[T], str]) -> Tuple[T, ...]:
    seen = set()
    unique = []
    for item in items:
        item_id = key(item)
        if item_id in seen:
            continue
        seen.add(item_id)
        unique.append(item)
    return tuple(unique)


# -----------------------------------------------------------------------------
# Single entities
# -----------------------------------------------------------------------------


def parse_camera(payload: Any) -> CameraStatus:
    return _parse_item(CameraStatusPayload, payload, "camera")


def parse_detection(payload: Any) -> Detection:
    return _parse_item(DetectionPayload, payload, "detection")


def parse_alert(payload: Any) -> Alert:
    return _parse_item(AlertPayload, payload, "alert")


def parse_performance(payload: Any) -> PerformanceSummary:
    if isinstance(payload, Mapping) and isinstance(payload.get("data"), Mapping):
        payload = payload["data"]
    return _parse_item(PerformancePayload, payload, "performance summary")


# -----------------------------------------------------------------------------
# Collections
# -----------------------------------------------------------------------------


def parse_cameras(payload: Any) -> Tuple[CameraStatus, ...]:
    """Parse a camera list; duplicate ids keep their first occurrence."""
    items = unwrap_list(payload, "cameras", "cameras", "camera_status")
    return _dedupe_by_id(_parse_items(CameraStatusPayload, items, "camera"), lambda c: c.id)


def parse_detections(payload: Any) -> Tuple[Detection, ...]:
    items = unwrap_list(payload, "detections", "detections")
    return _dedupe_by_id(_parse_items(DetectionPayload, items, "detection"), lambda d: d.id)


def parse_alerts(payload: Any) -> Tuple[Alert, ...]:
    items = unwrap_list(payload, "alerts", "alerts", "active_alerts")
    return _parse_items(AlertPayload, items, "alert")


def parse_behaviors(payload: Any) -> Tuple[BehaviorEvent, ...]:
    # The behavior endpoint returns a single aggregate object
    if isinstance(payload, Mapping) and not any(
        isinstance(payload.get(k), list) for k in (*_LIST_KEYS, "behaviors")
    ):
        payload = [payload]
    items = unwrap_list(payload, "behaviors", "behaviors")
    return _parse_items(BehaviorPayload, items, "behavior")


def parse_logs(payload: Any) -> Tuple[LogEntry, ...]:
    items = unwrap_list(payload, "logs", "logs")
    return _parse_items(LogEntryPayload, items, "log entry")


# -----------------------------------------------------------------------------
# Summary
# -----------------------------------------------------------------------------


def _optional_collection(raw: Any, parser: Callable[[Any], T], kind: str) -> Optional[T]:
    """Parse an embedded collection; absent or malformed collections become None."""
    if raw is None:
        return None
    try:
        return parser(raw)
    except PayloadError as e:
        logger.warning(f"Ignoring malformed {kind} in dashboard summary: {e.message}")
        return None


def parse_summary(payload: Any) -> DashboardSummary:
    """
    Parse a dashboard summary.

    Raises:
        PayloadError: If the payload is not a summary object
    """
    if not isinstance(payload, Mapping):
        raise PayloadError(
            f"Expected a dashboard summary object, got {type(payload).__name__}",
            kind="dashboard summary",
        )
    try:
        envelope = DashboardSummaryPayload.model_validate(payload)
    except ValidationError as e:
        raise PayloadError(f"Invalid dashboard summary payload: {e}", kind="dashboard summary") from e

    alerts = None
    alert_count = 0
    if isinstance(envelope.active_alerts, list):
        alerts = _optional_collection(envelope.active_alerts, parse_alerts, "alerts")
        alert_count = len(alerts or ())
    elif isinstance(envelope.active_alerts, (int, float)) and not isinstance(envelope.active_alerts, bool):
        alert_count = int(envelope.active_alerts)

    cameras = _optional_collection(envelope.camera_status, parse_cameras, "cameras")
    performance = _optional_collection(envelope.performance_summary, parse_performance, "performance")
    behaviors = _optional_collection(envelope.recent_behaviors, parse_behaviors, "behaviors")

    return DashboardSummary(
        active_cameras=envelope.active_cameras if envelope.active_cameras is not None else len(cameras or ()),
        total_detections=envelope.total_detections or 0,
        active_alert_count=alert_count,
        system_status=envelope.system_status or "healthy",
        uptime=envelope.uptime or 0.0,
        cameras=cameras,
        alerts=alerts,
        performance=performance,
        behaviors=behaviors,
    )
