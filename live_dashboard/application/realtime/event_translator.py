"""
Translation of live events into store actions.

Push events and poll/load responses must end up as the same actions, so
this module only wires LiveEvent kinds to the shared payload parsers.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..dto.payload_parsers import (
    parse_alert,
    parse_alerts,
    parse_camera,
    parse_cameras,
    parse_detection,
    parse_detections,
    parse_performance,
    parse_summary,
)
from ..state import actions as a
from .events import LiveEvent, LiveEventKind
from ...core.exceptions import PayloadError
from ...domain.models.camera import CameraState
from ...domain.models.dashboard_state import DashboardState

logger = logging.getLogger(__name__)

Translator = Callable[[Any, Optional[DashboardState]], List[a.Action]]


def _summary(data: Any, state: Optional[DashboardState]) -> List[a.Action]:
    return [a.SummaryReceived(parse_summary(data))]


def _camera_status(data: Any, state: Optional[DashboardState]) -> List[a.Action]:
    # Usually the full camera list, occasionally a single camera
    if isinstance(data, Mapping) and not any(
        isinstance(data.get(k), list) for k in ("data", "items", "results", "cameras", "camera_status")
    ):
        return [a.CameraStatusUpdated(parse_camera(data))]
    return [a.CameraStatusReceived(parse_cameras(data))]


def _detections(data: Any, state: Optional[DashboardState]) -> List[a.Action]:
    return [a.DetectionsReceived(parse_detections(data))]


def _alerts(data: Any, state: Optional[DashboardState]) -> List[a.Action]:
    return [a.AlertsReceived(parse_alerts(data))]


def _performance(data: Any, state: Optional[DashboardState]) -> List[a.Action]:
    return [a.PerformanceReceived(parse_performance(data))]


def _new_detection(data: Any, state: Optional[DashboardState]) -> List[a.Action]:
    return [a.DetectionAppended(parse_detection(data))]


def _new_alert(data: Any, state: Optional[DashboardState]) -> List[a.Action]:
    return [a.AlertAppended(parse_alert(data))]


def _camera_presence(camera_state: CameraState) -> Translator:
    def translate(data: Any, state: Optional[DashboardState]) -> List[a.Action]:
        if isinstance(data, Mapping):
            camera_id = data.get("camera_id") or data.get("cameraId") or data.get("id")
        else:
            camera_id = data
        known = state.camera(str(camera_id)) if state is not None and camera_id else None
        if known is not None:
            camera = replace(known, status=camera_state)
        else:
            camera = replace(parse_camera(data if isinstance(data, Mapping) else {"id": data}), status=camera_state)
        return [a.CameraStatusUpdated(camera)]
    return translate


def _system_health(data: Any, state: Optional[DashboardState]) -> List[a.Action]:
    if not isinstance(data, Mapping):
        raise PayloadError(
            f"Expected a system health object, got {type(data).__name__}", kind="system health"
        )
    return [a.SystemHealthReceived(dict(data))]


_TRANSLATORS: Dict[LiveEventKind, Translator] = {
    LiveEventKind.DASHBOARD_SUMMARY: _summary,
    LiveEventKind.CAMERA_STATUS_UPDATE: _camera_status,
    LiveEventKind.RECENT_DETECTIONS: _detections,
    LiveEventKind.ACTIVE_ALERTS: _alerts,
    LiveEventKind.PERFORMANCE_UPDATE: _performance,
    LiveEventKind.NEW_DETECTION: _new_detection,
    LiveEventKind.NEW_ALERT: _new_alert,
    LiveEventKind.CAMERA_ONLINE: _camera_presence(CameraState.ONLINE),
    LiveEventKind.CAMERA_OFFLINE: _camera_presence(CameraState.OFFLINE),
    LiveEventKind.SYSTEM_HEALTH_UPDATE: _system_health,
}


def translate_event(event: LiveEvent, state: Optional[DashboardState] = None) -> List[a.Action]:
    """
    Map a data event to the actions that apply it.

    ``state`` is the current snapshot; it is only read, to keep known
    camera details when a bare online/offline notification arrives.

    Malformed payloads are logged and produce no actions.
    """
    translator = _TRANSLATORS.get(event.kind)
    if translator is None:
        return []
    try:
        return translator(event.data, state)
    except PayloadError as e:
        logger.warning(f"Dropping malformed {event.kind.value} event: {e.message}")
        return []
