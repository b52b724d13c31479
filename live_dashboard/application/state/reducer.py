"""
Pure reducer for DashboardState.

``reduce(state, action)`` never mutates its inputs and never performs I/O.
Handlers return the *same* state object when an action is a no-op so the
store can tell "nothing changed" apart from a real transition; any real
transition bumps ``DashboardState.version`` by one.
"""
import functools
import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Tuple, Type

from . import actions as a
from ...domain.models.alert import Alert, AlertStatus
from ...domain.models.camera import CameraStatus
from ...domain.models.dashboard_state import DashboardState
from ...domain.models.detection import Detection

logger = logging.getLogger(__name__)

Handler = Callable[[DashboardState, a.Action], DashboardState]

_HANDLERS: Dict[Type[a.Action], Handler] = {}


def _handles(action_type: Type[a.Action]) -> Callable[[Handler], Handler]:
    def register(handler: Handler) -> Handler:
        _HANDLERS[action_type] = handler
        return handler
    return register


# -----------------------------------------------------------------------------
# Collection helpers
# -----------------------------------------------------------------------------


def merge_alert_lifecycle(current: Iterable[Alert], incoming: Iterable[Alert]) -> Tuple[Alert, ...]:
    """
    Replace the alert collection with ``incoming`` without letting any
    known alert move backwards in its lifecycle.

    An alert that is acknowledged (or resolved) locally keeps that status
    when a stale snapshot still reports it as new/active.
    """
    known: Dict[str, AlertStatus] = {}
    for alert in current:
        status = known.get(alert.id)
        if status is None or alert.status.rank > status.rank:
            known[alert.id] = alert.status

    merged = []
    for alert in incoming:
        status = known.get(alert.id)
        merged.append(alert.advanced_to(status) if status is not None else alert)
    return tuple(merged)


def _bounded_detections(detections: Iterable[Detection], capacity: int) -> Tuple[Detection, ...]:
    seen = set()
    unique = []
    for detection in detections:
        if detection.id in seen:
            continue
        seen.add(detection.id)
        unique.append(detection)
        if len(unique) == capacity:
            break
    return tuple(unique)


def _camera_list_changes(state: DashboardState, cameras: Tuple[CameraStatus, ...]) -> dict:
    changes = {"cameras": cameras}
    # Sessions of cameras that no longer exist are dropped
    known = {c.id for c in cameras}
    sessions = {k: v for k, v in state.peer_sessions.items() if k in known}
    if len(sessions) != len(state.peer_sessions):
        changes["peer_sessions"] = MappingProxyType(sessions)
    return changes


# -----------------------------------------------------------------------------
# Connectivity and request lifecycle
# -----------------------------------------------------------------------------


@_handles(a.ConnectionChanged)
def _connection_changed(state: DashboardState, action: a.ConnectionChanged) -> DashboardState:
    if state.connection == action.status:
        return state
    return replace(state, connection=action.status)


@_handles(a.LoadingChanged)
def _loading_changed(state: DashboardState, action: a.LoadingChanged) -> DashboardState:
    if state.loading == action.loading:
        return state
    return replace(state, loading=action.loading)


@_handles(a.ErrorOccurred)
def _error_occurred(state: DashboardState, action: a.ErrorOccurred) -> DashboardState:
    if state.error == action.message and not state.loading:
        return state
    return replace(state, error=action.message, loading=False)


@_handles(a.ErrorCleared)
def _error_cleared(state: DashboardState, action: a.ErrorCleared) -> DashboardState:
    if state.error is None:
        return state
    return replace(state, error=None)


# -----------------------------------------------------------------------------
# Snapshots and collections
# -----------------------------------------------------------------------------


@_handles(a.SummaryReceived)
def _summary_received(state: DashboardState, action: a.SummaryReceived) -> DashboardState:
    summary = action.summary
    changes = {
        "summary": summary,
        "last_updated": action.received_at,
        "loading": False,
        "error": None,
    }
    # Absent collections leave previously known data untouched
    if summary.cameras is not None:
        changes.update(_camera_list_changes(state, summary.cameras))
    if summary.alerts is not None:
        changes["alerts"] = merge_alert_lifecycle(state.alerts, summary.alerts)
    if summary.performance is not None:
        changes["performance"] = summary.performance
    if summary.behaviors is not None:
        changes["behaviors"] = summary.behaviors
    return replace(state, **changes)


@_handles(a.CameraStatusReceived)
def _camera_status_received(state: DashboardState, action: a.CameraStatusReceived) -> DashboardState:
    return replace(state, **_camera_list_changes(state, tuple(action.cameras)))


@_handles(a.CameraStatusUpdated)
def _camera_status_updated(state: DashboardState, action: a.CameraStatusUpdated) -> DashboardState:
    camera = action.camera
    if any(c.id == camera.id for c in state.cameras):
        cameras = tuple(camera if c.id == camera.id else c for c in state.cameras)
    else:
        cameras = state.cameras + (camera,)
    return replace(state, cameras=cameras)


@_handles(a.CameraRemoved)
def _camera_removed(state: DashboardState, action: a.CameraRemoved) -> DashboardState:
    cameras = tuple(c for c in state.cameras if c.id != action.camera_id)
    has_session = action.camera_id in state.peer_sessions
    if len(cameras) == len(state.cameras) and not has_session:
        return state

    changes = {"cameras": cameras}
    if has_session:
        sessions = {k: v for k, v in state.peer_sessions.items() if k != action.camera_id}
        changes["peer_sessions"] = MappingProxyType(sessions)
    if state.selection.camera == action.camera_id:
        changes["selection"] = replace(state.selection, camera=None)
    return replace(state, **changes)


@_handles(a.DetectionsReceived)
def _detections_received(state: DashboardState, action: a.DetectionsReceived) -> DashboardState:
    return replace(state, detections=_bounded_detections(action.detections, state.detection_capacity))


@_handles(a.DetectionAppended)
def _detection_appended(state: DashboardState, action: a.DetectionAppended) -> DashboardState:
    detection = action.detection
    if any(d.id == detection.id for d in state.detections):
        return state
    detections = (detection,) + state.detections[: state.detection_capacity - 1]
    return replace(state, detections=detections)


@_handles(a.AlertsReceived)
def _alerts_received(state: DashboardState, action: a.AlertsReceived) -> DashboardState:
    return replace(state, alerts=merge_alert_lifecycle(state.alerts, action.alerts))


@_handles(a.AlertAppended)
def _alert_appended(state: DashboardState, action: a.AlertAppended) -> DashboardState:
    return replace(state, alerts=(action.alert,) + state.alerts)


@_handles(a.AlertAcknowledged)
def _alert_acknowledged(state: DashboardState, action: a.AlertAcknowledged) -> DashboardState:
    changed = False
    alerts = []
    for alert in state.alerts:
        if alert.id == action.alert_id:
            updated = alert.advanced_to(AlertStatus.ACKNOWLEDGED)
            changed = changed or updated is not alert
            alerts.append(updated)
        else:
            alerts.append(alert)
    if not changed:
        return state
    return replace(state, alerts=tuple(alerts))


@_handles(a.PerformanceReceived)
def _performance_received(state: DashboardState, action: a.PerformanceReceived) -> DashboardState:
    return replace(state, performance=action.performance)


@_handles(a.BehaviorsReceived)
def _behaviors_received(state: DashboardState, action: a.BehaviorsReceived) -> DashboardState:
    return replace(state, behaviors=tuple(action.behaviors))


@_handles(a.LogsReceived)
def _logs_received(state: DashboardState, action: a.LogsReceived) -> DashboardState:
    return replace(state, logs=tuple(action.logs))


@_handles(a.SystemHealthReceived)
def _system_health_received(state: DashboardState, action: a.SystemHealthReceived) -> DashboardState:
    return replace(state, system_health=MappingProxyType(dict(action.health)))


# -----------------------------------------------------------------------------
# Peer video sessions
# -----------------------------------------------------------------------------


@_handles(a.PeerSessionAdded)
def _peer_session_added(state: DashboardState, action: a.PeerSessionAdded) -> DashboardState:
    if state.peer_sessions.get(action.camera_id) == action.session_id:
        return state
    sessions = dict(state.peer_sessions)
    sessions[action.camera_id] = action.session_id
    return replace(state, peer_sessions=MappingProxyType(sessions))


@_handles(a.PeerSessionRemoved)
def _peer_session_removed(state: DashboardState, action: a.PeerSessionRemoved) -> DashboardState:
    sessions = {
        camera_id: session_id
        for camera_id, session_id in state.peer_sessions.items()
        if camera_id != action.camera_id and session_id != action.session_id
    }
    if len(sessions) == len(state.peer_sessions):
        return state
    return replace(state, peer_sessions=MappingProxyType(sessions))


# -----------------------------------------------------------------------------
# Client-side settings
# -----------------------------------------------------------------------------


@_handles(a.FiltersUpdated)
def _filters_updated(state: DashboardState, action: a.FiltersUpdated) -> DashboardState:
    filters = state.filters.merged(action.changes)
    if filters == state.filters:
        return state
    return replace(state, filters=filters)


@_handles(a.CameraSelected)
def _camera_selected(state: DashboardState, action: a.CameraSelected) -> DashboardState:
    if state.selection.camera == action.camera_id:
        return state
    return replace(state, selection=replace(state.selection, camera=action.camera_id))


@_handles(a.AlertSelected)
def _alert_selected(state: DashboardState, action: a.AlertSelected) -> DashboardState:
    if state.selection.alert == action.alert_id:
        return state
    return replace(state, selection=replace(state.selection, alert=action.alert_id))


@_handles(a.AutoRefreshChanged)
def _auto_refresh_changed(state: DashboardState, action: a.AutoRefreshChanged) -> DashboardState:
    if state.auto_refresh == action.enabled:
        return state
    return replace(state, auto_refresh=action.enabled)


@_handles(a.RefreshIntervalChanged)
def _refresh_interval_changed(state: DashboardState, action: a.RefreshIntervalChanged) -> DashboardState:
    if action.interval_ms <= 0:
        raise ValueError(f"Refresh interval must be positive, got {action.interval_ms}")
    if state.refresh_interval_ms == action.interval_ms:
        return state
    return replace(state, refresh_interval_ms=action.interval_ms)


# -----------------------------------------------------------------------------
# Entry points
# -----------------------------------------------------------------------------


def reduce(state: DashboardState, action: a.Action) -> DashboardState:
    """
    Apply ``action`` to ``state`` and return the resulting state.

    Unknown actions leave the state unchanged. Handler errors propagate;
    the store decides how to contain them.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.warning(f"No reducer registered for action {type(action).__name__}; ignoring")
        return state

    new_state = handler(state, action)
    if new_state is state:
        return state
    return replace(new_state, version=state.version + 1)


def replay(initial: DashboardState, actions: Iterable[a.Action]) -> DashboardState:
    """Fold a recorded action sequence over ``initial``."""
    return functools.reduce(reduce, actions, initial)
