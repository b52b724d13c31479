"""
Snapshot loaders.

Each loader performs one gateway read, normalizes the payload and
dispatches the matching action. Failures are logged and leave the state
untouched, except for the summary load which also reports an error flag.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from ..dto.payload_parsers import (
    parse_alerts,
    parse_behaviors,
    parse_cameras,
    parse_detections,
    parse_logs,
    parse_performance,
    parse_summary,
)
from ..state import actions as a
from ..state.store import DashboardStore
from ...core.exceptions import GatewayError, PayloadError
from ...domain.gateway.dashboard_gateway import DashboardGateway

logger = logging.getLogger(__name__)

SUMMARY_LOAD_FAILED_MESSAGE = "Failed to load dashboard summary"


class DashboardDataLoader:
    def __init__(
        self,
        gateway: DashboardGateway,
        store: DashboardStore,
        active_alert_limit: int = 50,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._active_alert_limit = active_alert_limit

    async def load_dashboard_summary(self) -> bool:
        """
        Fetch the full summary and apply it.

        Sets ``loading`` while the request is in flight; on failure records
        an error message and keeps previously shown data.
        """
        self._store.dispatch(a.LoadingChanged(True))
        try:
            payload = await self._gateway.get_dashboard_summary()
            summary = parse_summary(payload)
        except asyncio.CancelledError:
            # A cancelled poll must not leave the loading flag set
            self._store.dispatch(a.LoadingChanged(False))
            raise
        except (GatewayError, PayloadError) as e:
            logger.error(f"{SUMMARY_LOAD_FAILED_MESSAGE}: {e.message}")
            self._store.dispatch(a.ErrorOccurred(SUMMARY_LOAD_FAILED_MESSAGE))
            return False
        except Exception as e:
            logger.error(f"{SUMMARY_LOAD_FAILED_MESSAGE}: {e}", exc_info=True)
            self._store.dispatch(a.ErrorOccurred(SUMMARY_LOAD_FAILED_MESSAGE))
            return False

        self._store.dispatch(a.SummaryReceived(summary))
        return True

    async def load_camera_status(self) -> bool:
        return await self._load(
            "camera status",
            self._gateway.get_camera_status,
            lambda payload: a.CameraStatusReceived(parse_cameras(payload)),
        )

    async def load_recent_detections(self, filters: Optional[Mapping[str, Any]] = None) -> bool:
        return await self._load(
            "recent detections",
            lambda: self._gateway.get_recent_detections(self._with_time_range(filters)),
            lambda payload: a.DetectionsReceived(parse_detections(payload)),
        )

    async def load_active_alerts(self, limit: Optional[int] = None) -> bool:
        return await self._load(
            "active alerts",
            lambda: self._gateway.get_active_alerts(limit or self._active_alert_limit),
            lambda payload: a.AlertsReceived(parse_alerts(payload)),
        )

    async def load_performance_summary(self) -> bool:
        return await self._load(
            "performance summary",
            self._gateway.get_performance_summary,
            lambda payload: a.PerformanceReceived(parse_performance(payload)),
        )

    async def load_recent_behaviors(self, filters: Optional[Mapping[str, Any]] = None) -> bool:
        return await self._load(
            "recent behaviors",
            lambda: self._gateway.get_recent_behaviors(self._with_time_range(filters)),
            lambda payload: a.BehaviorsReceived(parse_behaviors(payload)),
        )

    async def load_system_logs(self, filters: Optional[Mapping[str, Any]] = None) -> bool:
        return await self._load(
            "system logs",
            lambda: self._gateway.get_system_logs(self._with_time_range(filters)),
            lambda payload: a.LogsReceived(parse_logs(payload)),
        )

    def _with_time_range(self, filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        # Current time range always wins over a caller supplied "hours"
        merged = dict(filters or {})
        merged["hours"] = self._store.state.filters.time_range_hours
        return merged

    async def _load(
        self,
        what: str,
        fetch: Callable[[], Any],
        to_action: Callable[[Any], a.Action],
    ) -> bool:
        try:
            payload = await fetch()
            action = to_action(payload)
        except (GatewayError, PayloadError) as e:
            logger.error(f"Failed to load {what}: {e.message}")
            return False
        except Exception as e:
            logger.error(f"Failed to load {what}: {e}", exc_info=True)
            return False

        self._store.dispatch(action)
        return True
