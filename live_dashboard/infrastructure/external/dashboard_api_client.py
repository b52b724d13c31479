# Standard library imports
import logging
from typing import Any, Dict, Mapping, Optional

# External package imports
import httpx

# Local application imports
from ..http_client_factory import get_shared_http_client
from ...core.config import get_settings
from ...core.exceptions import GatewayError
from ...domain.gateway.dashboard_gateway import CommandResult, DashboardGateway
from ...utils.datetime_utils import to_iso, utc_now

logger = logging.getLogger(__name__)

DEFAULT_DETECTION_LIMIT = 50
DEFAULT_LOG_LIMIT = 20


def _query_params(filters: Optional[Mapping[str, Any]], **defaults: Any) -> Dict[str, Any]:
    """Flatten filters into query parameters; sequences become comma separated."""
    params: Dict[str, Any] = dict(defaults)
    for key, value in (filters or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set, frozenset)):
            if not value:
                continue
            value = ",".join(str(v) for v in value)
        elif isinstance(value, bool):
            value = "true" if value else "false"
        params[key] = value
    return params


class HttpDashboardGateway(DashboardGateway):
    """
    HTTP implementation of the dashboard gateway.

    Reads raise GatewayError so callers can tell "no data" from "request
    failed". Commands log failures and return CommandResult(success=False)
    instead of raising.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            base_url: API base URL. If None, reads DASHBOARD_API_URL.
            timeout: Request timeout in seconds. If None, reads DASHBOARD_HTTP_TIMEOUT_S.
            client: Client to use instead of the shared pooled client.
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout_s
        self.connect_timeout = settings.connect_timeout_s
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_shared_http_client(self.timeout, self.connect_timeout)

    # -------------------------------------------------------------------------
    # Snapshot reads
    # -------------------------------------------------------------------------

    async def get_dashboard_summary(self) -> Any:
        return await self._get_json("/api/v1/dashboard/summary", what="dashboard summary")

    async def get_camera_status(self) -> Any:
        return await self._get_json("/api/v1/cameras", what="camera status")

    async def get_recent_detections(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._get_json(
            "/api/v1/detections",
            params=_query_params(filters, limit=DEFAULT_DETECTION_LIMIT),
            what="recent detections",
        )

    async def get_active_alerts(self, limit: int = 50) -> Any:
        return await self._get_json(
            "/api/v1/detections/alerts", params={"limit": limit}, what="active alerts"
        )

    async def get_performance_summary(self) -> Any:
        return await self._get_json("/api/v1/dashboard/analytics/performance", what="performance summary")

    async def get_recent_behaviors(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._get_json(
            "/api/v1/analytics/behavior", params=_query_params(filters), what="behavior analytics"
        )

    async def get_system_logs(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._get_json(
            "/api/v1/system/logs",
            params=_query_params(filters, limit=DEFAULT_LOG_LIMIT),
            what="system logs",
        )

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    async def acknowledge_alert(self, alert_id: str, acknowledged_by: str) -> CommandResult:
        payload = {
            "acknowledged": True,
            "acknowledged_by": acknowledged_by,
            "acknowledged_at": to_iso(utc_now()),
        }
        return await self._command("PUT", f"/api/v1/detections/alerts/{alert_id}", json=payload,
                                   what=f"acknowledge alert {alert_id}")

    async def add_camera(self, config: Mapping[str, Any]) -> CommandResult:
        return await self._command("POST", "/api/v1/cameras", json=dict(config), what="add camera")

    async def remove_camera(self, camera_id: str) -> CommandResult:
        return await self._command("DELETE", f"/api/v1/cameras/{camera_id}", what=f"remove camera {camera_id}")

    async def start_camera(self, camera_id: str, quality: str = "medium") -> CommandResult:
        return await self._command(
            "POST", f"/api/v1/cameras/{camera_id}/activate", params={"quality": quality},
            what=f"start camera {camera_id}",
        )

    async def stop_camera(self, camera_id: str) -> CommandResult:
        return await self._command("POST", f"/api/v1/cameras/{camera_id}/deactivate", what=f"stop camera {camera_id}")

    async def update_detection_config(self, camera_id: str, config: Mapping[str, Any]) -> CommandResult:
        return await self._command(
            "PUT", f"/api/v1/cameras/{camera_id}", json=dict(config),
            what=f"update detection config of camera {camera_id}",
        )

    async def create_webrtc_stream(self, camera_id: str, quality: str = "medium") -> CommandResult:
        result = await self._command(
            "POST", "/api/v1/cameras/live/webrtc/stream/create",
            json={"camera_id": camera_id, "quality": quality},
            what=f"create stream for camera {camera_id}",
        )
        if not result.success:
            return result
        data = result.data
        session_id = (
            data.get("session_id") or data.get("sessionId")
            or data.get("stream_id") or data.get("streamId")
            or f"stream_{camera_id}"
        )
        return CommandResult(success=True, data={**data, "session_id": session_id})

    async def destroy_webrtc_stream(self, session_id: str) -> CommandResult:
        return await self._command(
            "DELETE", f"/api/v1/cameras/live/webrtc/stream/{session_id}",
            what=f"destroy stream {session_id}",
        )

    async def add_demo_cameras(self) -> CommandResult:
        return await self._command("POST", "/api/v1/cameras/live/test/add-demo-cameras", what="add demo cameras")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _get_json(self, path: str, what: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Timeout while fetching {what} from {url}")
            raise GatewayError(f"Timeout while fetching {what}") from e
        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error fetching {what}: {e.response.status_code} - {e.response.text}"
            )
            raise GatewayError(
                f"HTTP {e.response.status_code} while fetching {what}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error fetching {what} from {url}: {e}")
            raise GatewayError(f"Request failed while fetching {what}: {e}") from e
        except ValueError as e:
            logger.error(f"Invalid JSON in {what} response: {e}")
            raise GatewayError(f"Invalid JSON in {what} response") from e

    async def _command(
        self,
        method: str,
        path: str,
        what: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> CommandResult:
        url = f"{self.base_url}{path}"
        try:
            logger.info(f"Requesting {what}")
            response = await self.client.request(method, url, json=json, params=params, timeout=self.timeout)
            response.raise_for_status()
        except httpx.TimeoutException:
            logger.error(f"Timeout while trying to {what}")
            return CommandResult.failed(f"Timeout while trying to {what}")
        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error trying to {what}: {e.response.status_code} - {e.response.text}"
            )
            return CommandResult.failed(f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            logger.error(f"Request error trying to {what}: {e}")
            return CommandResult.failed(str(e) or e.__class__.__name__)

        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = {}
        data = body if isinstance(body, dict) else {"data": body}
        logger.info(f"Successfully completed {what}")
        return CommandResult(success=True, data=data)
