from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

@dataclass(frozen=True)
class CommandResult:
    """Outcome of an imperative gateway call"""
    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "CommandResult":
        return cls(success=False, error=error)

class DashboardGateway(ABC):
    """
    Request/response interface to the remote dashboard backend.

    Read methods return the decoded JSON payload and raise GatewayError on
    transport or HTTP failure. Command methods never raise for a rejected
    or failed request; they return CommandResult(success=False).
    """

    # Snapshot reads

    @abstractmethod
    async def get_dashboard_summary(self) -> Any:
        """Fetch the full dashboard summary"""
        pass

    @abstractmethod
    async def get_camera_status(self) -> Any:
        """Fetch the status of every camera"""
        pass

    @abstractmethod
    async def get_recent_detections(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        """Fetch recent detections matching filters"""
        pass

    @abstractmethod
    async def get_active_alerts(self, limit: int = 50) -> Any:
        """Fetch active alerts"""
        pass

    @abstractmethod
    async def get_performance_summary(self) -> Any:
        """Fetch the latest performance summary"""
        pass

    @abstractmethod
    async def get_recent_behaviors(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        """Fetch behavior analytics"""
        pass

    @abstractmethod
    async def get_system_logs(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        """Fetch recent system log entries"""
        pass

    # Commands

    @abstractmethod
    async def acknowledge_alert(self, alert_id: str, acknowledged_by: str) -> CommandResult:
        """Mark an alert acknowledged"""
        pass

    @abstractmethod
    async def add_camera(self, config: Mapping[str, Any]) -> CommandResult:
        """Register a new camera"""
        pass

    @abstractmethod
    async def remove_camera(self, camera_id: str) -> CommandResult:
        """Delete a camera"""
        pass

    @abstractmethod
    async def start_camera(self, camera_id: str, quality: str = "medium") -> CommandResult:
        """Activate a camera"""
        pass

    @abstractmethod
    async def stop_camera(self, camera_id: str) -> CommandResult:
        """Deactivate a camera"""
        pass

    @abstractmethod
    async def update_detection_config(self, camera_id: str, config: Mapping[str, Any]) -> CommandResult:
        """Update the detection configuration of a camera"""
        pass

    @abstractmethod
    async def create_webrtc_stream(self, camera_id: str, quality: str = "medium") -> CommandResult:
        """Create a peer video session; data carries the session id"""
        pass

    @abstractmethod
    async def destroy_webrtc_stream(self, session_id: str) -> CommandResult:
        """Tear down a peer video session"""
        pass

    @abstractmethod
    async def add_demo_cameras(self) -> CommandResult:
        """Ask the backend to register its demo cameras"""
        pass
