# Standard library imports
import os
from typing import Final, Optional
from urllib.parse import urlparse


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def derive_live_channel_url(api_url: str) -> str:
    """
    Build the live dashboard WebSocket URL from the HTTP API base URL.

    https://host:port -> wss://host:port/api/v1/dashboard/ws/live
    http://host:port  -> ws://host:port/api/v1/dashboard/ws/live
    """
    parsed = urlparse(api_url)
    scheme = "wss" if parsed.scheme == "https" else "ws"
    host = parsed.netloc or parsed.path
    return f"{scheme}://{host}/api/v1/dashboard/ws/live"


class Settings:
    """
    Dashboard engine settings loaded from environment variables.

    This class centralizes all configuration for the synchronization engine.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Remote Data Gateway
        self.api_url: Final[str] = os.getenv("DASHBOARD_API_URL", "http://localhost:8001").rstrip("/")
        self.ws_url: Final[str] = os.getenv("DASHBOARD_WS_URL") or derive_live_channel_url(self.api_url)
        self.http_timeout_s: Final[float] = float(os.getenv("DASHBOARD_HTTP_TIMEOUT_S", "30.0"))
        self.command_timeout_s: Final[float] = float(os.getenv("DASHBOARD_COMMAND_TIMEOUT_S", "15.0"))
        self.active_alert_limit: Final[int] = int(os.getenv("DASHBOARD_ACTIVE_ALERT_LIMIT", "50"))

        # Fallback polling
        self.auto_refresh: Final[bool] = _env_bool("DASHBOARD_AUTO_REFRESH", "true")
        self.refresh_interval_ms: Final[int] = int(os.getenv("DASHBOARD_REFRESH_INTERVAL_MS", "5000"))

        # State store
        self.detection_capacity: Final[int] = int(os.getenv("DASHBOARD_DETECTION_CAPACITY", "100"))

        # Live channel
        self.connect_timeout_s: Final[float] = float(os.getenv("DASHBOARD_CONNECT_TIMEOUT_S", "10.0"))
        self.heartbeat_interval_s: Final[float] = float(os.getenv("DASHBOARD_HEARTBEAT_INTERVAL_S", "30.0"))

        # Reconnect policy
        self.reconnect_interval_ms: Final[int] = int(os.getenv("DASHBOARD_RECONNECT_INTERVAL_MS", "5000"))
        self.reconnect_max_delay_ms: Final[int] = int(os.getenv("DASHBOARD_RECONNECT_MAX_DELAY_MS", "30000"))
        self.reconnect_max_attempts: Final[int] = int(os.getenv("DASHBOARD_RECONNECT_MAX_ATTEMPTS", "10"))

        self.local_timezone: Final[str] = os.getenv("LOCAL_TIMEZONE", "UTC")


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get dashboard settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
