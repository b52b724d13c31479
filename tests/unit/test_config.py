"""
Unit tests for live_dashboard.core.config
"""
import os
from unittest.mock import patch

import pytest
from live_dashboard.core.config import Settings, derive_live_channel_url, get_settings, reset_settings


class TestDeriveLiveChannelUrl:
    """Tests for derive_live_channel_url"""

    def test_http_maps_to_ws(self):
        assert derive_live_channel_url("http://localhost:8001") == "ws://localhost:8001/api/v1/dashboard/ws/live"

    def test_https_maps_to_wss(self):
        assert derive_live_channel_url("https://vision.example.com") == "wss://vision.example.com/api/v1/dashboard/ws/live"


class TestSettings:
    """Tests for Settings defaults and overrides"""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
        assert settings.api_url == "http://localhost:8001"
        assert settings.auto_refresh is True
        assert settings.refresh_interval_ms == 5000
        assert settings.detection_capacity == 100
        assert settings.heartbeat_interval_s == 30.0
        assert settings.reconnect_interval_ms == 5000
        assert settings.reconnect_max_delay_ms == 30000
        assert settings.reconnect_max_attempts == 10
        assert settings.active_alert_limit == 50

    def test_environment_overrides(self, mock_env):
        with patch.dict(os.environ, {"DASHBOARD_AUTO_REFRESH": "off", "DASHBOARD_WS_URL": "ws://other/live"}):
            settings = Settings()
        assert settings.api_url == "http://dashboard.test:8001"
        assert settings.auto_refresh is False
        assert settings.ws_url == "ws://other/live"

    def test_trailing_slash_stripped(self):
        with patch.dict(os.environ, {"DASHBOARD_API_URL": "http://host:9000/"}, clear=True):
            settings = Settings()
        assert settings.api_url == "http://host:9000"
        assert settings.ws_url == "ws://host:9000/api/v1/dashboard/ws/live"


def test_get_settings_is_singleton():
    reset_settings()
    try:
        assert get_settings() is get_settings()
    finally:
        reset_settings()


@pytest.mark.parametrize("value,expected", [("1", True), ("yes", True), ("false", False), ("0", False)])
def test_auto_refresh_parsing(value, expected):
    with patch.dict(os.environ, {"DASHBOARD_AUTO_REFRESH": value}):
        assert Settings().auto_refresh is expected
