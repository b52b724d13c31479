"""
Unit tests for live_dashboard.utils.datetime_utils
"""
from datetime import datetime, timedelta, timezone

import pytest
from live_dashboard.utils.datetime_utils import ensure_utc, parse_timestamp, to_iso, utc_now


class TestEnsureUtc:
    """Tests for ensure_utc"""

    def test_none_returns_none(self):
        assert ensure_utc(None) is None

    def test_naive_assumed_app_timezone(self, mock_settings):
        dt = datetime(2025, 1, 15, 12, 0, 0)
        result = ensure_utc(dt)
        assert result.tzinfo == timezone.utc
        assert result.hour == 12

    def test_naive_in_configured_timezone(self, mock_settings):
        mock_settings.local_timezone = "Asia/Kolkata"
        result = ensure_utc(datetime(2025, 1, 15, 12, 0, 0))
        assert result.hour == 6
        assert result.minute == 30

    def test_invalid_timezone_falls_back_to_utc(self, mock_settings):
        mock_settings.local_timezone = "Not/AZone"
        result = ensure_utc(datetime(2025, 1, 15, 12, 0, 0))
        assert result.hour == 12

    def test_aware_converted_to_utc(self):
        dt = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))
        result = ensure_utc(dt)
        assert result.tzinfo == timezone.utc
        assert result.hour == 6
        assert result.minute == 30


class TestParseTimestamp:
    """Tests for parse_timestamp"""

    def test_none_empty_returns_none(self, mock_settings):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_parse_utc_z_suffix(self, mock_settings):
        dt = parse_timestamp("2025-01-15T12:00:00Z")
        assert dt == datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def test_epoch_seconds_and_milliseconds(self):
        seconds = parse_timestamp(1736942400)
        millis = parse_timestamp(1736942400000)
        assert seconds == millis
        assert seconds.year == 2025

    @pytest.mark.parametrize("value", ["not-a-date", "2025-13-45T99:99:99", True, object()])
    def test_invalid_returns_none(self, mock_settings, value):
        assert parse_timestamp(value) is None


class TestToIso:
    """Tests for to_iso"""

    def test_none_returns_none(self):
        assert to_iso(None) is None

    def test_utc_z_suffix(self, mock_settings):
        dt = datetime(2025, 1, 15, 12, 0, 0, 123456, tzinfo=timezone.utc)
        assert to_iso(dt) == "2025-01-15T12:00:00Z"


def test_utc_now_is_aware():
    assert utc_now().tzinfo == timezone.utc
