"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling for payload normalization and state
timestamps.

Functions:
- utc_now(): Returns timezone-aware UTC datetime (used for lastUpdated)
- ensure_utc(): Normalize a datetime into UTC
- parse_timestamp(): Safely parse ISO 8601 strings, epoch numbers or datetimes
- to_iso(): Convert datetime object to ISO 8601 string

Naive timestamps coming from the server are interpreted in the timezone
configured by LOCAL_TIMEZONE.
"""
import logging
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Any, Optional
import zoneinfo

from ..core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone() -> tzinfo:
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().local_timezone

    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Invalid timezone '{tz_str}', falling back to UTC")
        return dt_timezone.utc


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents the application timezone
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_get_app_timezone())
    return dt.astimezone(dt_timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a server timestamp into a timezone-aware UTC datetime.

    Accepts ISO 8601 strings ("2025-12-24T10:30:00Z"), epoch seconds or
    milliseconds, and datetime objects.

    Returns:
        timezone-aware UTC datetime, or None if the value is empty or invalid
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return ensure_utc(value)

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        seconds = value / 1000.0 if value > 1e11 else float(value)
        try:
            return datetime.fromtimestamp(seconds, tz=dt_timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        try:
            normalized = value.strip().replace("Z", "+00:00")
            return ensure_utc(datetime.fromisoformat(normalized))
        except ValueError:
            return None

    return None


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string ('Z' suffix for UTC).

    Args:
        dt: datetime object (timezone-aware or naive)

    Returns:
        ISO 8601 formatted string, or None if dt is None
    """
    if dt is None:
        return None

    dt = ensure_utc(dt)
    return dt.replace(microsecond=0).isoformat().replace("+00:00", "Z")
