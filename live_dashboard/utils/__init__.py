from .datetime_utils import utc_now, ensure_utc, parse_timestamp, to_iso

__all__ = ["utc_now", "ensure_utc", "parse_timestamp", "to_iso"]
