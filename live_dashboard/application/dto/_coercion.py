"""Shared pydantic validators for loosely typed backend payloads."""
from typing import Any, Optional


def coerce_str(value: Any) -> Any:
    """Accept numeric identifiers and strip string ones."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


def coerce_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return value


def coerce_lower(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value
