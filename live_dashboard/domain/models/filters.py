# Standard library imports
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Tuple


@dataclass(frozen=True)
class FilterSet:
    """Client-side dashboard filters."""
    time_range_hours: int = 24
    camera_ids: Tuple[str, ...] = ()
    alert_levels: Tuple[str, ...] = ("suspicious", "critical")
    detection_classes: Tuple[str, ...] = ()

    def merged(self, partial: Mapping[str, Any]) -> "FilterSet":
        """
        Shallow-merge ``partial`` into a new FilterSet.

        Raises:
            ValueError: If ``partial`` names a field FilterSet does not have
        """
        known = {f.name for f in fields(self)}
        unknown = set(partial) - known
        if unknown:
            raise ValueError(f"Unknown filter fields: {sorted(unknown)}")

        changes = {}
        for key, value in partial.items():
            if key == "time_range_hours":
                changes[key] = int(value)
            else:
                changes[key] = tuple(value)
        return replace(self, **changes)
