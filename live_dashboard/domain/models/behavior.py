# Standard library imports
from dataclasses import dataclass


@dataclass(frozen=True)
class BehaviorEvent:
    """Aggregated behavior analytics entry."""
    suspicious_activities: int = 0
    normal_behavior: int = 0
    alerts_generated: int = 0
    false_positives: int = 0
