# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LogEntry:
    """System log line surfaced on the dashboard."""
    id: str
    level: str = "info"
    message: str = ""
    component: str = ""
    timestamp: Optional[datetime] = None
