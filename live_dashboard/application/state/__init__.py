from . import actions
from .reducer import reduce, replay, merge_alert_lifecycle
from .store import DashboardStore, StateListener

__all__ = [
    "actions",
    "reduce",
    "replay",
    "merge_alert_lifecycle",
    "DashboardStore",
    "StateListener",
]
