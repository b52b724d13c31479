from .events import LiveEvent, LiveEventBus, LiveEventKind
from .message_parser import parse_frame
from .event_translator import translate_event
from .subscriptions import SubscriptionRegistry
from .connection_manager import ConnectionManager
from .reconnect_policy import ReconnectPolicy, ReconnectSupervisor

__all__ = [
    "LiveEvent",
    "LiveEventBus",
    "LiveEventKind",
    "parse_frame",
    "translate_event",
    "SubscriptionRegistry",
    "ConnectionManager",
    "ReconnectPolicy",
    "ReconnectSupervisor",
]
