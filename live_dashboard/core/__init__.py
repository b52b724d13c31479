from .config import Settings, get_settings, derive_live_channel_url
from .exceptions import (
    DashboardError,
    TransportError,
    ChannelConnectError,
    ChannelClosedError,
    GatewayError,
    CommandError,
    CommandTimeoutError,
    PayloadError,
    StoreError,
    ReentrantDispatchError,
    get_user_message,
)

__all__ = [
    "Settings",
    "get_settings",
    "derive_live_channel_url",
    "DashboardError",
    "TransportError",
    "ChannelConnectError",
    "ChannelClosedError",
    "GatewayError",
    "CommandError",
    "CommandTimeoutError",
    "PayloadError",
    "StoreError",
    "ReentrantDispatchError",
    "get_user_message",
]
