"""Constants for live channel messages and subscription categories"""

from .message_types import MessageFields, ServerMessageTypes, ClientMessageTypes
from .data_types import SubscriptionDataType, ALL_DATA_TYPES

__all__ = [
    "MessageFields",
    "ServerMessageTypes",
    "ClientMessageTypes",
    "SubscriptionDataType",
    "ALL_DATA_TYPES",
]
