"""Subscription registry for server-pushed data categories"""

import logging
from typing import FrozenSet, Iterable, Optional

from ...core.exceptions import TransportError
from ...domain.constants.data_types import ALL_DATA_TYPES, SubscriptionDataType
from ...domain.constants.message_types import ClientMessageTypes, MessageFields
from ...domain.gateway.live_channel import LiveChannel

logger = logging.getLogger(__name__)


class SubscriptionRegistry:
    """
    Tracks which data categories this client wants pushed.

    The server has no unsubscribe message, so removing a category only
    changes what is declared on the next connect.
    """

    def __init__(self, data_types: Optional[Iterable[SubscriptionDataType]] = None):
        self._wanted = frozenset(SubscriptionDataType(t) for t in (data_types or ALL_DATA_TYPES))
        self._last_declared: Optional[FrozenSet[SubscriptionDataType]] = None

    @property
    def wanted(self) -> FrozenSet[SubscriptionDataType]:
        return self._wanted

    @property
    def last_declared(self) -> Optional[FrozenSet[SubscriptionDataType]]:
        """Categories sent in the most recent successful subscribe message."""
        return self._last_declared

    def add(self, *data_types: SubscriptionDataType) -> None:
        self._wanted = self._wanted | {SubscriptionDataType(t) for t in data_types}

    def remove(self, *data_types: SubscriptionDataType) -> None:
        self._wanted = self._wanted - {SubscriptionDataType(t) for t in data_types}

    def build_message(self) -> dict:
        # Sorted for a stable wire format
        return {
            MessageFields.TYPE: ClientMessageTypes.SUBSCRIBE,
            MessageFields.DATA_TYPES: sorted(t.value for t in self._wanted),
        }

    async def declare(self, channel: LiveChannel) -> bool:
        """
        Send the subscribe message on ``channel``.

        A failed send is logged and reported through the return value; it
        never raises so the rest of the connect sequence can continue.
        """
        if not self._wanted:
            logger.info("No data categories wanted; skipping subscribe")
            return False
        try:
            await channel.send(self.build_message())
        except TransportError as e:
            logger.warning(f"Failed to declare subscriptions: {e.message}")
            return False
        self._last_declared = self._wanted
        logger.debug(f"Subscribed to {sorted(t.value for t in self._wanted)}")
        return True

    def confirm(self, data: object) -> None:
        logger.info(f"Subscription confirmed by server: {data}")
