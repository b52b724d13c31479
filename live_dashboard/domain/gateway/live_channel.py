from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping


class LiveChannel(ABC):
    """
    Transport contract for the bidirectional live event channel.

    One instance represents one connection attempt; a closed channel is
    never reopened. ``receive`` raises ChannelClosedError when the peer
    closes the connection or the transport fails.
    """

    @abstractmethod
    async def open(self) -> None:
        """Open the connection; raises ChannelConnectError on failure"""
        pass

    @abstractmethod
    async def send(self, message: Mapping[str, Any]) -> None:
        """Send a JSON-serializable message"""
        pass

    @abstractmethod
    async def receive(self) -> str:
        """Wait for the next raw text frame"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the connection; safe to call more than once"""
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass


LiveChannelFactory = Callable[[], LiveChannel]
