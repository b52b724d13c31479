# Standard library imports
import asyncio
import json
import logging
from typing import Any, Mapping, Optional

# External package imports
import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, InvalidHandshake, InvalidURI

# Local application imports
from ...core.exceptions import ChannelClosedError, ChannelConnectError
from ...domain.gateway.live_channel import LiveChannel

logger = logging.getLogger(__name__)


class WebSocketLiveChannel(LiveChannel):
    """
    LiveChannel over a WebSocket connection.

    Frames are JSON text messages. A normal close (code 1000/1001) is
    reported as a clean ChannelClosedError, anything else as unclean.
    """

    def __init__(self, url: str, open_timeout: float = 10.0):
        self.url = url
        self.open_timeout = open_timeout
        self._ws: Optional[Any] = None
        self._open = False
        self._used = False

    @property
    def is_open(self) -> bool:
        return self._open

    async def open(self) -> None:
        if self._used:
            raise ChannelConnectError("Live channel instances cannot be reopened")
        self._used = True
        logger.info(f"Connecting to live channel at {self.url}")
        try:
            self._ws = await websockets.connect(self.url, open_timeout=self.open_timeout)
        except (InvalidURI, InvalidHandshake, OSError, asyncio.TimeoutError) as e:
            raise ChannelConnectError(
                f"Could not open {self.url}: {str(e) or e.__class__.__name__}",
                details={"url": self.url},
            ) from e
        self._open = True

    async def send(self, message: Mapping[str, Any]) -> None:
        if self._ws is None or not self._open:
            raise ChannelClosedError("Live channel is not open")
        try:
            await self._ws.send(json.dumps(message))
        except ConnectionClosed as e:
            self._open = False
            raise ChannelClosedError(
                f"Live channel closed while sending: {e}", clean=isinstance(e, ConnectionClosedOK)
            ) from e

    async def receive(self) -> str:
        if self._ws is None or not self._open:
            raise ChannelClosedError("Live channel is not open")
        try:
            frame = await self._ws.recv()
        except ConnectionClosed as e:
            self._open = False
            raise ChannelClosedError(
                f"Live channel closed by server: {e}", clean=isinstance(e, ConnectionClosedOK)
            ) from e
        if isinstance(frame, bytes):
            frame = frame.decode("utf-8", errors="replace")
        return frame

    async def close(self) -> None:
        self._open = False
        ws, self._ws = self._ws, None
        if ws is None:
            return
        try:
            await ws.close()
        except Exception as e:
            logger.debug(f"Error closing live channel: {e}")
