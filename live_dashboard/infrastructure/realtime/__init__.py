from .websocket_channel import WebSocketLiveChannel

__all__ = ["WebSocketLiveChannel"]
