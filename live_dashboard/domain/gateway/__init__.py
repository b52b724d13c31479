from .dashboard_gateway import CommandResult, DashboardGateway
from .live_channel import LiveChannel, LiveChannelFactory

__all__ = [
    "CommandResult",
    "DashboardGateway",
    "LiveChannel",
    "LiveChannelFactory",
]
