# Standard library imports
from typing import Optional

# Local application imports
from .base_container import BaseContainer
from ..application.commands.command_dispatcher import CommandDispatcher
from ..application.live_dashboard import LiveDashboard
from ..application.polling.poll_scheduler import FallbackPollScheduler
from ..application.realtime.connection_manager import ConnectionManager
from ..application.realtime.reconnect_policy import ReconnectPolicy, ReconnectSupervisor
from ..application.realtime.subscriptions import SubscriptionRegistry
from ..application.state.store import DashboardStore
from ..application.use_cases.load_dashboard_data import DashboardDataLoader
from ..core.config import Settings, get_settings
from ..domain.gateway.dashboard_gateway import DashboardGateway
from ..domain.gateway.live_channel import LiveChannelFactory
from ..domain.models.dashboard_state import initial_dashboard_state
from ..infrastructure.external.dashboard_api_client import HttpDashboardGateway
from ..infrastructure.realtime.websocket_channel import WebSocketLiveChannel


class DashboardContainer(BaseContainer):
    """
    Dependency container for one dashboard instance.

    Every LiveDashboard gets its own container, so two dashboards never
    share a store, channel or poller. Registration order:
    transports -> store -> realtime -> loaders/commands -> facade.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        gateway: Optional[DashboardGateway] = None,
        channel_factory: Optional[LiveChannelFactory] = None,
        reconnect: bool = True,
    ) -> None:
        super().__init__()
        self.settings = settings or get_settings()
        self._gateway = gateway
        self._channel_factory = channel_factory
        self._reconnect = reconnect
        self.setup()

    def setup(self) -> None:
        settings = self.settings

        # Step 1: transports
        self.register_singleton(DashboardGateway, self._gateway or HttpDashboardGateway(
            base_url=settings.api_url, timeout=settings.http_timeout_s,
        ))
        channel_factory = self._channel_factory or (
            lambda: WebSocketLiveChannel(settings.ws_url, open_timeout=settings.connect_timeout_s)
        )

        # Step 2: state store
        self.register_factory(
            DashboardStore,
            lambda: DashboardStore(initial_dashboard_state(
                auto_refresh=settings.auto_refresh,
                refresh_interval_ms=settings.refresh_interval_ms,
                detection_capacity=settings.detection_capacity,
            )),
        )

        # Step 3: realtime
        self.register_factory(SubscriptionRegistry, SubscriptionRegistry)
        self.register_factory(
            ConnectionManager,
            lambda: ConnectionManager(
                store=self.get(DashboardStore),
                channel_factory=channel_factory,
                subscriptions=self.get(SubscriptionRegistry),
                heartbeat_interval_s=settings.heartbeat_interval_s,
                connect_timeout_s=settings.connect_timeout_s,
            ),
        )
        self.register_factory(ReconnectPolicy, lambda: ReconnectPolicy.from_settings(settings))
        self.register_factory(
            ReconnectSupervisor,
            lambda: ReconnectSupervisor(self.get(ConnectionManager), self.get(ReconnectPolicy)),
        )

        # Step 4: loaders and commands
        self.register_factory(
            DashboardDataLoader,
            lambda: DashboardDataLoader(
                gateway=self.get(DashboardGateway),
                store=self.get(DashboardStore),
                active_alert_limit=settings.active_alert_limit,
            ),
        )
        self.register_factory(
            FallbackPollScheduler,
            lambda: FallbackPollScheduler(self.get(DashboardStore), self.get(DashboardDataLoader)),
        )
        self.register_factory(
            CommandDispatcher,
            lambda: CommandDispatcher(
                gateway=self.get(DashboardGateway),
                store=self.get(DashboardStore),
                loader=self.get(DashboardDataLoader),
                timeout_s=settings.command_timeout_s,
            ),
        )

        # Step 5: facade
        self.register_factory(
            LiveDashboard,
            lambda: LiveDashboard(
                store=self.get(DashboardStore),
                connection=self.get(ConnectionManager),
                loader=self.get(DashboardDataLoader),
                commands=self.get(CommandDispatcher),
                poller=self.get(FallbackPollScheduler),
                reconnect=self.get(ReconnectSupervisor) if self._reconnect else None,
            ),
        )


def create_live_dashboard(
    settings: Optional[Settings] = None,
    gateway: Optional[DashboardGateway] = None,
    channel_factory: Optional[LiveChannelFactory] = None,
    reconnect: bool = True,
) -> LiveDashboard:
    """
    Build a fully wired LiveDashboard.

    Args:
        settings: Configuration; defaults to get_settings()
        gateway: Gateway to use instead of the HTTP gateway
        channel_factory: Live channel factory to use instead of WebSockets
        reconnect: Whether to attach a reconnect supervisor
    """
    container = DashboardContainer(
        settings=settings, gateway=gateway, channel_factory=channel_factory, reconnect=reconnect,
    )
    return container.get(LiveDashboard)
