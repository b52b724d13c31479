# Standard library imports
import argparse
import asyncio
import logging
import os
import signal
from pathlib import Path
from typing import List, Optional

# External package imports
from dotenv import load_dotenv

# Local application imports
from .application.live_dashboard import LiveDashboard
from .application.state.actions import Action, ConnectionChanged, ErrorOccurred
from .core.config import get_settings, reset_settings
from .di.container import create_live_dashboard
from .domain.models.dashboard_state import DashboardState
from .infrastructure.http_client_factory import close_shared_http_client

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="live-dashboard",
        description="Headless live dashboard monitor: keeps a synchronized view of the "
                    "camera platform and logs connection and data changes.",
    )
    parser.add_argument("--api-url", help="Dashboard API base URL (DASHBOARD_API_URL)")
    parser.add_argument("--ws-url", help="Live channel URL (DASHBOARD_WS_URL)")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--no-reconnect", action="store_true", help="Do not reconnect after the live channel drops"
    )
    return parser


def log_state_change(new_state: DashboardState, old_state: DashboardState, action: Action) -> None:
    """Store listener that reports what the monitor sees."""
    if isinstance(action, ConnectionChanged):
        logger.info(f"Connection: {old_state.connection.value} -> {new_state.connection.value}")
    elif isinstance(action, ErrorOccurred):
        logger.warning(f"Dashboard error: {new_state.error}")
    elif new_state.last_updated != old_state.last_updated:
        logger.info(
            f"Summary v{new_state.version}: {len(new_state.cameras)} cameras, "
            f"{len(new_state.detections)} detections, {len(new_state.alerts)} alerts"
        )


async def run_monitor(dashboard: LiveDashboard, stop: Optional[asyncio.Event] = None) -> None:
    """Run ``dashboard`` until ``stop`` is set or the task is cancelled."""
    stop = stop or asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # Not supported on this platform; Ctrl+C raises KeyboardInterrupt instead
            pass

    dashboard.subscribe(log_state_change)
    try:
        async with dashboard:
            await stop.wait()
    finally:
        await close_shared_http_client()


def main(argv: Optional[List[str]] = None) -> int:
    # Load environment variables from .env file
    env_path = Path.cwd() / ".env"
    load_dotenv(env_path)

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Command line options override the environment
    if args.api_url:
        os.environ["DASHBOARD_API_URL"] = args.api_url
    if args.ws_url:
        os.environ["DASHBOARD_WS_URL"] = args.ws_url
    reset_settings()
    settings = get_settings()

    logger.info(f"Starting live dashboard monitor (api={settings.api_url}, live={settings.ws_url})")
    dashboard = create_live_dashboard(settings=settings, reconnect=not args.no_reconnect)
    try:
        asyncio.run(run_monitor(dashboard))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0
