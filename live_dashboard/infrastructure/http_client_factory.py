"""Pooled httpx client for the dashboard REST gateway."""
import httpx
import logging
from typing import Optional

from .. import __version__

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": f"live-dashboard/{__version__}",
}

_shared_client: Optional[httpx.AsyncClient] = None


def build_http_client(timeout: float, connect_timeout: Optional[float] = None) -> httpx.AsyncClient:
    """
    Create a client for talking to one dashboard backend.

    A dashboard only has a handful of concurrent requests (one summary poll
    plus the occasional command), so the pool stays small.

    Args:
        timeout: Read/write/pool timeout in seconds
        connect_timeout: Connect timeout in seconds, capped at ``timeout``
    """
    connect = timeout if connect_timeout is None else min(timeout, connect_timeout)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=connect),
        limits=httpx.Limits(
            max_keepalive_connections=4,
            max_connections=8,
            keepalive_expiry=30.0,
        ),
        headers=DEFAULT_HEADERS,
        http2=True,
    )


def get_shared_http_client(timeout: float = 30.0, connect_timeout: Optional[float] = None) -> httpx.AsyncClient:
    """
    Get or create the shared client used by gateways without their own client.

    Timeouts only apply when the client is (re)created; a client closed by
    ``close_shared_http_client`` or by its owner is replaced transparently.
    """
    global _shared_client

    if _shared_client is None or _shared_client.is_closed:
        _shared_client = build_http_client(timeout, connect_timeout)
        logger.info(f"Created shared dashboard HTTP client (timeout={timeout}s)")

    return _shared_client


async def close_shared_http_client() -> None:
    """Close the shared client on dashboard shutdown. Safe to call repeatedly."""
    global _shared_client

    client, _shared_client = _shared_client, None
    if client is not None and not client.is_closed:
        await client.aclose()
        logger.info("Closed shared dashboard HTTP client")
