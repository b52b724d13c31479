from .http_client_factory import build_http_client, get_shared_http_client, close_shared_http_client

__all__ = ["build_http_client", "get_shared_http_client", "close_shared_http_client"]
