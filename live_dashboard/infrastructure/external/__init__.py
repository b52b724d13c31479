from .dashboard_api_client import HttpDashboardGateway

__all__ = ["HttpDashboardGateway"]
