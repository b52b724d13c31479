from .container import DashboardContainer, create_live_dashboard

__all__ = ["DashboardContainer", "create_live_dashboard"]
