from .live_dashboard import LiveDashboard

__all__ = ["LiveDashboard"]
