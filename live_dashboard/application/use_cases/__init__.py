from .load_dashboard_data import DashboardDataLoader, SUMMARY_LOAD_FAILED_MESSAGE

__all__ = ["DashboardDataLoader", "SUMMARY_LOAD_FAILED_MESSAGE"]
