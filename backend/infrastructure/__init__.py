"""Infrastructure layer exports."""

from .dashboard_store import DashboardRepository, InMemoryDashboardRepository, JsonFileDashboardRepository

__all__ = [
    "DashboardRepository",
    "InMemoryDashboardRepository",
    "JsonFileDashboardRepository",
]
