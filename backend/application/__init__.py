"""Application services."""

from .dashboard import DashboardService, build_dashboard_service

__all__ = [
    "DashboardService",
    "build_dashboard_service",
]
