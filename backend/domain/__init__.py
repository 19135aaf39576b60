"""Domain layer definitions."""

from .dashboard import DashboardState, SheetUpload

__all__ = [
    "DashboardState",
    "SheetUpload",
]
