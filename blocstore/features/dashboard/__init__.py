from .dashboard_events import DashboardDataRequested, DashboardEvent, DashboardTabChanged
from .dashboard_handlers import DashboardHandlers, DashboardRepository, create_dashboard_registry, tab_changed_handler
from .dashboard_states import (
    DashboardData,
    DashboardError,
    DashboardInitial,
    DashboardLoaded,
    DashboardLoading,
    DashboardState,
)
from .dashboard_store import create_dashboard_store

__all__ = [
    "DashboardEvent", "DashboardDataRequested", "DashboardTabChanged",
    "DashboardData", "DashboardState", "DashboardInitial", "DashboardLoading",
    "DashboardLoaded", "DashboardError",
    "DashboardRepository", "DashboardHandlers", "create_dashboard_registry", "tab_changed_handler",
    "create_dashboard_store",
]
