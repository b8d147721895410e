from typing import Any, Iterable, Optional

from blocstore.config import StoreConfig
from blocstore.store import Store, create_store

from .dashboard_handlers import DashboardRepository, create_dashboard_registry
from .dashboard_states import DashboardInitial, DashboardState


def create_dashboard_store(
    repository: DashboardRepository,
    *,
    initial_tab_index: int = 0,
    config: Optional[StoreConfig] = None,
    middleware: Iterable[Any] = (),
) -> Store[DashboardState]:
    return create_store(
        DashboardInitial(current_tab_index=initial_tab_index),
        create_dashboard_registry(repository),
        name="dashboard",
        middleware=middleware,
        config=config,
    )
