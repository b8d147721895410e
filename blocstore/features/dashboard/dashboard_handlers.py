import logging
from typing import Protocol, runtime_checkable

from blocstore.failures import ServerFailure, classify_failure
from blocstore.handlers import HandlerRegistry, create_registry, on
from blocstore.states import evolve
from blocstore.types import EmitterProtocol

from .dashboard_events import DashboardDataRequested, DashboardTabChanged
from .dashboard_states import DashboardData, DashboardError, DashboardLoaded, DashboardLoading, DashboardState

logger = logging.getLogger(__name__)


@runtime_checkable
class DashboardRepository(Protocol):
    async def get_dashboard_data(self) -> DashboardData:
        """取得使用者名稱、email 與統計數字。"""
        ...


def tab_changed_handler(state: DashboardState, event: DashboardTabChanged) -> DashboardState:
    """只更新索引，保留目前的變體與負載 (資料、錯誤訊息或載入中)。索引範圍由 UI 決定。"""
    logger.info("儀表板分頁切換到 %d", event.index)
    return evolve(state, current_tab_index=event.index)


class DashboardHandlers:
    def __init__(self, repository: DashboardRepository):
        self._repository = repository

    async def on_data_requested(self, event: DashboardDataRequested, emit: EmitterProtocol) -> None:
        # 在請求當下擷取索引，Loading → Loaded/Error 期間保持不變
        tab_index = emit.state.current_tab_index
        emit(DashboardLoading(current_tab_index=tab_index))
        try:
            data = await self._repository.get_dashboard_data()
            loaded = DashboardLoaded(data=data, current_tab_index=tab_index)
        except Exception as err:
            failure = classify_failure(err, fallback=ServerFailure, prefix="Failed to load dashboard data")
            logger.error("儀表板資料載入失敗: %s", failure.message)
            emit(DashboardError(message=failure.message, current_tab_index=tab_index))
            return
        logger.info("儀表板資料載入成功")
        emit(loaded)


def create_dashboard_registry(repository: DashboardRepository) -> HandlerRegistry:
    handlers = DashboardHandlers(repository)
    return create_registry(
        on(DashboardDataRequested, handlers.on_data_requested),
        on(DashboardTabChanged, tab_changed_handler),
    )
