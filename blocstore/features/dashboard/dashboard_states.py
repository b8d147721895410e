"""
儀表板的狀態。

每個變體都帶有 current_tab_index，它與資料負載互相獨立：除了明確的
DashboardTabChanged(0) 或重新建構 Store 之外，索引不會被重設為 0。
"""
from pydantic import BaseModel, ConfigDict

from blocstore.states import State


class DashboardData(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_name: str
    user_email: str
    total_items: int = 0
    unread_notifications: int = 0


class DashboardState(State):
    current_tab_index: int = 0


class DashboardInitial(DashboardState):
    pass


class DashboardLoading(DashboardState):
    pass


class DashboardLoaded(DashboardState):
    data: DashboardData


class DashboardError(DashboardState):
    message: str
