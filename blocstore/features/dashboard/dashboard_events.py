from typing import ClassVar

from blocstore.events import Event


class DashboardEvent(Event):
    """所有儀表板事件的基礎類。"""


class DashboardDataRequested(DashboardEvent):
    type: ClassVar[str] = "[Dashboard] Data Requested"


class DashboardTabChanged(DashboardEvent):
    type: ClassVar[str] = "[Dashboard] Tab Changed"

    index: int
