"""
blocstore 的事件 (Event) 定義模組。

事件是描述狀態變更意圖的不可變對象。每個事件類別都有一個類別層級的
字串標籤 ``type``，Store 依據這個標籤從處理器註冊表中找到對應的處理器。
"""
from typing import Any, ClassVar, Type, Union

from pydantic import BaseModel, ConfigDict


class Event(BaseModel):
    """
    所有事件的基礎類。

    子類別以欄位描述負載，並宣告自己的 ``type`` 標籤:

        class SetValue(CounterEvent):
            type: ClassVar[str] = "[Counter] Set Value"
            value: int

    事件是凍結的 pydantic 模型，相同標籤與負載的兩個事件彼此相等且可雜湊。
    """

    model_config = ConfigDict(frozen=True)

    type: ClassVar[str] = "[Event]"


def event_type(event_or_cls: Union[Event, Type[Event], str]) -> str:
    """
    取得事件的標籤。

    Args:
        event_or_cls: 事件實例、事件類別，或直接是標籤字串。

    Returns:
        事件的 ``type`` 標籤。
    """
    if isinstance(event_or_cls, str):
        return event_or_cls
    return getattr(event_or_cls, "type", type(event_or_cls).__name__)


def describe(event: Any) -> str:
    """用於日誌的簡短描述，例如 ``[Counter] Set Value SetValue(value=3)``。"""
    if isinstance(event, Event):
        return f"{event.type} {event!r}" if type(event).model_fields else event.type
    return repr(event)
