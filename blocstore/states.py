"""
blocstore 的狀態 (State) 定義模組。

狀態是某個 feature 在某一時刻、對外可觀察情況的完整快照。狀態在發出之後
不會再被修改，只會被新的狀態取代。
"""
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

StateT = TypeVar("StateT", bound="State")


class State(BaseModel):
    """所有狀態的基礎類，凍結的 pydantic 模型，以結構比較相等。"""

    model_config = ConfigDict(frozen=True)


def evolve(state: StateT, **changes: Any) -> StateT:
    """
    以部分欄位的變更建立新的狀態，原狀態保持不變。

    Args:
        state: 原始狀態。
        **changes: 要覆寫的欄位。

    Returns:
        同一個變體 (類別) 的新狀態實例。
    """
    return state.model_copy(update=changes)
