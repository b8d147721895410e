# blocstore/immutable_utils.py
from typing import Any, Mapping

from immutables import Map
from pydantic import BaseModel


def freeze(obj: Any) -> Any:
    """將 JSON 形式的資料 (或 pydantic 模型) 轉換為不可變結構。"""
    if isinstance(obj, BaseModel):
        return freeze(obj.model_dump(mode="json"))
    if isinstance(obj, Mapping):
        return Map({k: freeze(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return tuple(freeze(i) for i in obj)
    if isinstance(obj, (set, frozenset)):
        return frozenset(freeze(i) for i in obj)
    return obj


def thaw(obj: Any) -> Any:
    """將 Map 及其巢狀結構轉換回普通字典與列表。"""
    if isinstance(obj, Map):
        return {k: thaw(v) for k, v in obj.items()}
    if isinstance(obj, tuple):
        return [thaw(i) for i in obj]
    if isinstance(obj, frozenset):
        return {thaw(i) for i in obj}
    return obj
