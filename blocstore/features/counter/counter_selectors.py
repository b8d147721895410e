import functools
from typing import Any, Callable, NamedTuple, Optional

from blocstore.config import CounterSettings
from blocstore.store_selectors import create_selector
from blocstore.types import StateSelector

from .counter_handlers import DEFAULT_SETTINGS

# 定義Selectors
get_value = lambda state: state.value


def percentage_from_max(value: int, settings: CounterSettings = DEFAULT_SETTINGS) -> float:
    """目前值相對最大值的百分比，範圍 0.0 ~ 100.0。"""
    if settings.max_value == 0:
        return 0.0
    return max(0.0, min(value / settings.max_value * 100, 100.0))


def percentage_from_min(value: int, settings: CounterSettings = DEFAULT_SETTINGS) -> float:
    """目前值的絕對值相對最小值絕對值的百分比，範圍 0.0 ~ 100.0。"""
    if settings.min_value == 0:
        return 0.0
    return max(0.0, min(abs(value) / abs(settings.min_value) * 100, 100.0))


def is_at_midpoint(value: int, settings: CounterSettings = DEFAULT_SETTINGS) -> bool:
    # 中點以整數除法計算：(100 + -50) // 2 == 25
    return value == (settings.max_value + settings.min_value) // 2


def is_at_max(value: int, settings: CounterSettings = DEFAULT_SETTINGS) -> bool:
    return value >= settings.max_value


def is_at_min(value: int, settings: CounterSettings = DEFAULT_SETTINGS) -> bool:
    return value <= settings.min_value


class CounterSelectors(NamedTuple):
    """綁定同一組邊界設定的計數器選擇器。"""

    percentage_from_max: StateSelector
    percentage_from_min: StateSelector
    distance_from_zero: StateSelector
    is_at_midpoint: StateSelector
    is_at_max: StateSelector
    is_at_min: StateSelector
    counter_info: StateSelector


def create_counter_selectors(settings: Optional[CounterSettings] = None) -> CounterSelectors:
    """
    建立計數器的選擇器組。

    以 config.counter 建立的 Store 必須使用同一份設定建立選擇器，
    否則上下限與百分比會以預設邊界計算。

    Args:
        settings: 邊界設定，預設為 MIN=-50、MAX=100。

    Returns:
        CounterSelectors，每個選擇器各自記憶化。
    """
    settings = settings or DEFAULT_SETTINGS

    def bind(fn: Callable[..., Any]) -> Callable[[int], Any]:
        return functools.partial(fn, settings=settings)

    get_percentage_from_max = create_selector(get_value, result_fn=bind(percentage_from_max))
    get_distance_from_zero = create_selector(get_value, result_fn=abs)
    return CounterSelectors(
        percentage_from_max=get_percentage_from_max,
        percentage_from_min=create_selector(get_value, result_fn=bind(percentage_from_min)),
        distance_from_zero=get_distance_from_zero,
        is_at_midpoint=create_selector(get_value, result_fn=bind(is_at_midpoint)),
        is_at_max=create_selector(get_value, result_fn=bind(is_at_max)),
        is_at_min=create_selector(get_value, result_fn=bind(is_at_min)),
        # 复合选择器，給 UI 一次取得所有統計
        counter_info=create_selector(
            get_value,
            get_percentage_from_max,
            get_distance_from_zero,
            result_fn=lambda value, percentage, distance: {
                "value": value,
                "percentage_from_max": percentage,
                "distance_from_zero": distance,
            },
        ),
    )


# 預設邊界的選擇器
_default = create_counter_selectors()
get_percentage_from_max = _default.percentage_from_max
get_percentage_from_min = _default.percentage_from_min
get_distance_from_zero = _default.distance_from_zero
get_is_at_midpoint = _default.is_at_midpoint
get_is_at_max = _default.is_at_max
get_is_at_min = _default.is_at_min
get_counter_info = _default.counter_info
