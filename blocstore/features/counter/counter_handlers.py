"""
計數器的純 reducer。

所有轉換都是同步且全域定義的 (不會失敗)；唯一的邊界策略是夾值 (clamp)，
在兩端都必須精確：100 加一仍是 100，-50 減一仍是 -50。
"""
import functools
from typing import Optional

from blocstore.config import CounterSettings
from blocstore.handlers import HandlerRegistry, create_registry, on
from blocstore.states import evolve

from .counter_events import (
    DecreaseNumber,
    DivideNumber,
    IncreaseNumber,
    MultiplyNumber,
    ResetNumber,
    SetValue,
)
from .counter_states import CounterState

DEFAULT_SETTINGS = CounterSettings()


def truncate_divide(value: int, divisor: int) -> int:
    """整數除法，向零截斷 (-1 / 2 得 0，不是 Python // 的 -1)。"""
    quotient = abs(value) // abs(divisor)
    return -quotient if (value < 0) != (divisor < 0) else quotient


# ====== Handlers ======
def increase_handler(state: CounterState, event: IncreaseNumber, settings: CounterSettings = DEFAULT_SETTINGS) -> CounterState:
    return evolve(state, value=min(state.value + settings.increment_step, settings.max_value))


def decrease_handler(state: CounterState, event: DecreaseNumber, settings: CounterSettings = DEFAULT_SETTINGS) -> CounterState:
    return evolve(state, value=max(state.value - settings.decrement_step, settings.min_value))


def reset_handler(state: CounterState, event: ResetNumber, settings: CounterSettings = DEFAULT_SETTINGS) -> CounterState:
    return evolve(state, value=settings.clamp(0))


def multiply_handler(state: CounterState, event: MultiplyNumber, settings: CounterSettings = DEFAULT_SETTINGS) -> CounterState:
    return evolve(state, value=settings.clamp(state.value * settings.multiplier))


def divide_handler(state: CounterState, event: DivideNumber, settings: CounterSettings = DEFAULT_SETTINGS) -> CounterState:
    return evolve(state, value=settings.clamp(truncate_divide(state.value, settings.divisor)))


def set_value_handler(state: CounterState, event: SetValue, settings: CounterSettings = DEFAULT_SETTINGS) -> CounterState:
    return evolve(state, value=settings.clamp(event.value))


# ====== Registry ======
def create_counter_registry(settings: Optional[CounterSettings] = None) -> HandlerRegistry:
    """
    建立計數器的處理器註冊表。

    Args:
        settings: 邊界與步進設定，預設為 MIN=-50、MAX=100。
    """
    settings = settings or DEFAULT_SETTINGS

    def bind(fn):
        return functools.partial(fn, settings=settings)

    return create_registry(
        on(IncreaseNumber, bind(increase_handler)),
        on(DecreaseNumber, bind(decrease_handler)),
        on(ResetNumber, bind(reset_handler)),
        on(MultiplyNumber, bind(multiply_handler)),
        on(DivideNumber, bind(divide_handler)),
        on(SetValue, bind(set_value_handler)),
    )
