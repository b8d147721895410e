from typing import Any, Iterable, Optional

from blocstore.config import StoreConfig
from blocstore.store import Store, create_store

from .counter_handlers import create_counter_registry
from .counter_states import CounterState


def create_counter_store(
    initial_value: int = 0,
    *,
    config: Optional[StoreConfig] = None,
    middleware: Iterable[Any] = (),
) -> Store[CounterState]:
    """
    創建計數器 Store。

    Args:
        initial_value: 初始值，會先夾在設定的邊界內。
        config: Store 配置，計數器邊界取自 config.counter。
        middleware: 額外的中介軟體。
    """
    config = config or StoreConfig()
    initial_state = CounterState(value=config.counter.clamp(initial_value))
    return create_store(
        initial_state,
        create_counter_registry(config.counter),
        name="counter",
        middleware=middleware,
        config=config,
    )
