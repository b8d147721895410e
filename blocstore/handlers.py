"""
事件處理器註冊表 (Handler Registry)。

每個 Store 實例在建構時拿到一份註冊表，依事件標籤找到處理器。處理器有兩種:

- 純 reducer: ``def handler(state, event) -> new_state``，同步且沒有 I/O。
- 非同步處理器: ``async def handler(event, emit) -> None``，可以等待協作者，
  並透過 ``emit(new_state)`` 提交任意數量的狀態。
"""
import inspect
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

from .errors import ConfigurationError
from .events import Event, event_type
from .types import Handler, HandlerMap


def on(event_or_type: Union[type, str], handler: Handler) -> HandlerMap:
    """
    創建一個事件標籤與處理器的映射。

    Args:
        event_or_type: 事件類別或事件標籤字串。
        handler: 處理該事件的函式。

    Returns:
        一個包含 {event_type: handler} 的字典。
    """
    return {event_type(event_or_type): handler}


class HandlerRegistry(Mapping[str, Handler]):
    """
    事件標籤到處理器的唯讀映射，另外記錄每個處理器是否為協程函式。
    """

    def __init__(self, handlers: Optional[Dict[str, Handler]] = None):
        self._handlers: Dict[str, Handler] = {}
        self._async: Dict[str, bool] = {}
        for tag, fn in (handlers or {}).items():
            self._add(tag, fn)

    def _add(self, tag: str, handler: Handler) -> None:
        if tag in self._handlers:
            raise ConfigurationError(
                f"事件 {tag} 已經註冊過處理器", component="HandlerRegistry", config_key=tag
            )
        if not callable(handler):
            raise ConfigurationError(
                f"事件 {tag} 的處理器不可呼叫: {handler!r}", component="HandlerRegistry", config_key=tag
            )
        self._handlers[tag] = handler
        self._async[tag] = inspect.iscoroutinefunction(handler)

    def register(self, event_or_type: Union[type, str]) -> Callable[[Handler], Handler]:
        """
        裝飾器：註冊特定事件的處理函數。

        用法:
            ```python
            registry = HandlerRegistry()

            @registry.register(IncreaseNumber)
            def handle_increase(state, event):
                return evolve(state, value=state.value + 1)
            ```
        """
        def decorator(fn: Handler) -> Handler:
            self._add(event_type(event_or_type), fn)
            return fn
        return decorator

    def resolve(self, event: Union[Event, str]) -> Optional[Handler]:
        """依事件標籤找到處理器，沒有註冊時返回 None。"""
        return self._handlers.get(event_type(event))

    def is_async(self, event: Union[Event, str]) -> bool:
        return self._async.get(event_type(event), False)

    def has_handler(self, event: Union[Event, str]) -> bool:
        return event_type(event) in self._handlers

    def __getitem__(self, tag: str) -> Handler:
        return self._handlers[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"HandlerRegistry({sorted(self._handlers)})"


def create_registry(*handlers: Union[HandlerMap, Tuple[Any, Handler]]) -> HandlerRegistry:
    """
    創建處理器註冊表。

    Args:
        *handlers: 使用 on 函式創建的映射，或 (event, handler_fn) 元組。

    Returns:
        HandlerRegistry 實例。

    範例:
        >>> registry = create_registry(
        ...     on(IncreaseNumber, increase_handler),
        ...     on(LoginRequested, login_handler),
        ... )
    """
    registry = HandlerRegistry()
    for handler in handlers:
        if isinstance(handler, tuple) and len(handler) == 2:
            # 如果 handler 是元組，則解構為事件與處理函式
            event, fn = handler
            registry._add(event_type(event), fn)
        else:
            for tag, fn in handler.items():
                registry._add(tag, fn)
    return registry
