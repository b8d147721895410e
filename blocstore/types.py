"""
blocstore 共用的類型定義模組。

集中放置泛型參數、處理器簽名與協議，避免模組之間的循環匯入。
"""
from typing import Any, Awaitable, Callable, ContextManager, Dict, Protocol, TypeVar, Union, runtime_checkable

S = TypeVar("S")  # 狀態類型

# 純 reducer：(state, event) -> new_state
ReducerHandler = Callable[[Any, Any], Any]
# 非同步處理器：async (event, emit) -> None
AsyncHandler = Callable[[Any, "EmitterProtocol"], Awaitable[None]]
Handler = Union[ReducerHandler, AsyncHandler]
HandlerMap = Dict[str, Handler]

Subscriber = Callable[[Any], None]
StateSelector = Callable[[Any], Any]


@runtime_checkable
class EmitterProtocol(Protocol):
    """非同步處理器用來提交狀態的介面。"""

    @property
    def state(self) -> Any: ...

    @property
    def is_done(self) -> bool: ...

    def __call__(self, state: Any) -> None: ...


class Middleware(Protocol):
    """中介軟體協議，Store 在每個事件的處理前後呼叫。"""

    def on_next(self, event: Any, prev_state: Any) -> None: ...

    def on_complete(self, next_state: Any, event: Any) -> None: ...

    def on_error(self, error: Exception, event: Any) -> None: ...

    def teardown(self) -> None: ...

    def action_context(self, event: Any, prev_state: Any) -> ContextManager[Any]: ...
