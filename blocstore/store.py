import asyncio
import contextlib
import inspect
import logging
from operator import itemgetter
from typing import Any, Callable, Generic, Iterable, List, Optional

import reactivex
from reactivex import Observable, Subject, operators as ops
from reactivex.abc import DisposableBase
from reactivex.disposable import Disposable

from .config import StoreConfig
from .errors import ConfigurationError, HandlerError, StoreError
from .events import describe, event_type
from .handlers import HandlerRegistry, create_registry
from .middleware import LoggerMiddleware, PerformanceMonitorMiddleware
from .types import Middleware, S, Subscriber

logger = logging.getLogger(__name__)


class Emitter(Generic[S]):
    """
    交給非同步處理器的提交函式。

    處理器結束、或 Store 已關閉之後，emit 會被靜默忽略，
    因此延遲返回的協作者結果不會再回呼到已關閉的 Store。
    """

    def __init__(self, store: "Store[S]", event: Any):
        self._store = store
        self._event = event
        self._done = False

    @property
    def state(self) -> S:
        """目前已提交的狀態。"""
        return self._store.state

    @property
    def is_done(self) -> bool:
        return self._done or self._store.is_closed

    def __call__(self, state: S) -> None:
        if self.is_done:
            logger.debug(
                "[%s] 忽略 %s 在結束後的 emit: %r", self._store.name, event_type(self._event), state
            )
            return
        self._store._commit(state, self._event)

    def _complete(self) -> None:
        self._done = True


class Store(Generic[S]):
    """
    狀態容器，依序處理事件並通知訂閱者狀態變更。

    每個 Store 有自己的事件佇列與一個 worker task：事件嚴格依照到達順序
    (FIFO) 一次處理一個，前一個處理器完成 (或被取消) 之前，下一個處理器不會開始。
    dispatch 本身從不阻塞呼叫者。
    """

    def __init__(
        self,
        initial_state: S,
        registry: HandlerRegistry,
        *,
        name: Optional[str] = None,
        middleware: Iterable[Any] = (),
        config: Optional[StoreConfig] = None,
    ):
        """
        初始化 Store。

        Args:
            initial_state: 明確給定的初始狀態。
            registry: 事件處理器註冊表，建構後不再變動。
            name: 用於日誌的名稱，預設為初始狀態的類別名稱。
            middleware: 中介軟體，可以是類或實例。
            config: Store 配置，預設使用 StoreConfig()。
        """
        self._config = config or StoreConfig()
        self._name = name or type(initial_state).__name__
        self._registry = registry if isinstance(registry, HandlerRegistry) else create_registry(registry)
        # 初始化內部狀態
        self._state: S = initial_state
        # 狀態流，發送 (old_state, new_state) 元組
        self._state_subject: Subject = Subject()
        self._queue: "asyncio.Queue[Any]" = asyncio.Queue()
        self._worker: Optional["asyncio.Task[None]"] = None
        self._current_emitter: Optional[Emitter[S]] = None
        self._closed = False
        self._middleware: List[Middleware] = []
        self.apply_middleware(*self._default_middleware(), *middleware)

    def _default_middleware(self) -> List[Any]:
        defaults: List[Any] = []
        if self._config.log_transitions:
            defaults.append(LoggerMiddleware())
        if self._config.slow_handler_ms is not None:
            defaults.append(PerformanceMonitorMiddleware(threshold_ms=self._config.slow_handler_ms))
        return defaults

    # ———— 屬性 ————

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> S:
        """當前狀態的快照。"""
        return self._state

    def current(self) -> S:
        """同步查詢當前狀態。"""
        return self._state

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    @property
    def states(self) -> Observable:
        """每次提交後發送新狀態的可觀察對象。"""
        return self._transitions().pipe(ops.map(itemgetter(1)))

    def _transitions(self) -> Observable:
        # 在訂閱時才檢查；Store 關閉後的訂閱只會收到 on_completed
        def factory(scheduler: Any) -> Observable:
            if self._closed:
                logger.warning("[%s] Store 已關閉，觀察者不會收到任何狀態", self._name)
                return reactivex.empty()
            return self._state_subject

        return reactivex.defer(factory)

    # ———— 中介軟體 ————

    def apply_middleware(self, *middlewares: Any) -> None:
        """
        註冊中介軟體。

        Args:
            *middlewares: 要註冊的中介軟體，可以是類或實例。
        """
        for m in middlewares:
            inst = m() if inspect.isclass(m) else m
            if not hasattr(inst, "action_context"):
                raise ConfigurationError(
                    f"中介軟體 {type(inst).__name__} 必須提供 action_context",
                    component="Store",
                    config_key="middleware",
                )
            self._middleware.append(inst)

    def _teardown_middleware(self) -> None:
        for mw in self._middleware:
            try:
                mw.teardown()
            except Exception:
                logger.exception("[%s] 中介軟體 %s 清理失敗", self._name, type(mw).__name__)

    # ———— dispatch 與事件處理 ————

    def dispatch(self, event: Any) -> Any:
        """
        將事件加入佇列，從不阻塞呼叫者。

        Store 關閉後的 dispatch 只記錄警告，不會拋出異常。

        Args:
            event: 要分發的事件。

        Returns:
            傳入的事件。

        Raises:
            StoreError: 在沒有執行中的事件迴圈時呼叫。
        """
        if self._closed:
            logger.warning("[%s] Store 已關閉，丟棄事件 %s", self._name, describe(event))
            return event
        self._ensure_worker()
        self._queue.put_nowait(event)
        return event

    def _ensure_worker(self) -> None:
        if self._worker is not None and not self._worker.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise StoreError(
                "dispatch 必須在執行中的事件迴圈內呼叫", operation="dispatch", store=self._name
            ) from None
        self._worker = loop.create_task(self._run(), name=f"blocstore:{self._name}")

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._handle(event)
            finally:
                self._queue.task_done()

    async def _handle(self, event: Any) -> None:
        handler = self._registry.resolve(event)
        if handler is None:
            logger.error("[%s] 事件 %s 沒有註冊處理器，已忽略", self._name, describe(event))
            return

        prev_state = self._state
        try:
            with contextlib.ExitStack() as stack:
                # 每個中介軟體的 action_context 依註冊順序由外而內包住處理器
                contexts = [
                    stack.enter_context(mw.action_context(event, prev_state)) for mw in self._middleware
                ]
                await self._run_handler(handler, event)
                for context in contexts:
                    context["next_state"] = self._state
        except HandlerError as err:
            logger.error("[%s] %s\n%s", self._name, err, err.traceback)
        except Exception:
            logger.exception("[%s] 中介軟體處理 %s 時發生錯誤", self._name, event_type(event))

    async def _run_handler(self, handler: Callable[..., Any], event: Any) -> None:
        emitter: Emitter[S] = Emitter(self, event)
        self._current_emitter = emitter
        try:
            if self._registry.is_async(event):
                await handler(event, emitter)
            else:
                emitter(handler(self._state, event))
        except Exception as err:
            raise HandlerError(
                f"處理事件時發生未預期錯誤: {err!r}", event_type=event_type(event), store_name=self._name
            ) from err
        finally:
            emitter._complete()
            self._current_emitter = None

    def _commit(self, new_state: S, event: Any) -> None:
        if self._closed:
            return
        if new_state == self._state:
            # 相同的狀態不提交，也不通知訂閱者
            logger.debug("[%s] %s 沒有改變狀態", self._name, event_type(event))
            return
        old_state = self._state
        self._state = new_state
        self._state_subject.on_next((old_state, new_state))

    async def join(self) -> None:
        """等待所有已接受的事件處理完畢。"""
        await self._queue.join()

    # ———— 訂閱 ————

    def subscribe(self, callback: Subscriber) -> DisposableBase:
        """
        訂閱狀態變更。

        Args:
            callback: 每次提交新狀態時以 (new_state) 呼叫，依提交順序。

        Returns:
            可釋放的訂閱句柄，呼叫 dispose() 取消訂閱。
        """
        if self._closed:
            logger.warning("[%s] Store 已關閉，訂閱不會收到任何狀態", self._name)
            return Disposable()

        def on_next(state: S) -> None:
            try:
                callback(state)
            except Exception:
                logger.exception("[%s] 訂閱者回呼發生錯誤", self._name)

        return self.states.subscribe(on_next=on_next)

    def select(self, selector: Callable[[S], Any]) -> Observable:
        """
        選擇狀態的一部分進行觀察。

        Args:
            selector: 一個函數，接收整個狀態並返回希望觀察的部分。

        Returns:
            一個可觀察對象，發送 (selector(old_state), selector(new_state))，
            只在選擇的部分改變時發出。
        """
        return self._transitions().pipe(
            ops.map(lambda pair: (selector(pair[0]), selector(pair[1]))),
            ops.filter(lambda pair: pair[0] != pair[1]),
        )

    # ———— 生命週期 ————

    def close(self) -> None:
        """
        關閉 Store：取消進行中的處理器、丟棄尚未處理的事件、釋放訂閱者。

        可重複呼叫。
        """
        if self._closed:
            return
        self._closed = True
        if self._current_emitter is not None:
            self._current_emitter._complete()
        if self._worker is not None and not self._worker.done():
            self._worker.cancel()
        dropped = 0
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            self._queue.task_done()
            dropped += 1
        self._teardown_middleware()
        self._state_subject.on_completed()
        self._state_subject.dispose()
        logger.debug("[%s] Store 已關閉，丟棄 %d 個未處理事件", self._name, dropped)

    async def wait_closed(self) -> None:
        """等待 worker task 結束。"""
        if self._worker is not None:
            await asyncio.gather(self._worker, return_exceptions=True)

    async def __aenter__(self) -> "Store[S]":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
        await self.wait_closed()

    def __repr__(self) -> str:
        return f"Store(name={self._name!r}, state={self._state!r}, closed={self._closed})"


def create_store(
    initial_state: S,
    registry: HandlerRegistry,
    *,
    name: Optional[str] = None,
    middleware: Iterable[Any] = (),
    config: Optional[StoreConfig] = None,
) -> Store[S]:
    """
    創建一個新的 Store 實例。

    Returns:
        Store: 新創建的 Store 實例。
    """
    return Store(initial_state, registry, name=name, middleware=middleware, config=config)
