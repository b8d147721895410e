"""
blocstore 的中介軟體定義模組。

中介軟體包住每一個事件的處理過程，在處理器執行前、完成後或出現錯誤時
執行自定義邏輯，用於日誌記錄、除錯歷史、性能監控等。
"""

import contextlib
import datetime
import logging
import time
from typing import Any, Dict, Generator, List, Optional, Tuple

from typing_extensions import TypedDict

from .events import describe, event_type

logger = logging.getLogger(__name__)

class ActionContext(TypedDict, total=False):
    """action_context 產生的上下文；next_state 由 Store 在處理器完成後寫入。"""

    event: Any
    prev_state: Any
    next_state: Any
    error: Optional[Exception]
    timestamp: datetime.datetime


# ———— Base Middleware ————
class BaseMiddleware:
    """
    基礎中介類，定義所有中介可能實現的鉤子。

    Store 以 ``action_context`` 包住處理器的執行；預設實作會依序呼叫
    on_next、on_complete 與 on_error。
    """

    def on_next(self, event: Any, prev_state: Any) -> None:
        """
        在處理器執行之前調用。

        Args:
            event: 正在處理的事件
            prev_state: 處理之前的狀態
        """

    def on_complete(self, next_state: Any, event: Any) -> None:
        """
        在處理器完成之後調用。

        Args:
            next_state: 處理之後的最新狀態
            event: 剛處理完的事件
        """

    def on_error(self, error: Exception, event: Any) -> None:
        """
        如果處理過程中拋出異常，則調用此鉤子。

        Args:
            error: 拋出的異常
            event: 導致異常的事件
        """

    def teardown(self) -> None:
        """當 Store 關閉時調用，用於清理中間件持有的資源。"""

    @contextlib.contextmanager
    def action_context(self, event: Any, prev_state: Any) -> Generator[ActionContext, None, None]:
        """
        提供一個上下文管理器來處理事件的生命週期。

        Store 在處理器完成後會把最新狀態寫入 ``context['next_state']``。

        Args:
            event: 要處理的事件
            prev_state: 處理前的狀態

        Yields:
            包含上下文數據的字典
        """
        context: ActionContext = {
            "event": event,
            "prev_state": prev_state,
            "next_state": None,
            "error": None,
        }
        self.on_next(event, prev_state)
        try:
            yield context
            if context["next_state"] is not None:
                self.on_complete(context["next_state"], event)
        except Exception as err:
            context["error"] = err
            self.on_error(err, event)
            raise


# ———— LoggerMiddleware ————
class LoggerMiddleware(BaseMiddleware):
    """
    日誌中介，記錄每個事件處理前後的狀態。

    使用場景:
    - 偵錯時需要觀察每次 state 的變化。
    - 確保事件的執行順序正確。
    """

    def __init__(self, level: int = logging.INFO):
        self.level = level

    def on_next(self, event: Any, prev_state: Any) -> None:
        logger.log(self.level, "▶ handling %s", describe(event))
        logger.debug("state before %s: %r", event_type(event), prev_state)

    def on_complete(self, next_state: Any, event: Any) -> None:
        logger.log(self.level, "✔ state after %s: %r", event_type(event), next_state)

    def on_error(self, error: Exception, event: Any) -> None:
        logger.error("✘ error in %s: %s", event_type(event), error)


# ———— DevToolsMiddleware ————
class DevToolsMiddleware(BaseMiddleware):
    """
    記錄每次事件與狀態快照，用於回溯狀態的變化歷史。

    狀態本身不可變，因此直接保存引用即可。
    """

    def __init__(self) -> None:
        self.history: List[Tuple[Any, Any, Any]] = []
        self.errors: List[Tuple[Any, Exception]] = []

    @contextlib.contextmanager
    def action_context(self, event: Any, prev_state: Any) -> Generator[ActionContext, None, None]:
        context: ActionContext = {
            "event": event,
            "prev_state": prev_state,
            "next_state": None,
            "error": None,
            "timestamp": datetime.datetime.now(),
        }
        try:
            yield context
            if context["next_state"] is not None:
                self.history.append((prev_state, event, context["next_state"]))
        except Exception as err:
            context["error"] = err
            self.errors.append((event, err))
            raise

    def get_history(self) -> List[Tuple[Any, Any, Any]]:
        """
        返回整個歷史快照列表。

        Returns:
            歷史快照列表，每項為 (prev_state, event, next_state)
        """
        return list(self.history)

    def teardown(self) -> None:
        self.history.clear()
        self.errors.clear()


# ———— PerformanceMonitorMiddleware ————
class PerformanceMonitorMiddleware(BaseMiddleware):
    """
    性能監控中間件，記錄每個事件處理器花費的時間。

    非同步處理器等待協作者的時間也會計入。
    """

    def __init__(self, threshold_ms: float = 100, log_all: bool = False):
        """
        Args:
            threshold_ms: 性能警告閾值，單位為毫秒，預設為 100 毫秒
            log_all: 是否記錄所有事件的耗時，預設只記錄超過閾值的
        """
        self.threshold_ms = threshold_ms
        self.log_all = log_all
        self.metrics: Dict[str, List[float]] = {}

    @contextlib.contextmanager
    def action_context(self, event: Any, prev_state: Any) -> Generator[ActionContext, None, None]:
        context: ActionContext = {
            "event": event,
            "prev_state": prev_state,
            "next_state": None,
            "error": None,
        }
        tag = event_type(event)
        start_time = time.perf_counter()
        try:
            yield context
        except Exception as err:
            context["error"] = err
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.warning("事件 %s 在 %.2fms 後失敗: %s", tag, elapsed_ms, err)
            raise
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self.metrics.setdefault(tag, []).append(elapsed_ms)
        if elapsed_ms > self.threshold_ms:
            logger.warning("事件 %s 耗時 %.2fms，超過閾值 %sms", tag, elapsed_ms, self.threshold_ms)
        elif self.log_all:
            logger.debug("事件 %s 耗時 %.2fms", tag, elapsed_ms)

    def get_metrics(self) -> Dict[str, Dict[str, float]]:
        """
        獲取性能指標統計信息。
        """
        result = {}
        for tag, times in self.metrics.items():
            if not times:
                continue
            result[tag] = {
                "avg": sum(times) / len(times),
                "max": max(times),
                "min": min(times),
                "count": len(times),
            }
        return result
