"""
「請求 → 載入中 → 已載入 | 錯誤」的共用處理流程，home、profile、notification 共用。
"""
import logging
from typing import Any, Awaitable, Callable

from blocstore.failures import ServerFailure, classify_failure
from blocstore.types import EmitterProtocol

logger = logging.getLogger(__name__)


async def load_resource(
    emit: EmitterProtocol,
    fetch: Callable[[], Awaitable[Any]],
    *,
    loading: Any,
    loaded: Callable[[Any], Any],
    error: Callable[[str], Any],
    label: str,
) -> None:
    """
    發出 loading 狀態，等待 fetch，然後發出 loaded(result) 或 error(message)。

    Args:
        emit: Store 交給處理器的 emitter。
        fetch: 呼叫協作者的協程工廠。
        loading: 載入中的狀態。
        loaded: 以結果建立已載入狀態。
        error: 以訊息建立錯誤狀態。
        label: 用於日誌與錯誤訊息的名稱，例如 "home items"。
    """
    emit(loading)
    logger.info("%s requested", label)
    try:
        # 結果格式錯誤時建構狀態會失敗，同樣視為載入失敗
        state = loaded(await fetch())
    except Exception as err:
        failure = classify_failure(err, fallback=ServerFailure, prefix=f"Failed to load {label}")
        logger.error("%s failed: %s", label, failure.message)
        emit(error(failure.message))
        return
    logger.info("%s loaded", label)
    emit(state)
