"""
blocstore 的錯誤定義模組。

這裡的異常代表「使用方式錯誤」，例如在沒有事件迴圈時 dispatch、
重複註冊同一個事件處理器。業務層的失敗請見 failures 模組，
它們不會越過 Store 的邊界拋出。
"""
import traceback
from typing import Any, Dict, Optional


class BlocStoreError(Exception):
    """所有 blocstore 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.traceback = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """
        將錯誤轉換為可序列化的字典，方便記錄日誌。

        Returns:
            包含錯誤類型、訊息與細節的字典。
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        if self.details:
            details = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details})"
        return self.message


class StoreError(BlocStoreError):
    """與 Store 生命週期或 dispatch 相關的錯誤。"""

    def __init__(self, message: str, operation: str, **kwargs: Any) -> None:
        super().__init__(message, {"operation": operation, **kwargs})
        self.operation = operation


class HandlerError(BlocStoreError):
    """事件處理器執行時拋出的未預期異常，由 Store 包裝後交給中介軟體。"""

    def __init__(self, message: str, event_type: str, store_name: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, {"event_type": event_type, "store": store_name, **kwargs})
        self.event_type = event_type
        self.store_name = store_name


class ConfigurationError(BlocStoreError):
    """配置相關的錯誤。"""

    def __init__(self, message: str, component: str, config_key: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, {"component": component, "config_key": config_key, **kwargs})
        self.component = component
        self.config_key = config_key
