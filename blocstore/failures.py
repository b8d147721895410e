"""
共用的失敗分類 (failure taxonomy)。

各個 feature 的處理器只捕捉自己能分類的失敗，其餘一律包裝成該 feature
的通用失敗種類，並保留原始訊息以便診斷。失敗最後會變成 Error 狀態，
從不越過 Store 的邊界重新拋出。
"""
import asyncio
import enum
from typing import Any, Dict, Optional, Type

from .errors import BlocStoreError


class FailureKind(str, enum.Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    SERVER = "server"
    AUTH = "auth"


class Failure(BlocStoreError):
    """
    已分類的失敗。

    協作者 (repository、storage) 以拋出 Failure 的方式回報錯誤，
    處理器將其轉為 Error 狀態。
    """

    kind: FailureKind = FailureKind.SERVER

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)

    @property
    def user_message(self) -> str:
        """給使用者看的友善訊息。"""
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["kind"] = self.kind.value
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Failure):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ValidationFailure(Failure):
    """本地驗證失敗，從不會呼叫到協作者。"""

    kind = FailureKind.VALIDATION

    @property
    def user_message(self) -> str:
        return f"Invalid input: {self.message}"


class NetworkFailure(Failure):
    """協作者無法連線或逾時。"""

    kind = FailureKind.NETWORK

    @property
    def user_message(self) -> str:
        return "Network error. Please check your connection and try again."


class ServerFailure(Failure):
    """協作者可連線，但回傳了應用層錯誤。"""

    kind = FailureKind.SERVER

    @property
    def user_message(self) -> str:
        return "Server error. Please try again later."


class AuthFailure(Failure):
    """憑證被拒絕，或伺服器回應格式錯誤 (例如登入成功卻沒有使用者資料)。"""

    kind = FailureKind.AUTH

    @property
    def user_message(self) -> str:
        return "Authentication failed. Please check your credentials."


_NETWORK_ERRORS = (ConnectionError, TimeoutError, asyncio.TimeoutError)


def classify_failure(
    error: BaseException,
    fallback: Type[Failure] = ServerFailure,
    prefix: Optional[str] = None,
) -> Failure:
    """
    將任意異常分類為 Failure。

    Args:
        error: 處理器捕捉到的異常。
        fallback: 無法分類時使用的通用失敗種類。
        prefix: 包裝未分類錯誤時加在訊息前面的文字。

    Returns:
        已分類的 Failure；若 error 本身就是 Failure 則原樣返回。
    """
    if isinstance(error, Failure):
        return error
    text = str(error) or error.__class__.__name__
    if isinstance(error, _NETWORK_ERRORS):
        return NetworkFailure(f"Network error: {text}", {"cause": error.__class__.__name__})
    message = f"{prefix}: {text}" if prefix else text
    return fallback(message, {"cause": error.__class__.__name__})
