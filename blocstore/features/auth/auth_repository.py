"""
驗證 Store 的協作者介面。

實作位於核心之外 (HTTP client、裝置上的安全儲存)。失敗以拋出 Failure
(或任意異常) 的方式回報，由處理器分類。
"""
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from .auth_models import AuthSession


@runtime_checkable
class AuthRepository(Protocol):
    async def login(self, email: str, password: str) -> AuthSession:
        """以 email 與密碼登入，返回使用者與 token。"""
        ...

    async def register(self, email: str, password: str, name: str) -> AuthSession:
        """註冊新使用者，返回使用者與 token。"""
        ...


@runtime_checkable
class SessionStorage(Protocol):
    """持久化的 session，登入、註冊、登出、檢查四個處理器共用。"""

    async def save_token(self, token: str) -> bool: ...

    async def save_user(self, user_json: Dict[str, Any]) -> bool: ...

    async def get_persisted_user(self) -> Optional[Dict[str, Any]]: ...

    async def clear(self) -> bool: ...
