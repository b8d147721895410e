import logging
from typing import Any, Dict, Optional

from immutables import Map

from blocstore.immutable_utils import freeze, thaw

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
USER_KEY = "user_data"
LOGGED_IN_KEY = "is_logged_in"


class InMemorySessionStorage:
    """
    SessionStorage 的記憶體實作，供測試與範例使用。

    內容以不可變的 Map 保存，每次寫入都替換整個快照，
    因此 snapshot() 取得的內容不會被之後的寫入影響。
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Map = freeze(initial or {})

    async def save_token(self, token: str) -> bool:
        self._data = self._data.set(TOKEN_KEY, token)
        logger.debug("token 已儲存")
        return True

    async def save_user(self, user_json: Dict[str, Any]) -> bool:
        with self._data.mutate() as mm:
            mm[USER_KEY] = freeze(user_json)
            mm[LOGGED_IN_KEY] = True
            self._data = mm.finish()
        logger.debug("使用者資料已儲存")
        return True

    async def get_persisted_user(self) -> Optional[Dict[str, Any]]:
        user = self._data.get(USER_KEY)
        return thaw(user) if user is not None else None

    async def get_token(self) -> Optional[str]:
        return self._data.get(TOKEN_KEY)

    async def clear(self) -> bool:
        self._data = Map()
        logger.debug("所有 session 資料已清除")
        return True

    def snapshot(self) -> Map:
        return self._data

    @property
    def is_empty(self) -> bool:
        return len(self._data) == 0
