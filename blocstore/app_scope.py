"""
應用程式範圍 (AppScope)。

驗證 Store 是唯一允許存活整個應用程式生命週期的 Store。它不是隱含的全域變數，
而是由 AppScope 在啟動時明確建立、以參考傳給需要的地方，並在結束時關閉。

用法:
    ```python
    async with AppScope(auth_repository, session_storage) as scope:
        scope.auth.dispatch(LoginRequested(email=..., password=...))
        counter = scope.create_counter_store()
    ```
"""
import logging
from typing import Any, Optional

from .config import StoreConfig
from .errors import StoreError
from .features.auth import AuthRepository, AuthState, SessionStorage, create_auth_store
from .features.counter import CounterState, create_counter_store
from .features.dashboard import DashboardRepository, DashboardState, create_dashboard_store
from .logging_config import configure_logging
from .store import Store

logger = logging.getLogger(__name__)


class AppScope:
    def __init__(
        self,
        auth_repository: AuthRepository,
        session_storage: SessionStorage,
        config: Optional[StoreConfig] = None,
        *,
        check_session_on_start: bool = True,
        configure_logs: bool = False,
    ):
        """
        Args:
            auth_repository: 登入與註冊的協作者。
            session_storage: 持久化 session 的協作者。
            config: 所有 Store 共用的配置。
            check_session_on_start: 啟動時是否探測持久化的 session。
            configure_logs: 啟動時是否依 config.log_level 安裝主控台日誌。
        """
        self._auth_repository = auth_repository
        self._session_storage = session_storage
        self._config = config or StoreConfig()
        self._check_on_start = check_session_on_start
        self._configure_logs = configure_logs
        self._auth: Optional[Store[AuthState]] = None
        self._shut_down = False

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def is_running(self) -> bool:
        return self._auth is not None and not self._auth.is_closed

    @property
    def auth(self) -> Store[AuthState]:
        """應用程式層級的驗證 Store；在 start 之前或 shutdown 之後存取會拋出 StoreError。"""
        if self._auth is None or self._auth.is_closed:
            raise StoreError("AppScope 尚未啟動或已經關閉", operation="auth")
        return self._auth

    async def start(self) -> "AppScope":
        """建立驗證 Store。必須在執行中的事件迴圈內呼叫。"""
        if self._shut_down:
            raise StoreError("AppScope 已經關閉，不能重新啟動", operation="start")
        if self._auth is not None:
            return self
        if self._configure_logs:
            configure_logging(self._config.log_level)
        self._auth = create_auth_store(
            self._auth_repository,
            self._session_storage,
            check_on_start=self._check_on_start,
            config=self._config,
        )
        logger.info("AppScope 已啟動")
        return self

    async def shutdown(self) -> None:
        """關閉驗證 Store，可重複呼叫。"""
        self._shut_down = True
        if self._auth is None:
            return
        self._auth.close()
        await self._auth.wait_closed()
        logger.info("AppScope 已關閉")

    # ———— feature Store 工廠 ————
    # 這些 Store 由呼叫者擁有，需自行在 feature 結束時 close。

    def create_counter_store(self, initial_value: int = 0, **kwargs: Any) -> Store[CounterState]:
        return create_counter_store(initial_value, config=self._config, **kwargs)

    def create_dashboard_store(self, repository: DashboardRepository, **kwargs: Any) -> Store[DashboardState]:
        return create_dashboard_store(repository, config=self._config, **kwargs)

    async def __aenter__(self) -> "AppScope":
        return await self.start()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.shutdown()
