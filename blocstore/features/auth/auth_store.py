from typing import Any, Iterable, Optional

from blocstore.config import StoreConfig
from blocstore.store import Store, create_store

from .auth_events import CheckRequested
from .auth_handlers import create_auth_registry
from .auth_repository import AuthRepository, SessionStorage
from .auth_states import AuthAuthenticating, AuthState, AuthUnauthenticated


def create_auth_store(
    repository: AuthRepository,
    storage: SessionStorage,
    *,
    check_on_start: bool = False,
    config: Optional[StoreConfig] = None,
    middleware: Iterable[Any] = (),
) -> Store[AuthState]:
    """
    創建驗證 Store。

    Args:
        repository: 登入與註冊的協作者。
        storage: 持久化 session 的協作者。
        check_on_start: 為 True 時初始狀態為 AuthAuthenticating，並立即 dispatch
            CheckRequested 探測持久化的 session；此時必須在執行中的事件迴圈內呼叫。
        config: Store 配置，驗證規則取自 config.auth。
        middleware: 額外的中介軟體。
    """
    config = config or StoreConfig()
    initial_state = AuthAuthenticating() if check_on_start else AuthUnauthenticated()
    store = create_store(
        initial_state,
        create_auth_registry(repository, storage, config.auth),
        name="auth",
        middleware=middleware,
        config=config,
    )
    if check_on_start:
        store.dispatch(CheckRequested())
    return store
