"""
驗證 session 生命週期的非同步處理器。

Store 以 FIFO 串行執行處理器，因此登入、註冊、登出、檢查四個會寫入
持久化 session 的處理器不會同時執行。持久化是盡力而為：寫入失敗只記錄
日誌，不會把成功的登入降級為錯誤。
"""
import logging
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError

from blocstore.config import AuthSettings
from blocstore.failures import AuthFailure, ValidationFailure, classify_failure
from blocstore.handlers import HandlerRegistry, create_registry, on
from blocstore.types import EmitterProtocol

from .auth_events import CheckRequested, LoginRequested, LogoutRequested, RegisterRequested
from .auth_models import AuthSession, User
from .auth_repository import AuthRepository, SessionStorage
from .auth_states import AuthAuthenticated, AuthAuthenticating, AuthError, AuthUnauthenticated
from .auth_validation import validate_credentials, validate_name

logger = logging.getLogger(__name__)


class AuthHandlers:
    def __init__(
        self,
        repository: AuthRepository,
        storage: SessionStorage,
        settings: Optional[AuthSettings] = None,
    ):
        self._repository = repository
        self._storage = storage
        self._settings = settings or AuthSettings()

    async def on_login(self, event: LoginRequested, emit: EmitterProtocol) -> None:
        try:
            validate_credentials(event.email, event.password, self._settings)
        except ValidationFailure as failure:
            logger.info("登入驗證失敗: %s", failure.message)
            emit(AuthError.from_failure(failure))
            return
        logger.info("嘗試登入: %s", event.email)
        await self._authenticate(
            emit, lambda: self._repository.login(event.email, event.password), "Login failed"
        )

    async def on_register(self, event: RegisterRequested, emit: EmitterProtocol) -> None:
        try:
            validate_credentials(event.email, event.password, self._settings)
            validate_name(event.name, self._settings)
        except ValidationFailure as failure:
            logger.info("註冊驗證失敗: %s", failure.message)
            emit(AuthError.from_failure(failure))
            return
        logger.info("嘗試註冊: %s", event.email)
        await self._authenticate(
            emit,
            lambda: self._repository.register(event.email, event.password, event.name),
            "Registration failed",
        )

    async def on_logout(self, event: LogoutRequested, emit: EmitterProtocol) -> None:
        try:
            cleared = await self._storage.clear()
            if cleared is False:
                logger.warning("登出時清除 session 回報失敗")
        except Exception:
            logger.exception("登出時清除 session 發生錯誤，仍然登出")
        emit(AuthUnauthenticated())

    async def on_check(self, event: CheckRequested, emit: EmitterProtocol) -> None:
        try:
            data = await self._storage.get_persisted_user()
        except Exception:
            logger.exception("讀取持久化 session 失敗，視為未登入")
            data = None

        if not data:
            emit(AuthUnauthenticated())
            return
        try:
            user = User.from_json(data)
        except (ValidationError, TypeError) as err:
            logger.warning("持久化的使用者資料無法解析，視為未登入: %s", err)
            emit(AuthUnauthenticated())
            return
        logger.info("恢復已登入的 session: %s", user.email)
        emit(AuthAuthenticated(user=user))

    async def _authenticate(
        self,
        emit: EmitterProtocol,
        call: Callable[[], Awaitable[AuthSession]],
        prefix: str,
    ) -> None:
        emit(AuthAuthenticating())
        try:
            session = await call()
            if session is None or session.user is None:
                raise AuthFailure(
                    (session.message if session is not None else None)
                    or f"{prefix}: No user data received"
                )
            authenticated = AuthAuthenticated(user=session.user)
        except Exception as err:
            failure = classify_failure(err, fallback=AuthFailure, prefix=prefix)
            logger.warning("%s (%s): %s", prefix, failure.kind.value, failure.message)
            emit(AuthError.from_failure(failure))
            return

        await self._persist(session.token, authenticated.user)
        logger.info("驗證成功: %s", authenticated.user.email)
        emit(authenticated)

    async def _persist(self, token: Optional[str], user: User) -> None:
        if token:
            try:
                if await self._storage.save_token(token) is False:
                    logger.warning("儲存 token 回報失敗")
            except Exception:
                logger.exception("儲存 token 失敗")
        try:
            if await self._storage.save_user(user.to_json()) is False:
                logger.warning("儲存使用者資料回報失敗")
        except Exception:
            logger.exception("儲存使用者資料失敗")


def create_auth_registry(
    repository: AuthRepository,
    storage: SessionStorage,
    settings: Optional[AuthSettings] = None,
) -> HandlerRegistry:
    handlers = AuthHandlers(repository, storage, settings)
    return create_registry(
        on(LoginRequested, handlers.on_login),
        on(RegisterRequested, handlers.on_register),
        on(LogoutRequested, handlers.on_logout),
        on(CheckRequested, handlers.on_check),
    )
