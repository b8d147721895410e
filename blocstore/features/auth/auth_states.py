"""
驗證 Store 的狀態。

    Unauthenticated → Authenticating → {Authenticated | Error}
    Authenticated → (logout) → Unauthenticated

Session (使用者與 token) 只存在於 AuthAuthenticated 之中，並以副作用的方式
寫入 SessionStorage，從不是 Store 自己的欄位。
"""
from blocstore.failures import Failure, FailureKind
from blocstore.states import State

from .auth_models import User


class AuthState(State):
    """所有驗證狀態的基礎類。"""


class AuthUnauthenticated(AuthState):
    pass


class AuthAuthenticating(AuthState):
    pass


class AuthAuthenticated(AuthState):
    user: User


class AuthError(AuthState):
    message: str
    kind: FailureKind = FailureKind.AUTH

    @classmethod
    def from_failure(cls, failure: Failure) -> "AuthError":
        return cls(message=failure.message, kind=failure.kind)
