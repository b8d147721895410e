from typing import ClassVar

from pydantic import Field

from blocstore.events import Event


class AuthEvent(Event):
    """所有驗證事件的基礎類。"""


class LoginRequested(AuthEvent):
    type: ClassVar[str] = "[Auth] Login Requested"

    email: str
    password: str = Field(repr=False)


class RegisterRequested(AuthEvent):
    type: ClassVar[str] = "[Auth] Register Requested"

    email: str
    password: str = Field(repr=False)
    name: str


class LogoutRequested(AuthEvent):
    type: ClassVar[str] = "[Auth] Logout Requested"


class CheckRequested(AuthEvent):
    """探測持久化的 session 是否存在。"""

    type: ClassVar[str] = "[Auth] Check Requested"
