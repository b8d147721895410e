"""
驗證相關的領域模型。

User 的解析接受後端常見的多種欄位名稱 (``_id``、``username``、
``profile_image_url``、``createdAt`` ...)，日期無法解析時 created_at 退回現在時間。
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


class User(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    email: str = ""
    name: str = Field(default="", validation_alias=AliasChoices("name", "username"))
    avatar: Optional[str] = Field(default=None, validation_alias=AliasChoices("avatar", "profile_image_url"))
    created_at: datetime = Field(
        default_factory=datetime.now,
        validation_alias=AliasChoices("created_at", "createdAt", "created"),
    )
    updated_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("updated_at", "updatedAt", "updated")
    )
    auth_provider: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("auth_provider", "authProvider")
    )
    gender: Optional[str] = None
    age: Optional[str] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at_or_now(cls, value: Any) -> datetime:
        return _parse_datetime(value) or datetime.now()

    @field_validator("updated_at", mode="before")
    @classmethod
    def _lenient_updated_at(cls, value: Any) -> Optional[datetime]:
        return _parse_datetime(value)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "User":
        return cls.model_validate(data)

    def to_json(self) -> Dict[str, Any]:
        """轉為持久化用的 JSON 字典，同時寫入 avatar 與 profile_image_url。"""
        data = self.model_dump(mode="json")
        data["profile_image_url"] = self.avatar
        return data


class AuthSession(BaseModel):
    """AuthRepository 登入或註冊成功時的回傳值。"""

    model_config = ConfigDict(frozen=True)

    user: Optional[User] = None
    token: Optional[str] = None
    message: Optional[str] = None

    def __repr__(self) -> str:
        # 不輸出 token
        return f"AuthSession(user={self.user!r}, has_token={bool(self.token)}, message={self.message!r})"
