"""
blocstore 的配置模組。

配置以 pydantic 模型描述，提供預設值，並可從 ``BLOCSTORE_*`` 環境變數載入。
"""
import os
import re
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError

ENV_PREFIX = "BLOCSTORE_"


class CounterSettings(BaseModel):
    """計數器的邊界與步進值。"""

    model_config = ConfigDict(frozen=True)

    min_value: int = -50
    max_value: int = 100
    increment_step: int = 1
    decrement_step: int = 1
    multiplier: int = 2
    divisor: int = 2

    @model_validator(mode="after")
    def _check_bounds(self) -> "CounterSettings":
        if self.min_value > self.max_value:
            raise ValueError("min_value 不能大於 max_value")
        if self.divisor == 0:
            raise ValueError("divisor 不能為 0")
        return self

    def clamp(self, value: int) -> int:
        return max(self.min_value, min(value, self.max_value))


class AuthSettings(BaseModel):
    """登入與註冊的本地驗證規則。"""

    model_config = ConfigDict(frozen=True)

    email_pattern: str = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    min_password_length: int = Field(default=8, ge=1)
    min_name_length: int = Field(default=2, ge=1)

    @field_validator("email_pattern")
    @classmethod
    def _compile_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as err:
            raise ValueError(f"email_pattern 不是合法的正規表示式: {err}") from err
        return value


class StoreConfig(BaseModel):
    """
    Store 與各 feature 的配置。

    Attributes:
        log_level: configure_logging 使用的日誌等級。
        log_transitions: 為每個 Store 自動加上 LoggerMiddleware。
        slow_handler_ms: 處理器耗時超過此值時記錄警告；None 表示不監控。
        counter: 計數器設定。
        auth: 驗證規則。
    """

    model_config = ConfigDict(frozen=True)

    log_level: str = "WARNING"
    log_transitions: bool = False
    slow_handler_ms: Optional[float] = None
    counter: CounterSettings = CounterSettings()
    auth: AuthSettings = AuthSettings()

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StoreConfig":
        """
        從環境變數載入配置，未設定的欄位使用預設值。

        支援的變數:
            BLOCSTORE_LOG_LEVEL、BLOCSTORE_LOG_TRANSITIONS、BLOCSTORE_SLOW_HANDLER_MS、
            BLOCSTORE_COUNTER_MIN、BLOCSTORE_COUNTER_MAX、BLOCSTORE_PASSWORD_MIN_LENGTH

        Raises:
            ConfigurationError: 環境變數的值不合法。
        """
        env = os.environ if environ is None else environ
        data = {}
        if f"{ENV_PREFIX}LOG_LEVEL" in env:
            data["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"]
        if f"{ENV_PREFIX}LOG_TRANSITIONS" in env:
            data["log_transitions"] = env[f"{ENV_PREFIX}LOG_TRANSITIONS"]
        if f"{ENV_PREFIX}SLOW_HANDLER_MS" in env:
            data["slow_handler_ms"] = env[f"{ENV_PREFIX}SLOW_HANDLER_MS"]

        counter = {}
        if f"{ENV_PREFIX}COUNTER_MIN" in env:
            counter["min_value"] = env[f"{ENV_PREFIX}COUNTER_MIN"]
        if f"{ENV_PREFIX}COUNTER_MAX" in env:
            counter["max_value"] = env[f"{ENV_PREFIX}COUNTER_MAX"]
        if counter:
            data["counter"] = counter

        if f"{ENV_PREFIX}PASSWORD_MIN_LENGTH" in env:
            data["auth"] = {"min_password_length": env[f"{ENV_PREFIX}PASSWORD_MIN_LENGTH"]}

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise ConfigurationError(
                f"無效的環境配置: {err.error_count()} 個錯誤", component="StoreConfig", errors=err.errors()
            ) from err
