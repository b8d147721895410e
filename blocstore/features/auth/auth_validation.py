import re

from blocstore.config import AuthSettings
from blocstore.failures import ValidationFailure


def is_valid_email(email: str, settings: AuthSettings) -> bool:
    return bool(email) and re.fullmatch(settings.email_pattern, email) is not None


def validate_credentials(email: str, password: str, settings: AuthSettings) -> None:
    """
    在呼叫協作者之前先做本地驗證。

    Raises:
        ValidationFailure: 第一個不符合的規則。
    """
    if not email:
        raise ValidationFailure("Email is required", {"field": "email"})
    if not is_valid_email(email, settings):
        raise ValidationFailure("Invalid email format", {"field": "email"})
    if not password:
        raise ValidationFailure("Password is required", {"field": "password"})
    if len(password) < settings.min_password_length:
        raise ValidationFailure(
            f"Password must be at least {settings.min_password_length} characters", {"field": "password"}
        )


def validate_name(name: str, settings: AuthSettings) -> None:
    if not name or not name.strip():
        raise ValidationFailure("Name is required", {"field": "name"})
    if len(name.strip()) < settings.min_name_length:
        raise ValidationFailure(
            f"Name must be at least {settings.min_name_length} characters", {"field": "name"}
        )
