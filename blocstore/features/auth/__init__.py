from .auth_events import AuthEvent, CheckRequested, LoginRequested, LogoutRequested, RegisterRequested
from .auth_handlers import AuthHandlers, create_auth_registry
from .auth_models import AuthSession, User
from .auth_repository import AuthRepository, SessionStorage
from .auth_selectors import (
    auth_error_message,
    current_user,
    current_user_email,
    is_authenticated,
    is_authenticating,
)
from .auth_states import AuthAuthenticated, AuthAuthenticating, AuthError, AuthState, AuthUnauthenticated
from .auth_storage import InMemorySessionStorage
from .auth_store import create_auth_store
from .auth_validation import is_valid_email, validate_credentials, validate_name

__all__ = [
    # Events
    "AuthEvent", "LoginRequested", "RegisterRequested", "LogoutRequested", "CheckRequested",
    # States
    "AuthState", "AuthUnauthenticated", "AuthAuthenticating", "AuthAuthenticated", "AuthError",
    # Models
    "User", "AuthSession",
    # Collaborators
    "AuthRepository", "SessionStorage", "InMemorySessionStorage",
    # Handlers
    "AuthHandlers", "create_auth_registry",
    "is_valid_email", "validate_credentials", "validate_name",
    # Selectors
    "is_authenticated", "is_authenticating", "current_user", "current_user_email",
    "auth_error_message",
    # Store
    "create_auth_store",
]
