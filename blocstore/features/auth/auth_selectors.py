from blocstore.store_selectors import create_selector

from .auth_states import AuthAuthenticated, AuthAuthenticating, AuthError

is_authenticated = lambda state: isinstance(state, AuthAuthenticated)
is_authenticating = lambda state: isinstance(state, AuthAuthenticating)
current_user = lambda state: state.user if isinstance(state, AuthAuthenticated) else None
auth_error_message = lambda state: state.message if isinstance(state, AuthError) else None

current_user_email = create_selector(current_user, result_fn=lambda user: user.email if user else None)
