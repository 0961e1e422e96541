from __future__ import annotations

from ..domain.errors import AuthenticationRequired
from ..domain.ports.auth_port import AuthPort, AuthState, Identity


class AuthGate:
    """Tracks the latest auth state and blocks pipeline access without a user."""

    def __init__(self, auth: AuthPort):
        self.auth = auth
        self.state = AuthState(user=None, is_loading=True)
        self._unsubscribe = auth.on_auth_state_changed(self._on_change)

    def _on_change(self, state: AuthState) -> None:
        self.state = state

    def require_user(self) -> Identity:
        if self.state.is_loading:
            raise AuthenticationRequired("authentication is still loading")
        if self.state.user is None:
            raise AuthenticationRequired("sign in required")
        return self.state.user

    def close(self) -> None:
        self._unsubscribe()
