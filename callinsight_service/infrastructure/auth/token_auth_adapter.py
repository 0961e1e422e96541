from __future__ import annotations

from typing import Callable

from ...domain.ports.auth_port import AuthListener, AuthPort, AuthState, Identity


def parse_tokens(raw: str | None) -> dict[str, Identity]:
    tokens: dict[str, Identity] = {}
    if not raw:
        return tokens
    for part in raw.split(","):
        part = part.strip()
        if not part or ":" not in part:
            continue
        token, user_id = part.split(":", 1)
        token, user_id = token.strip(), user_id.strip()
        if token and user_id:
            tokens[token] = Identity(user_id=user_id, display_name=user_id)
    return tokens


class StaticTokenAuthAdapter(AuthPort):
    """Signs in a single session with one of a fixed set of bearer tokens."""

    def __init__(self, tokens: dict[str, Identity]):
        self.tokens = dict(tokens)
        self._state = AuthState(user=None, is_loading=False)
        self._listeners: list[AuthListener] = []

    def _publish(self, state: AuthState) -> AuthState:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return state

    def on_auth_state_changed(self, callback: AuthListener) -> Callable[[], None]:
        self._listeners.append(callback)
        callback(self._state)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def login(self, credentials: str) -> AuthState:
        self._publish(AuthState(user=None, is_loading=True))
        identity = self.tokens.get((credentials or "").strip())
        return self._publish(AuthState(user=identity, is_loading=False))

    async def logout(self) -> AuthState:
        return self._publish(AuthState(user=None, is_loading=False))
