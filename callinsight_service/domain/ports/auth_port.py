from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class Identity:
    user_id: str
    display_name: str = ""


@dataclass(frozen=True)
class AuthState:
    user: Optional[Identity]
    is_loading: bool = False


AuthListener = Callable[[AuthState], None]


class AuthPort(ABC):
    @abstractmethod
    def on_auth_state_changed(self, callback: AuthListener) -> Callable[[], None]:
        """Deliver the current state now and every change after; returns an unsubscribe function."""
        raise NotImplementedError

    @abstractmethod
    async def login(self, credentials: str) -> AuthState:
        raise NotImplementedError

    @abstractmethod
    async def logout(self) -> AuthState:
        raise NotImplementedError
