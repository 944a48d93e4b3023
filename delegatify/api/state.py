"""Shared application state (injected into routes)."""
from delegatify.api.interactions import InteractionRegistry
from delegatify.config import AUTH_TIMEOUT_SEC
from delegatify.core.cooldown import UserCooldown
from delegatify.core.token_store import TokenStore


class AppState:
    def __init__(self) -> None:
        self.token_store = TokenStore()
        self.cooldown = UserCooldown()
        self.interactions = InteractionRegistry()
        self.auth_timeout = AUTH_TIMEOUT_SEC


_state = AppState()


def get_state() -> AppState:
    return _state
