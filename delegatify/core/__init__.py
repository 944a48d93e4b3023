"""Core services: token store, auth flow, playback query, card rendering."""
from delegatify.core.auth_flow import AuthFlow
from delegatify.core.token_store import TokenStore

__all__ = ["AuthFlow", "TokenStore"]
