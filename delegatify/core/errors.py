"""Error types raised by the core and translated by the API layer."""


class DelegatifyError(Exception):
    """Base class for errors surfaced to the chat user."""


class ConfigError(DelegatifyError):
    """Spotify application credentials are missing or invalid."""


class AuthExchangeError(DelegatifyError):
    """Spotify rejected the authorization code."""


class DismissedInput(DelegatifyError):
    """The user closed the code form without submitting a usable code."""


class QueryError(DelegatifyError):
    """Fetching playback from Spotify failed."""


class ChatError(DelegatifyError):
    """The chat platform could not deliver a message or open a form."""
