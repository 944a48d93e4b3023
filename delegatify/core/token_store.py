"""Holds the single authenticated Spotify client shared by all commands."""
import logging
import threading
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from spotipy import Spotify

logger = logging.getLogger(__name__)


class TokenStore:
    """At most one live session; replace() swaps it atomically.

    read() never takes the lock: rebinding an attribute is atomic, so a
    reader sees either the previous client or the new one in full.
    """

    def __init__(self) -> None:
        self._client: Optional["Spotify"] = None
        self._lock = threading.Lock()

    def read(self) -> Optional["Spotify"]:
        return self._client

    def replace(self, client: "Spotify") -> None:
        with self._lock:
            if client is self._client:
                return
            self._client = client
        logger.info("Spotify session replaced")

    @property
    def is_authenticated(self) -> bool:
        return self._client is not None
