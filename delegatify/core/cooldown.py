"""Per-user cooldown so /current cannot be spammed."""
import threading
import time
from typing import Callable, Dict

from delegatify.config import CURRENT_COOLDOWN_SEC


class UserCooldown:
    def __init__(
        self,
        cooldown_sec: float = CURRENT_COOLDOWN_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cooldown_sec = cooldown_sec
        self._clock = clock
        self._last_use: Dict[str, float] = {}
        self._lock = threading.Lock()

    def remaining(self, user_id: str) -> float:
        """Seconds until user_id may run the command again (0 if allowed now)."""
        with self._lock:
            last = self._last_use.get(user_id)
        if last is None:
            return 0.0
        return max(0.0, self._cooldown_sec - (self._clock() - last))

    def try_acquire(self, user_id: str) -> bool:
        """Record a use and return True, or return False if still cooling down."""
        with self._lock:
            now = self._clock()
            last = self._last_use.get(user_id)
            if last is not None and now - last < self._cooldown_sec:
                return False
            self._last_use[user_id] = now
            return True
