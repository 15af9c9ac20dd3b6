import threading
from typing import Dict, Optional, Protocol


class RateLimitStore(Protocol):
    def try_acquire(self, key: str, now_ms: int, cooldown_ms: int) -> bool:
        ...

    def last_seen(self, key: str) -> Optional[int]:
        ...

    def reset(self) -> None:
        ...


class InMemoryRateLimitStore:
    """Per-key cooldown timestamps held in process memory.

    try_acquire checks and records under one lock, so two concurrent attempts
    for the same key can never both pass. Timestamps only move forward because
    a new one is stored only when it is at least cooldown_ms past the old one.
    Entries are lost on restart.
    """

    def __init__(self):
        self._last: Dict[str, int] = {}
        self._lock = threading.Lock()

    def try_acquire(self, key: str, now_ms: int, cooldown_ms: int) -> bool:
        with self._lock:
            last = self._last.get(key, 0)
            if now_ms - last < cooldown_ms:
                return False
            self._last[key] = now_ms
            return True

    def last_seen(self, key: str) -> Optional[int]:
        with self._lock:
            return self._last.get(key)

    def reset(self) -> None:
        with self._lock:
            self._last.clear()
