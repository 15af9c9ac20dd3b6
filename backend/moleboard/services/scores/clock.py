import time
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> int:
        ...


class SystemClock:
    """Wall-clock time in epoch milliseconds."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


def day_for(now_ms: int) -> str:
    """UTC calendar date (YYYY-MM-DD) containing the given instant."""
    return datetime.fromtimestamp(now_ms / 1000.0, tz=timezone.utc).strftime('%Y-%m-%d')
