"""Per-client daily request limiting.

Counts live in a small in-process key → count store with expiry.  The store
is shared by every request the app serves, so access is lock-guarded (sync
FastAPI endpoints run in a thread pool).
"""

from __future__ import annotations

import logging
import math
import threading
import time
from datetime import datetime, timedelta, timezone

from faqproxy.errors import RateLimitExceededError

logger = logging.getLogger(__name__)

DAY_SECONDS = 86400


class MemoryCounterStore:
    """Thread-safe counters that expire after a per-key TTL."""

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._counts: dict[str, tuple[int, float]] = {}

    def get(self, key: str) -> int:
        with self._lock:
            return self._live_count(key)

    def increment(self, key: str, ttl: float) -> int:
        """Add one to *key* and return the new count.

        The expiry is set when the key is first created and not extended.
        """
        with self._lock:
            count = self._live_count(key)
            expires_at = self._counts[key][1] if count else self._clock() + ttl
            self._counts[key] = (count + 1, expires_at)
            return count + 1

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()

    def _live_count(self, key: str) -> int:
        entry = self._counts.get(key)
        if entry is None:
            return 0
        count, expires_at = entry
        if self._clock() >= expires_at:
            del self._counts[key]
            return 0
        return count


def _next_midnight(now: datetime) -> datetime:
    return (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)


class DailyRateLimiter:
    """Allow each client a fixed number of extractions per UTC day."""

    def __init__(self, store: MemoryCounterStore, limit: int) -> None:
        self.store = store
        self.limit = limit

    @staticmethod
    def key_for(client_ip: str, now: datetime) -> str:
        return f"faq-proxy:{client_ip}:{now.strftime('%Y-%m-%d')}"

    def hit(self, client_ip: str, now: datetime | None = None) -> int:
        """Record one request for *client_ip* and return the remaining quota.

        Raises:
            RateLimitExceededError: If the client already used today's quota.
        """
        now = now or datetime.now(timezone.utc)
        key = self.key_for(client_ip, now)

        used = self.store.increment(key, ttl=DAY_SECONDS)
        if used > self.limit:
            logger.warning("Daily limit reached for %s (%d requests)", client_ip, used - 1)
            reset = _next_midnight(now)
            raise RateLimitExceededError(
                limit=self.limit,
                used=used - 1,
                reset_time=int(reset.timestamp() * 1000),
                reset_in=math.ceil((reset - now).total_seconds() / 60),
            )
        return max(0, self.limit - used)
