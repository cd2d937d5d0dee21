"""Lookup cache: expiring key/value store for resolved players.

Keys are bare UUIDs or lowercased usernames. One record is usually
stored under both; the two entries expire independently.

Expiry is checked lazily on every read. A janitor thread can also sweep
expired entries on an interval so unread keys do not linger.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from mcidentity.models import PlayerRecord

logger = logging.getLogger("mcidentity.cache")


class LookupCache:
    """Thread-safe, unbounded, time-expiring cache of PlayerRecords."""

    def __init__(
        self,
        cleanup_interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._cleanup_interval = cleanup_interval
        self._entries: dict[str, tuple[PlayerRecord, float]] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._janitor: threading.Thread | None = None

    def get(self, key: str) -> PlayerRecord | None:
        """Return the live record for key, or None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            record, expires_at = entry
            if self._clock() > expires_at:
                del self._entries[key]
                return None
            return record

    def put(self, key: str, record: PlayerRecord, ttl: float) -> None:
        """Insert or replace key, expiring ttl seconds from now."""
        with self._lock:
            self._entries[key] = (record, self._clock() + ttl)

    def delete_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [k for k, (_, exp) in self._entries.items() if now > exp]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ── Lifecycle ─────────────────────────────────────────────

    @property
    def running(self) -> bool:
        """Whether the background janitor is active."""
        return self._janitor is not None

    def start(self) -> None:
        """Start the background janitor. No-op if already running."""
        if self._janitor is not None or self._cleanup_interval <= 0:
            return
        self._stop.clear()
        self._janitor = threading.Thread(
            target=self._run_janitor, name="mcidentity-cache-janitor", daemon=True
        )
        self._janitor.start()

    def close(self) -> None:
        """Stop the janitor and wait for it to exit."""
        if self._janitor is None:
            return
        self._stop.set()
        self._janitor.join()
        self._janitor = None

    def _run_janitor(self) -> None:
        while not self._stop.wait(self._cleanup_interval):
            removed = self.delete_expired()
            if removed:
                logger.debug("Swept %d expired cache entries", removed)

    def __enter__(self) -> LookupCache:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
