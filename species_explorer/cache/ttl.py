"""TTL cache over a session key-value store.

Entries are stored as JSON envelopes ``{"value", "timestamp", "ttl"}``.
Expiry is lazy: a stale entry is only noticed, and removed, when it is read.
Caching is best-effort, so nothing here raises into the caller.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from ..errors import CacheWriteFailure
from .store import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    timestamp: float
    ttl: float | None = None

    def is_expired(self, now: float) -> bool:
        if self.ttl is None:
            return False
        return now - self.timestamp > self.ttl

    def to_json(self) -> str:
        return json.dumps(
            {"value": self.value, "timestamp": self.timestamp, "ttl": self.ttl},
            ensure_ascii=False,
            separators=(",", ":"),
        )

    @classmethod
    def from_json(cls, raw: str) -> CacheEntry:
        data = json.loads(raw)
        if not isinstance(data, dict) or "value" not in data:
            raise ValueError("not a cache envelope")
        timestamp = data.get("timestamp")
        ttl = data.get("ttl")
        return cls(
            value=data["value"],
            timestamp=float(timestamp) if timestamp is not None else 0.0,
            ttl=float(ttl) if ttl is not None else None,
        )


class TTLCache:
    """Expiring cache on top of a KeyValueStore."""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._clock = clock

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value, or ``default`` on miss, corruption or expiry."""
        raw = self._store.get_item(key)
        if raw is None:
            return default

        try:
            entry = CacheEntry.from_json(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Failed to read cache for key: {key}: {e}")
            return default

        if entry.is_expired(self._clock()):
            logger.debug(f"Cache entry expired: {key}")
            self._store.remove_item(key)
            return default

        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store ``value`` under ``key``; ``ttl=None`` never expires."""
        entry = CacheEntry(value=value, timestamp=self._clock(), ttl=ttl)
        try:
            self._store.set_item(key, entry.to_json())
        except (TypeError, ValueError, CacheWriteFailure) as e:
            logger.warning(f"Failed to set cache for key: {key}: {e}")

    def delete(self, key: str) -> None:
        self._store.remove_item(key)

    def sweep(self) -> int:
        """Remove every expired or unreadable entry. Returns how many went."""
        now = self._clock()
        removed = 0
        for key in self._store.keys():
            raw = self._store.get_item(key)
            if raw is None:
                continue
            try:
                expired = CacheEntry.from_json(raw).is_expired(now)
            except (TypeError, ValueError):
                expired = True
            if expired:
                self._store.remove_item(key)
                removed += 1
        return removed
