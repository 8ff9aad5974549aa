"""Session cache with lazy TTL expiry."""

from .store import KeyValueStore, SessionStore
from .ttl import CacheEntry, TTLCache

__all__ = [
    "CacheEntry",
    "KeyValueStore",
    "SessionStore",
    "TTLCache",
]
