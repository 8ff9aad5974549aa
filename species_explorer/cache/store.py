"""Key-value stores backing the TTL cache."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..errors import CacheWriteFailure


class KeyValueStore(ABC):
    """String-to-string store with session lifetime.

    Implementations only need to persist for as long as the host session
    lives. Writes may raise CacheWriteFailure when the store is full.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def __len__(self) -> int:
        return len(self.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get_item(key) is not None


class SessionStore(KeyValueStore):
    """In-memory store that lives as long as the process.

    ``quota_bytes`` bounds the total size of keys and values (UTF-8),
    like the browser session storage quota.
    """

    def __init__(self, quota_bytes: int | None = 5 * 1024 * 1024) -> None:
        self._quota = quota_bytes
        self._items: dict[str, str] = {}
        self._used = 0

    @property
    def used_bytes(self) -> int:
        return self._used

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        new_size = _size(key, value)
        old = self._items.get(key)
        old_size = _size(key, old) if old is not None else 0
        projected = self._used - old_size + new_size
        if self._quota is not None and projected > self._quota:
            raise CacheWriteFailure(
                f"Quota exceeded writing {key!r}: {projected} > {self._quota} bytes"
            )
        self._items[key] = value
        self._used = projected

    def remove_item(self, key: str) -> None:
        old = self._items.pop(key, None)
        if old is not None:
            self._used -= _size(key, old)

    def keys(self) -> list[str]:
        return list(self._items.keys())

    def clear(self) -> None:
        self._items.clear()
        self._used = 0


def _size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))
