"""Small key/value cache used to memoize LLM responses."""

import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple


class Cache(ABC):
    """Cache interface."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when missing or expired."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value, optionally expiring after ``ttl`` seconds."""
        pass

    @abstractmethod
    def expire(self, key: Optional[str] = None) -> None:
        """Drop one key, or every key when ``key`` is None."""
        pass


class MemoryCache(Cache):
    """In-process cache with per-entry TTL.

    Lives as long as the object that owns it; nothing is shared between
    instances.
    """

    def __init__(
        self,
        default_ttl: Optional[float] = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize memory cache.

        Args:
            default_ttl: Seconds an entry lives when ``set`` gets no ttl (None = forever)
            clock: Monotonic time source, injectable for tests
        """
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        expires_at = self._clock() + ttl if ttl is not None else None
        self._entries[key] = (value, expires_at)

    def expire(self, key: Optional[str] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
