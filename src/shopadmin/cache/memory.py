"""Process-local memory cache.

Keys are scoped so several logical caches can share one store; pattern
removal uses shell-style wildcards (``*``, ``?``, ``[seq]``).
"""

from __future__ import annotations

import threading
import time
from fnmatch import fnmatchcase
from typing import Any

from shopadmin.observability.logging import get_logger


logger = get_logger(__name__)

_MISSING = object()


class MemoryCache:
    """Thread-safe in-process cache with optional per-entry TTL."""

    def __init__(self, scope: str = "Shop", default_ttl: float | None = None) -> None:
        self.scope = scope
        self.default_ttl = default_ttl
        self._entries: dict[str, tuple[Any, float | None]] = {}
        self._lock = threading.Lock()

    def build_scoped_key(self, key: str) -> str:
        """Prefix ``key`` with this cache's scope, e.g. ``Shop:*``."""
        return f"{self.scope}:{key}"

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        expires_at = time.monotonic() + ttl if ttl is not None else None
        with self._lock:
            self._entries[key] = (value, expires_at)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key, _MISSING)
            if entry is _MISSING:
                return default
            value, expires_at = entry
            if expires_at is not None and expires_at <= time.monotonic():
                del self._entries[key]
                return default
            return value

    def contains(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def remove(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, _MISSING) is not _MISSING

    def remove_by_pattern(self, pattern: str) -> int:
        """Remove every key matching ``pattern``; returns the number removed."""
        with self._lock:
            matched = [key for key in self._entries if fnmatchcase(key, pattern)]
            for key in matched:
                del self._entries[key]

        logger.debug("Removed memory cache entries", pattern=pattern, count=len(matched))
        return len(matched)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
