"""In-memory TTL cache for raw API response bodies.

Entries are stored as ``url -> (expires_at, body)``. The TTL is fixed when
the cache is constructed and applied to each entry at write time; reading
an entry never extends its lifetime. Expired entries are dropped lazily on
the read that finds them, and swept on writes so the store does not grow
with dead keys.

A single lock guards the store, so one cache can be shared by every
caller of a resolver across threads.

See Also:
    :class:`~pokesdk.models.ClientConfig` -- ``cache_enabled`` and
    ``cache_ttl`` select between :class:`ResponseCache` and
    :class:`NullCache` in :func:`build_cache`.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Protocol

from pokesdk.models import ClientConfig


class CacheBackend(Protocol):
    """What the resolver needs from a response cache."""

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored body for *key*, or ``None`` when absent or expired."""
        ...

    def put(self, key: str, data: bytes) -> None:
        """Store *data* under *key*, replacing any previous entry."""
        ...


class ResponseCache:
    """Thread-safe in-memory cache of response bodies with one global TTL.

    Args:
        ttl_seconds: Lifetime of every entry. ``None`` or a value ``<= 0``
            keeps entries until the process exits.
        clock: Monotonic time source, replaceable in tests.

    Example::

        cache = ResponseCache(ttl_seconds=60)
        cache.put("https://pokeapi.co/api/v2/pokemon/25", body)
        hit = cache.get("https://pokeapi.co/api/v2/pokemon/25")
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds if ttl_seconds and ttl_seconds > 0 else None
        self._clock = clock
        self._lock = threading.Lock()
        self._store: dict[str, tuple[Optional[float], bytes]] = {}

    @property
    def ttl_seconds(self) -> Optional[float]:
        return self._ttl

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, data = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._store[key]
                return None
            return data

    def put(self, key: str, data: bytes) -> None:
        now = self._clock()
        expires_at = now + self._ttl if self._ttl is not None else None
        with self._lock:
            self._sweep(now)
            self._store[key] = (expires_at, bytes(data))

    def __len__(self) -> int:
        with self._lock:
            self._sweep(self._clock())
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def _sweep(self, now: float) -> None:
        # Caller holds the lock.
        if self._ttl is None:
            return
        expired = [
            key for key, (expires_at, _) in self._store.items()
            if expires_at is not None and now >= expires_at
        ]
        for key in expired:
            del self._store[key]


class NullCache:
    """Cache stand-in used when caching is disabled: never hits, never stores."""

    def get(self, key: str) -> Optional[bytes]:
        return None

    def put(self, key: str, data: bytes) -> None:
        return None


def build_cache(config: ClientConfig) -> CacheBackend:
    """Return a :class:`ResponseCache` when *config* enables caching, else a :class:`NullCache`."""
    if config.cache_enabled:
        return ResponseCache(ttl_seconds=config.cache_ttl)
    return NullCache()
