"""In-memory response caching for pokesdk.

This package provides :class:`ResponseCache`, a process-local store of raw
response bodies keyed by the fully-qualified request URL, with a single
time-to-live applied to every entry. When caching is disabled the resolver
is handed a :class:`NullCache`, so the lookup/store code path is the same
either way.

Nothing is persisted; entries are lost when the process exits.
"""

from pokesdk.cache.cache import CacheBackend, NullCache, ResponseCache, build_cache

__all__ = ["CacheBackend", "NullCache", "ResponseCache", "build_cache"]
