"""Response caching for apifetch.

This package provides the :class:`FetchCache` protocol that every cache
backend satisfies, and :class:`MemoryFetchCache`, the in-memory backend each
client uses unless another one is injected.

Caching is opt-in per request: the clients only consult the cache when the
caller passes :class:`~apifetch.models.CacheOptions`.
"""

from apifetch.cache.base import FetchCache
from apifetch.cache.memory import MemoryFetchCache

__all__ = ["FetchCache", "MemoryFetchCache"]
