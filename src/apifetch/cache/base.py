"""Cache backend protocol used by the apifetch clients."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from apifetch.models import CacheOptions, RequestIdentity


@runtime_checkable
class FetchCache(Protocol):
    """Cache backend interface.

    :class:`~apifetch.cache.memory.MemoryFetchCache` is the default
    implementation.  Any object providing these three methods (a persistent
    or remote store, for instance) can be passed to a client instead.
    """

    def read_from_cache(self, identity: RequestIdentity) -> Optional[Any]:
        """Return the cached data for *identity*, or ``None`` if missing or expired."""
        ...

    def store_in_cache(
        self, identity: RequestIdentity, data: Any, options: CacheOptions
    ) -> None:
        """Store decoded *data* for *identity* under the given policy."""
        ...

    def raise_expire_events(self, *events: str) -> None:
        """Remove every entry listening to any of *events*."""
        ...
