"""In-memory cache backend.

Entries live in a plain list for the lifetime of the
:class:`MemoryFetchCache` instance.  The list is append-only apart from
event invalidation:

* Writes never replace an existing entry with the same key, so repeated
  writes accumulate and a read always resolves to the *earliest* entry.
* Expiry is checked lazily on read; nothing is pruned by time.
* An entry stored without ``expire_at`` is never returned by a read.  It
  stays in the list until one of its ``expire_on_events`` is raised.

Cache keys are ``[url][body]`` strings (see :meth:`MemoryFetchCache.make_key`).
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional

from apifetch.models import CacheEntry, CacheOptions, RequestIdentity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _key_part(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return json.dumps(value, separators=(",", ":"), default=str)


class MemoryFetchCache:
    """Process-lifetime cache of decoded responses.

    Args:
        now: Clock used for expiry checks.  Defaults to the current UTC
            time; tests inject a fixed clock.

    Example::

        cache = MemoryFetchCache()
        identity = RequestIdentity("https://api.example.com/users")
        cache.store_in_cache(identity, [{"id": 1}], CacheOptions(expire_at=later))
        cache.read_from_cache(identity)  # -> [{"id": 1}]
    """

    def __init__(self, now: Optional[Callable[[], datetime]] = None) -> None:
        self._entries: list[CacheEntry] = []
        self._now = now or _utcnow

    @staticmethod
    def make_key(identity: RequestIdentity) -> str:
        """Derive the cache key for *identity*.

        Strings are used verbatim, bytes are decoded as UTF-8, anything
        else is serialised as compact JSON in its own key order.  Empty or
        missing values contribute an empty pair of brackets.
        """
        return "".join(f"[{_key_part(part)}]" for part in (identity.url, identity.body))

    def read_from_cache(self, identity: RequestIdentity) -> Optional[Any]:
        """Return the data of the first entry for *identity* if it has not expired."""
        key = self.make_key(identity)
        entry = next((item for item in self._entries if item.key == key), None)
        if entry is None or entry.expire_at is None:
            return None
        if _as_aware(entry.expire_at) > _as_aware(self._now()):
            return entry.data
        return None

    def store_in_cache(
        self, identity: RequestIdentity, data: Any, options: CacheOptions
    ) -> None:
        """Append an entry for *identity*; existing entries are left in place."""
        self._entries.append(
            CacheEntry(
                key=self.make_key(identity),
                data=data,
                expire_at=options.expire_at,
                expire_on_events=(
                    list(options.expire_on_events)
                    if options.expire_on_events is not None
                    else None
                ),
            )
        )

    def raise_expire_events(self, *events: str) -> None:
        """Drop every entry whose ``expire_on_events`` contains any of *events*."""
        raised = set(events)
        self._entries = [
            entry
            for entry in self._entries
            if not entry.expire_on_events or raised.isdisjoint(entry.expire_on_events)
        ]

    @property
    def entries(self) -> tuple[CacheEntry, ...]:
        """Snapshot of the stored entries in insertion order."""
        return tuple(self._entries)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries = []

    def __len__(self) -> int:
        return len(self._entries)
