"""apifetch -- a JSON-over-HTTP client with layered configuration and opt-in caching.

Requests are built by merging configuration layers (built-in defaults,
client defaults, per-call overrides or transform functions), optionally
served from a pluggable cache, sent through :mod:`httpx`, and returned as
decoded JSON.  Error responses are raised as typed exceptions.

Typical usage::

    from apifetch import ApiFetch, CacheOptions

    with ApiFetch({"headers": {"Authorization": f"Bearer {token}"}}) as api:
        orders = api.get("https://api.example.com/orders",
                         cache_options=CacheOptions(expire_at=later,
                                                    expire_on_events=["orders"]))
        api.post("https://api.example.com/orders", {"sku": "A-1"})
        api.raise_expire_events("orders")

Modules:
    client: :class:`ApiFetch` and :class:`AsyncApiFetch`.
    cache: :class:`FetchCache` protocol and :class:`MemoryFetchCache`.
    merge: :func:`merge_request_configs`.
    models: Pydantic models shared across the package.
    exceptions: Exception hierarchy.
    output: stderr diagnostics with Rich support.
"""

from apifetch.cache import FetchCache, MemoryFetchCache
from apifetch.client import ApiFetch, AsyncApiFetch
from apifetch.exceptions import (
    ApiFetchError,
    ConnectionError_,
    DomainError,
    TransportError,
)
from apifetch.merge import merge_request_configs
from apifetch.models import (
    CacheEntry,
    CacheOptions,
    RequestConfig,
    RequestIdentity,
    TransportConfig,
)

__version__ = "0.1.0"

__all__ = [
    "ApiFetch",
    "ApiFetchError",
    "AsyncApiFetch",
    "CacheEntry",
    "CacheOptions",
    "ConnectionError_",
    "DomainError",
    "FetchCache",
    "MemoryFetchCache",
    "RequestConfig",
    "RequestIdentity",
    "TransportConfig",
    "TransportError",
    "merge_request_configs",
]
