"""HTTP client module for apifetch.

Provides synchronous and asynchronous clients that wrap :mod:`httpx` with
layered request configuration, opt-in response caching and classification
of error responses into typed exceptions.

Classes:
    :class:`ApiFetch` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncApiFetch` -- non-blocking client backed by :class:`httpx.AsyncClient`.

Both clients are designed to be used as context managers and accept the
same core parameters: a default configuration layer, an optional cache
backend, optional :class:`~apifetch.models.TransportConfig`, and an
optional :mod:`httpx` transport.

Example::

    from apifetch.client import ApiFetch

    with ApiFetch() as api:
        user = api.get("https://api.example.com/users/1")
"""

from apifetch.client.async_client import AsyncApiFetch
from apifetch.client.sync_client import ApiFetch

__all__ = ["ApiFetch", "AsyncApiFetch"]
