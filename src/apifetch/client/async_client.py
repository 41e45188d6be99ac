"""Asynchronous JSON API client -- mirrors :class:`~apifetch.client.sync_client.ApiFetch` API.

This module provides :class:`AsyncApiFetch`, the non-blocking counterpart
to :class:`~apifetch.client.sync_client.ApiFetch`.  It wraps
:class:`httpx.AsyncClient` and offers the same feature set -- configuration
merging, opt-in caching and response classification -- but awaits the
transport so it can be used inside an asyncio event loop.

Awaiting the response is the only suspension point of a request.  Two
concurrent cache misses for the same identity therefore both reach the
network and both store an entry; there is no request de-duplication.
Callers needing a deadline can wrap a call in :func:`asyncio.wait_for`.

See Also:
    :class:`~apifetch.client.sync_client.ApiFetch` for the blocking
    equivalent.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from apifetch.cache import FetchCache, MemoryFetchCache
from apifetch.client.request import build_request_kwargs, verb_config
from apifetch.client.response import decode_response, is_empty_response
from apifetch.exceptions import ConnectionError_
from apifetch.merge import default_request_config, merge_request_configs
from apifetch.models import (
    CacheOptions,
    RequestConfig,
    RequestConfigLayer,
    RequestIdentity,
    TransportConfig,
)
from apifetch.output import get_output


class AsyncApiFetch:
    """Asynchronous client for reading and writing JSON over HTTP(S).

    Takes the same arguments as :class:`~apifetch.client.sync_client.ApiFetch`
    except that *transport* must be an :class:`httpx.AsyncBaseTransport`.
    Must be used as an async context manager.

    Example::

        async with AsyncApiFetch(cache=shared_cache) as api:
            users = await api.get("/users", cache_options=CacheOptions(expire_at=later))
    """

    def __init__(
        self,
        config: RequestConfigLayer = None,
        cache: Optional[FetchCache] = None,
        *,
        transport_config: Optional[TransportConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._defaults = merge_request_configs(default_request_config(), config)
        self._cache: FetchCache = cache if cache is not None else MemoryFetchCache()
        self._transport_config = transport_config or TransportConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def defaults(self) -> RequestConfig:
        """The merged default configuration applied beneath every request."""
        return self._defaults

    @property
    def cache(self) -> FetchCache:
        """The cache backend this client reads from and writes to."""
        return self._cache

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncApiFetch:
        config = self._transport_config
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=config.follow_redirects,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def fetch(
        self,
        url: str,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send a request and return its decoded JSON body.

        Behaves identically to
        :meth:`~apifetch.client.sync_client.ApiFetch.fetch` but is
        non-blocking.
        """
        return await self._fetch(url, config, cache_options=cache_options)

    async def get(
        self,
        url: str,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send an async GET request."""
        return await self._fetch(url, verb_config("GET"), config, cache_options=cache_options)

    async def post(
        self,
        url: str,
        body: Any = None,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send an async POST request with *body* encoded as JSON."""
        return await self._fetch(url, verb_config("POST", body), config, cache_options=cache_options)

    async def put(
        self,
        url: str,
        body: Any = None,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send an async PUT request with *body* encoded as JSON."""
        return await self._fetch(url, verb_config("PUT", body), config, cache_options=cache_options)

    async def patch(
        self,
        url: str,
        body: Any = None,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send an async PATCH request with *body* encoded as JSON."""
        return await self._fetch(url, verb_config("PATCH", body), config, cache_options=cache_options)

    async def delete(
        self,
        url: str,
        body: Any = None,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send an async DELETE request with *body* encoded as JSON."""
        return await self._fetch(url, verb_config("DELETE", body), config, cache_options=cache_options)

    def raise_expire_events(self, *events: str) -> None:
        """Invalidate every cached entry listening to any of *events*."""
        get_output().debug(f"Raising expire events: {', '.join(events)}")
        self._cache.raise_expire_events(*events)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _fetch(
        self,
        url: str,
        *layers: RequestConfigLayer,
        cache_options: Optional[CacheOptions],
    ) -> Any:
        output = get_output()
        final = merge_request_configs(self._defaults, *layers)
        identity = RequestIdentity.from_request(url, final)

        if cache_options is not None:
            cached = self._cache.read_from_cache(identity)
            if cached is not None:
                output.debug(f"Cache hit: {final.method or 'GET'} {url}")
                return cached

        response = await self._send(url, final)
        result = decode_response(response)

        if cache_options is not None and not is_empty_response(response):
            output.debug(f"Cache store: {final.method or 'GET'} {url}")
            self._cache.store_in_cache(identity, result, cache_options)

        return result

    async def _send(self, url: str, config: RequestConfig) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("Client not initialised -- use as async context manager")

        kwargs = build_request_kwargs(url, config)
        get_output().debug(f"{kwargs['method']} {url}")
        try:
            return await self._client.request(**kwargs)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"Request to {url} failed: {exc}") from exc
