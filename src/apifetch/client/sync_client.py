"""Synchronous JSON API client with layered configuration and opt-in caching.

This module provides :class:`ApiFetch`, the blocking client.  It wraps
:class:`httpx.Client` and layers on:

- **Configuration merging** -- built-in defaults, constructor defaults, the
  verb layer and per-call configuration are merged with
  :func:`~apifetch.merge.merge_request_configs` before every request.
- **Opt-in caching** -- when the caller passes
  :class:`~apifetch.models.CacheOptions` the injected
  :class:`~apifetch.cache.FetchCache` is consulted before the request and
  populated after a successful one.
- **Response classification** -- non-2xx responses are raised as
  :class:`~apifetch.exceptions.DomainError` or
  :class:`~apifetch.exceptions.TransportError`; 2xx bodies are returned
  already decoded.

See Also:
    :class:`~apifetch.client.async_client.AsyncApiFetch` for the
    equivalent non-blocking implementation.
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


class ApiFetch:
    """Blocking client for reading and writing JSON over HTTP(S).

    Every public method returns the decoded JSON body (or ``None`` for an
    empty body) and raises on failure, so a returned value is always usable.
    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        config: Default configuration applied to every request, on top of
            the built-in ``Accept`` / ``Content-Type: application/json``
            headers.  Either a static :class:`~apifetch.models.RequestConfig`
            (or mapping) or a transform function; it is merged once, here.
        cache: Cache backend used for cache-eligible requests.  Defaults to
            a :class:`~apifetch.cache.MemoryFetchCache` owned by this
            instance.
        transport_config: Settings for the :class:`httpx.Client`.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        with ApiFetch({"headers": {"Authorization": f"Bearer {token}"}}) as api:
            users = api.get(
                "https://api.example.com/users",
                cache_options=CacheOptions(expire_at=later, expire_on_events=["users"]),
            )
            api.post("https://api.example.com/users", {"name": "Ada"})
            api.raise_expire_events("users")
    """

    def __init__(
        self,
        config: RequestConfigLayer = None,
        cache: Optional[FetchCache] = None,
        *,
        transport_config: Optional[TransportConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._defaults = merge_request_configs(default_request_config(), config)
        self._cache: FetchCache = cache if cache is not None else MemoryFetchCache()
        self._transport_config = transport_config or TransportConfig()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def defaults(self) -> RequestConfig:
        """The merged default configuration applied beneath every request."""
        return self._defaults

    @property
    def cache(self) -> FetchCache:
        """The cache backend this client reads from and writes to."""
        return self._cache

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> ApiFetch:
        config = self._transport_config
        self._client = httpx.Client(
            base_url=config.base_url or "",
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=config.follow_redirects,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def fetch(
        self,
        url: str,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send a request and return its decoded JSON body.

        Args:
            url: Absolute URL, or a path relative to
                :attr:`~apifetch.models.TransportConfig.base_url`.
            config: Per-call configuration layer (static or transform).
            cache_options: Enables cache read and write for this call.

        Returns:
            The decoded body, the cached value on a hit, or ``None`` when the
            server declared an empty body.

        Raises:
            DomainError: Non-2xx response with a server-described message.
            TransportError: Non-2xx response without one.
            ConnectionError_: Network failure.
            json.JSONDecodeError: 2xx response whose body is not JSON.
        """
        return self._fetch(url, config, cache_options=cache_options)

    def get(
        self,
        url: str,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send a GET request.  See :meth:`fetch`."""
        return self._fetch(url, verb_config("GET"), config, cache_options=cache_options)

    def post(
        self,
        url: str,
        body: Any = None,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send a POST request with *body* encoded as JSON.  See :meth:`fetch`."""
        return self._fetch(url, verb_config("POST", body), config, cache_options=cache_options)

    def put(
        self,
        url: str,
        body: Any = None,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send a PUT request with *body* encoded as JSON.  See :meth:`fetch`."""
        return self._fetch(url, verb_config("PUT", body), config, cache_options=cache_options)

    def patch(
        self,
        url: str,
        body: Any = None,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send a PATCH request with *body* encoded as JSON.  See :meth:`fetch`."""
        return self._fetch(url, verb_config("PATCH", body), config, cache_options=cache_options)

    def delete(
        self,
        url: str,
        body: Any = None,
        config: RequestConfigLayer = None,
        cache_options: Optional[CacheOptions] = None,
    ) -> Any:
        """Send a DELETE request with *body* encoded as JSON.  See :meth:`fetch`."""
        return self._fetch(url, verb_config("DELETE", body), config, cache_options=cache_options)

    def raise_expire_events(self, *events: str) -> None:
        """Invalidate every cached entry listening to any of *events*."""
        get_output().debug(f"Raising expire events: {', '.join(events)}")
        self._cache.raise_expire_events(*events)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _fetch(
        self,
        url: str,
        *layers: RequestConfigLayer,
        cache_options: Optional[CacheOptions],
    ) -> Any:
        output = get_output()
        final = merge_request_configs(self._defaults, *layers)
        identity = RequestIdentity.from_request(url, final)

        # Caching is opt-in per call.
        if cache_options is not None:
            cached = self._cache.read_from_cache(identity)
            if cached is not None:
                output.debug(f"Cache hit: {final.method or 'GET'} {url}")
                return cached

        response = self._send(url, final)
        result = decode_response(response)

        if cache_options is not None and not is_empty_response(response):
            output.debug(f"Cache store: {final.method or 'GET'} {url}")
            self._cache.store_in_cache(identity, result, cache_options)

        return result

    def _send(self, url: str, config: RequestConfig) -> httpx.Response:
        """Send the request through the httpx client."""
        if self._client is None:
            raise RuntimeError("Client not initialised -- use as context manager")

        kwargs = build_request_kwargs(url, config)
        get_output().debug(f"{kwargs['method']} {url}")
        try:
            return self._client.request(**kwargs)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"Request to {url} failed: {exc}") from exc
