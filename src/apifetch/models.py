"""Canonical data models shared across all apifetch modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Request configuration** -- layered per-request settings that are merged
into one effective configuration before each call:
    :class:`RequestConfig`, :data:`RequestConfigFunction`, and
    :data:`RequestConfigLayer`.

**Caching** -- the identity, policy and stored record used by cache
backends:
    :class:`RequestIdentity`, :class:`CacheOptions`, and :class:`CacheEntry`.

**Transport** -- settings for the underlying :mod:`httpx` client:
    :class:`TransportConfig`.

Pydantic models use v2 ``model_config``.  :class:`RequestConfig` forbids
unknown keys so that a misspelt field fails loudly instead of being dropped.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Request configuration ---


class RequestConfig(BaseModel):
    """One layer of request configuration, or the merged result of several.

    Every field is optional.  A field is *present* when it was explicitly
    supplied (it appears in ``model_fields_set``), even if its value is
    ``None``; only present fields take part in a merge.

    Example::

        RequestConfig(headers={"Authorization": "Bearer tok123"})
        RequestConfig(method="POST", body='{"name": "widget"}')
    """

    model_config = ConfigDict(extra="forbid")

    method: Optional[str] = Field(default=None, description="HTTP method")
    headers: Optional[dict[str, str]] = Field(
        default=None, description="Request headers, merged key-wise across layers"
    )
    body: Optional[Union[str, bytes]] = Field(
        default=None, description="Serialised request body"
    )
    params: Optional[dict[str, Any]] = Field(
        default=None, description="Query string parameters"
    )
    timeout: Optional[float] = Field(
        default=None, description="Per-request timeout in seconds"
    )
    follow_redirects: Optional[bool] = None


RequestConfigFunction = Callable[[RequestConfig], Union[RequestConfig, Mapping[str, Any]]]
"""Transform layer: receives the configuration merged so far and returns its replacement."""

RequestConfigLayer = Union[RequestConfig, Mapping[str, Any], RequestConfigFunction, None]
"""Anything accepted by :func:`~apifetch.merge.merge_request_configs`."""


# --- Caching ---


@dataclass(frozen=True)
class RequestIdentity:
    """The ``(url, body)`` pair that determines cache identity.

    Headers, method and the remaining configuration are deliberately left
    out: two requests with the same URL and body are the same cached item.
    """

    url: str
    body: Any = None

    @classmethod
    def from_request(cls, url: str, config: Optional[RequestConfig]) -> RequestIdentity:
        """Build the identity for a request to *url* with effective *config*."""
        return cls(url=url, body=config.body if config is not None else None)


class CacheOptions(BaseModel):
    """Per-request caching policy supplied by the caller.

    Passing any ``CacheOptions`` (even an empty one) makes the request
    cache-eligible.  A request without options never reads or writes the
    cache.

    Naive ``expire_at`` values are interpreted as UTC.
    """

    expire_at: Optional[datetime] = Field(
        default=None, description="Absolute time after which the entry is stale"
    )
    expire_on_events: Optional[list[str]] = Field(
        default=None, description="Event names that invalidate the entry"
    )


class CacheEntry(BaseModel):
    """A decoded response stored by a cache backend."""

    key: str
    data: Any = None
    expire_at: Optional[datetime] = None
    expire_on_events: Optional[list[str]] = None


# --- Transport ---


class TransportConfig(BaseModel):
    """Settings applied to the underlying :class:`httpx.Client`."""

    base_url: Optional[str] = Field(
        default=None, description="Base URL prepended to relative request URLs"
    )
    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = True
