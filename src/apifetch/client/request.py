"""Request-side helpers shared by the sync and async clients."""

from __future__ import annotations

import json
from typing import Any

from apifetch.models import RequestConfig

_NO_BODY = object()


def verb_config(method: str, payload: Any = _NO_BODY) -> RequestConfig:
    """Return the configuration layer a verb method contributes.

    Body-carrying verbs always set ``body``: the JSON encoding of *payload*,
    or ``None`` when no payload was given, so a default body configured on
    the client never leaks into a body-less call.
    """
    if payload is _NO_BODY:
        return RequestConfig(method=method)
    body = json.dumps(payload) if payload is not None else None
    return RequestConfig(method=method, body=body)


def build_request_kwargs(url: str, config: RequestConfig) -> dict[str, Any]:
    """Translate an effective configuration into :meth:`httpx.Client.request` kwargs."""
    kwargs: dict[str, Any] = {
        "method": config.method or "GET",
        "url": url,
        "headers": dict(config.headers or {}),
    }
    if config.body is not None:
        kwargs["content"] = config.body
    if config.params is not None:
        kwargs["params"] = config.params
    if config.timeout is not None:
        kwargs["timeout"] = config.timeout
    if config.follow_redirects is not None:
        kwargs["follow_redirects"] = config.follow_redirects
    return kwargs
