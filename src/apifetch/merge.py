"""Layered request-configuration merging.

:func:`merge_request_configs` folds an ordered sequence of configuration
layers into one effective :class:`~apifetch.models.RequestConfig`.  A layer
is one of:

* ``None`` -- skipped.
* A :class:`~apifetch.models.RequestConfig` or a plain mapping of its
  fields -- merged field by field on top of the accumulator.  ``headers`` is
  merged key-wise (later layer wins per key); every other present field
  replaces the accumulator's value wholesale.
* A callable -- receives the accumulator and returns its full replacement,
  so it has complete authority over the result at that point (e.g. to
  inject a freshly computed token).

Order is significant.  The clients merge
``[built-in defaults, constructor defaults, verb layer, per-call config]``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from apifetch.models import RequestConfig, RequestConfigLayer

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def default_request_config() -> RequestConfig:
    """Return the built-in base layer applied beneath every client's defaults."""
    return RequestConfig(headers=dict(DEFAULT_HEADERS))


def merge_request_configs(*layers: RequestConfigLayer) -> RequestConfig:
    """Merge configuration *layers* left to right into one effective configuration.

    Args:
        *layers: Static configurations, mappings, transform functions, or
            ``None``.

    Returns:
        A new :class:`RequestConfig`.  Inputs are never mutated.

    Raises:
        pydantic.ValidationError: If a mapping layer (or a mapping returned
            by a transform) contains unknown fields.

    Example::

        merged = merge_request_configs(
            {"headers": {"Accept": "application/json"}},
            lambda cfg: cfg.model_copy(update={"method": "GET"}),
            RequestConfig(headers={"X-Trace": "abc"}),
        )
    """
    merged = RequestConfig()

    for layer in layers:
        if layer is None:
            continue

        if callable(layer):
            merged = _coerce(layer(merged))
            continue

        merged = _overlay(merged, _coerce(layer))

    return merged


def _coerce(value: Any) -> RequestConfig:
    """Validate a mapping into a :class:`RequestConfig`; pass models through."""
    if isinstance(value, RequestConfig):
        return value
    if isinstance(value, Mapping):
        return RequestConfig.model_validate(dict(value))
    raise TypeError(
        f"Configuration layer must be a RequestConfig, mapping, or callable, "
        f"not {type(value).__name__}"
    )


def _overlay(base: RequestConfig, layer: RequestConfig) -> RequestConfig:
    """Apply one static *layer* on top of *base*."""
    values = base.model_dump(exclude_unset=True)

    for name in layer.model_fields_set:
        if name == "headers":
            continue
        values[name] = getattr(layer, name)

    if layer.headers is not None:
        values["headers"] = {**(base.headers or {}), **layer.headers}

    return RequestConfig(**values)
