"""Response classification shared by the sync and async clients.

After the transport returns, :func:`decode_response` turns an
:class:`httpx.Response` into the value handed back to the caller:

* A non-2xx response is classified by :func:`error_from_response` and the
  resulting exception is raised.
* A 2xx response that declares an empty body yields ``None``.
* Any other 2xx response is decoded as JSON.  A decode failure here is a
  server defect and the :class:`json.JSONDecodeError` propagates unchanged.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from apifetch.exceptions import ApiFetchError, DomainError, TransportError


def is_empty_response(response: httpx.Response) -> bool:
    """Return True for responses that declare no body content."""
    return (
        response.headers.get("Content-Length") == "0"
        or response.status_code == httpx.codes.NO_CONTENT
    )


def error_from_response(response: httpx.Response) -> ApiFetchError:
    """Build the exception describing a non-2xx *response*.

    The body is always read, whatever ``Content-Length`` says, since some
    servers omit the header on error responses.

    Returns:
        :class:`DomainError` carrying ``error.description``, ``error`` or
        ``errorMessage`` from a decoded JSON object (in that order of
        preference), or :class:`TransportError` with the status code when
        the body is not JSON or says nothing useful.
    """
    status = response.status_code
    try:
        detail = response.json()
    except ValueError:
        return TransportError(status)

    if not isinstance(detail, dict):
        return TransportError(status)

    error = detail.get("error")
    if error:
        if isinstance(error, dict) and error.get("description"):
            return DomainError(_as_text(error["description"]), status_code=status)
        return DomainError(_as_text(error), status_code=status)

    message = detail.get("errorMessage")
    if message:
        return DomainError(_as_text(message), status_code=status)

    return TransportError(status)


def decode_response(response: httpx.Response) -> Any:
    """Return the decoded body of *response* or raise its classified error.

    Raises:
        DomainError: Non-2xx with a server-described message.
        TransportError: Non-2xx without one.
        json.JSONDecodeError: 2xx whose body is not valid JSON.
    """
    if not response.is_success:
        raise error_from_response(response)

    if is_empty_response(response):
        return None

    return response.json()


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), default=str)
