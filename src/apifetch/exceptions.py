"""Exception hierarchy for apifetch.

All exceptions inherit from :class:`ApiFetchError`.  Errors raised while
classifying a non-2xx response carry the HTTP ``status_code`` so callers can
branch on it without parsing the message.

Subclass hierarchy::

    ApiFetchError
    +-- TransportError     non-2xx status, body undecodable or uninformative
    +-- DomainError        non-2xx status, body carries a server message
    +-- ConnectionError_   network failure (timeout, DNS, connection refused)

A 2xx response whose body is not valid JSON is *not* mapped into this
hierarchy: the :class:`json.JSONDecodeError` raised by the decoder
propagates unchanged.
"""

from __future__ import annotations

from typing import Optional


class ApiFetchError(Exception):
    """Base exception for all apifetch errors.

    Args:
        message: Human-readable error description.
        status_code: HTTP status of the response that triggered the error,
            or ``None`` when no response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(ApiFetchError):
    """Raised when the server returns a non-2xx status without a usable message."""

    def __init__(self, status_code: int):
        super().__init__(
            f"Server indicated an error by returning a status of {status_code}",
            status_code=status_code,
        )


class DomainError(ApiFetchError):
    """Raised when a non-2xx response body describes the failure.

    The message is exactly the server-supplied text taken from
    ``error.description``, ``error`` or ``errorMessage``.
    """


class ConnectionError_(ApiFetchError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """
