# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .http.models import HttpRequest, HttpResponse


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class ErrorShape(str, Enum):
    """How an API error payload laid out its `errors` member."""

    LIST = "list"
    SINGLE = "single"
    UNRECOGNIZED = "unrecognized"


class WooClientError(Exception):
    """Base class for every error raised by the client, with request/response context."""

    def __init__(
        self,
        message: str,
        *,
        request: HttpRequest | None = None,
        response: HttpResponse | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        from .http.models import HttpRequest, HttpResponse

        self.request = request if request is not None else HttpRequest()
        self.response = response if response is not None else HttpResponse()
        self.status_code = status_code if status_code is not None else self.response.status_code


class ConfigurationError(WooClientError):
    """A required capability or setting is missing; raised at construction time."""


class RequestPreconditionError(WooClientError, ValueError):
    """The caller asked for a request that cannot be built; nothing was sent."""


class ReservedParameterError(RequestPreconditionError):
    """Caller parameters collide with authentication parameter names."""


class TransportError(WooClientError):
    """The transport failed before a complete response was received."""

    def __init__(
        self,
        message: str,
        *,
        request: HttpRequest | None = None,
        response: HttpResponse | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ):
        super().__init__(message, request=request, response=response)
        self.category = category


class InvalidResponseBody(WooClientError):
    """The response body held no decodable JSON object."""


class ApiError(WooClientError):
    """The API answered with a decodable payload and a non-success status."""

    def __init__(
        self,
        message: str,
        code: str,
        *,
        shape: ErrorShape = ErrorShape.UNRECOGNIZED,
        request: HttpRequest | None = None,
        response: HttpResponse | None = None,
    ):
        if shape is ErrorShape.UNRECOGNIZED:
            text = "Error: unrecognized error payload"
        else:
            text = f"Error: {message} [{code}]"
        super().__init__(text, request=request, response=response)
        self.message = message
        self.code = code
        self.shape = shape


def _exception_chain(exc: BaseException, limit: int = 8):
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen and len(seen) < limit:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    try:
        import httpx
    except ImportError:
        httpx = None  # type: ignore

    if httpx and isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps socket/ssl failures; inspect the chain before the generic buckets.
    chain = list(_exception_chain(exc))
    if any(isinstance(item, (ssl_module.SSLError, ssl_module.CertificateError)) for item in chain):
        return ErrorCategory.SSL_ERROR

    if any(isinstance(item, (socket.gaierror, socket.herror)) for item in chain):
        return ErrorCategory.DNS_ERROR

    if httpx and isinstance(
        exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)
    ):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "ApiError",
    "ConfigurationError",
    "ErrorCategory",
    "ErrorShape",
    "InvalidResponseBody",
    "RequestPreconditionError",
    "ReservedParameterError",
    "TransportError",
    "WooClientError",
    "categorize_exception",
    "error_category_to_reason",
]
