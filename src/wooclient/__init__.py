# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
wooclient package entrypoint.

A client for the WooCommerce legacy REST API. Each call builds one
authenticated request (query-string, basic or OAuth 1.0a signed, depending on
the store URL scheme), sends it through an injectable transport and classifies
the answer into a decoded payload or a typed error.
"""

from .builder import RequestBuilder
from .classifier import classify_response, decode_body, extract_json_object
from .client import WooClient
from .config import ClientOptions, load_client_options
from .errors import (
    ApiError,
    ConfigurationError,
    ErrorCategory,
    ErrorShape,
    InvalidResponseBody,
    RequestPreconditionError,
    ReservedParameterError,
    TransportError,
    WooClientError,
)
from .http import (
    Credentials,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    HttpTransport,
    StubTransport,
    TransportResult,
    create_default_transport,
)
from .log import setup_logging
from .signing import AuthMode, Signer, select_auth_mode
from .version import __version__

__all__ = [
    "ApiError",
    "AuthMode",
    "ClientOptions",
    "ConfigurationError",
    "Credentials",
    "ErrorCategory",
    "ErrorShape",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "InvalidResponseBody",
    "RequestBuilder",
    "RequestPreconditionError",
    "ReservedParameterError",
    "Signer",
    "StubTransport",
    "TransportError",
    "TransportResult",
    "WooClient",
    "WooClientError",
    "classify_response",
    "create_default_transport",
    "decode_body",
    "extract_json_object",
    "load_client_options",
    "select_auth_mode",
    "setup_logging",
    "__version__",
]
