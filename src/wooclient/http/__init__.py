# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubTransport
from .headers import format_header_block, header_value, parse_header_block
from .models import Credentials, Headers, HttpMethod, HttpRequest, HttpResponse, TransportResult
from .transport import HttpTransport, create_default_transport
from .url import build_api_url, build_url_query, is_secure_url, join_endpoint

__all__ = [
    "Credentials",
    "Headers",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "StubTransport",
    "TransportResult",
    "build_api_url",
    "build_url_query",
    "create_default_transport",
    "format_header_block",
    "header_value",
    "is_secure_url",
    "join_endpoint",
    "parse_header_block",
]
