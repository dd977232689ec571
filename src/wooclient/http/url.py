# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for the versioned store API."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlencode, urlsplit

API_PATH_SEGMENT = "wc-api"


def is_secure_url(url: str) -> bool:
    """Return True when the URL uses the https scheme."""
    return urlsplit(str(url or "")).scheme.lower() == "https"


def is_absolute_http_url(url: str) -> bool:
    parts = urlsplit(str(url or ""))
    return parts.scheme.lower() in {"http", "https"} and bool(parts.netloc)


def build_api_url(store_url: str, api_version: str) -> str:
    """
    Convert a store URL into the versioned API root.

    Example:
      https://shop.example/ + v3 -> https://shop.example/wc-api/v3/
    """
    return f"{str(store_url).rstrip('/')}/{API_PATH_SEGMENT}/{api_version.strip('/')}/"


def join_endpoint(api_url: str, endpoint: str) -> str:
    """Append an endpoint path to the API root without doubling the slash."""
    base = api_url if api_url.endswith("/") else f"{api_url}/"
    return base + str(endpoint or "").lstrip("/")


def build_url_query(url: str, parameters: Mapping[str, str] | None = None) -> str:
    """Append form-encoded query parameters, keeping their order."""
    if not parameters:
        return url
    return f"{url}?{urlencode(list(parameters.items()))}"


__all__ = [
    "API_PATH_SEGMENT",
    "build_api_url",
    "build_url_query",
    "is_absolute_http_url",
    "is_secure_url",
    "join_endpoint",
]
