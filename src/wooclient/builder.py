# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Compose endpoint, verb, payload and authentication into an HttpRequest."""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Mapping
from typing import Any

from .config import ClientOptions
from .errors import RequestPreconditionError
from .http.models import Credentials, HttpMethod, HttpRequest
from .http.url import build_api_url, build_url_query, is_secure_url, join_endpoint
from .signing import AuthMode, Signer, select_auth_mode

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def basic_auth_header(credentials: Credentials) -> str:
    token = f"{credentials.consumer_key}:{credentials.consumer_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(token).decode("ascii")


def encode_json_body(data: Any) -> bytes:
    """UTF-8 JSON for non-empty data, empty bytes otherwise."""
    if not data:
        return b""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class RequestBuilder:
    """
    Builds one request per call against a store's versioned API root.

    Authentication follows the API URL's scheme: https uses query-string or basic
    credentials (depending on `options.query_string_auth`), anything else is
    OAuth-signed.
    """

    def __init__(
        self,
        store_url: str,
        credentials: Credentials,
        options: ClientOptions,
        signer: Signer | None = None,
    ):
        self.credentials = credentials
        self.options = options
        self.signer = signer or Signer()
        self.api_url = build_api_url(store_url, options.api_version)

    @property
    def transport_is_secure(self) -> bool:
        return is_secure_url(self.api_url)

    @property
    def auth_mode(self) -> AuthMode:
        return select_auth_mode(self.api_url, self.options.query_string_auth)

    def default_headers(self) -> dict[str, str]:
        return {
            "Accept": JSON_CONTENT_TYPE,
            "Content-Type": JSON_CONTENT_TYPE,
            "User-Agent": self.options.user_agent,
        }

    def build(
        self,
        endpoint: str,
        method: HttpMethod | str,
        data: Any = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> HttpRequest:
        verb = HttpMethod.coerce(method)
        if verb is HttpMethod.GET and data:
            raise RequestPreconditionError("GET requests cannot carry a body")

        url = join_endpoint(self.api_url, endpoint)
        params = {str(key): str(value) for key, value in (parameters or {}).items()}
        headers = self.default_headers()

        mode = self.auth_mode
        if mode is AuthMode.BASIC:
            headers["Authorization"] = basic_auth_header(self.credentials)
        else:
            auth = self.signer.sign(url, verb, params, self.credentials, self.options.api_version, mode)
            params = auth.apply(params)
        logger.debug("Built %s %s (auth=%s)", verb.value, endpoint, mode.value)

        return HttpRequest(
            url=build_url_query(url, params),
            method=verb,
            parameters=params,
            headers=headers,
            body=encode_json_body(data),
        )


__all__ = ["JSON_CONTENT_TYPE", "RequestBuilder", "basic_auth_header", "encode_json_body"]
