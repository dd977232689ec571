# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level client facade: build, send and classify one request per call."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .builder import RequestBuilder
from .classifier import classify_response
from .config import ClientOptions, load_client_options
from .errors import ConfigurationError, ErrorCategory, TransportError, error_category_to_reason
from .http.models import Credentials, HttpMethod, HttpRequest, HttpResponse
from .http.transport import HttpTransport, create_default_transport
from .http.url import is_absolute_http_url
from .signing import Signer

logger = logging.getLogger(__name__)


class WooClient:
    """
    Client for a store's legacy REST API (`/wc-api/<version>/`).

    Every call builds a fresh signed request, sends it once and returns the decoded
    JSON payload. The last request/response pair is kept for diagnostics, which
    makes an instance unsuitable for sharing between threads without a lock.
    """

    def __init__(
        self,
        url: str,
        consumer_key: str,
        consumer_secret: str,
        options: ClientOptions | Mapping[str, Any] | None = None,
        *,
        transport: HttpTransport | None = None,
        signer: Signer | None = None,
    ):
        if not is_absolute_http_url(url):
            raise ConfigurationError(f"Store URL must be an absolute http(s) URL, got {url!r}")
        if isinstance(options, ClientOptions):
            options.validate()
            self.options = options
        elif options is None:
            self.options = load_client_options()
        else:
            self.options = ClientOptions.from_mapping(options, base=load_client_options())

        self.transport = transport or create_default_transport()
        self.builder = RequestBuilder(
            url,
            Credentials(consumer_key=consumer_key, consumer_secret=consumer_secret),
            self.options,
            signer=signer,
        )
        self._last_request: HttpRequest | None = None
        self._last_response: HttpResponse | None = None

    @property
    def api_url(self) -> str:
        return self.builder.api_url

    @property
    def last_request(self) -> HttpRequest | None:
        return self._last_request

    @property
    def last_response(self) -> HttpResponse | None:
        return self._last_response

    def request(
        self,
        endpoint: str,
        method: HttpMethod | str,
        data: Any = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        request = self.builder.build(endpoint, method, data, parameters)
        self._last_request = request
        self._last_response = None

        result = self.transport.send(
            request,
            timeout=self.options.timeout,
            verify_ssl=self.options.verify_ssl,
        )
        response = result.to_response()
        self._last_response = response

        if not result.ok:
            detail = result.error_message or error_category_to_reason(result.error_category) or "unknown failure"
            raise TransportError(
                f"Transport error: {detail}",
                request=request,
                response=response,
                category=result.error_category or ErrorCategory.UNKNOWN_ERROR,
            )

        logger.debug("%s %s -> HTTP %s", request.method.value, endpoint, response.status_code)
        return classify_response(request, response)

    def get(self, endpoint: str, parameters: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.request(endpoint, HttpMethod.GET, None, parameters)

    def post(self, endpoint: str, data: Any) -> dict[str, Any]:
        return self.request(endpoint, HttpMethod.POST, data)

    def put(self, endpoint: str, data: Any) -> dict[str, Any]:
        return self.request(endpoint, HttpMethod.PUT, data)

    def delete(self, endpoint: str, parameters: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.request(endpoint, HttpMethod.DELETE, None, parameters)


__all__ = ["WooClient"]
