# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpTransport implementation."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import httpx

from ..errors import categorize_exception
from .headers import format_header_block
from .models import HttpRequest, TransportResult
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class TransferTimeout(httpx.TimeoutException):
    """The whole exchange took longer than the configured timeout."""


def _header_block(resp: httpx.Response) -> str:
    status_line = f"{resp.http_version} {resp.status_code} {resp.reason_phrase}"
    pairs = [(key.decode("latin-1"), value.decode("latin-1")) for key, value in resp.headers.raw]
    return format_header_block(status_line, pairs)


class HttpxTransport(HttpTransport):
    """
    Synchronous httpx transport.

    A fresh `httpx.Client` is opened for every request and closed before `send`
    returns, so no connection state outlives a call.

    `httpx.Timeout` only bounds each connect/read/write step; the body is
    streamed and checked against one deadline so `timeout` also caps the total
    transfer.
    """

    def __init__(
        self,
        client_factory: Callable[..., httpx.Client] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._client_factory = client_factory or httpx.Client
        self._clock = clock

    def _check_deadline(self, deadline: float, resp: httpx.Response, timeout: float) -> None:
        if self._clock() > deadline:
            raise TransferTimeout(f"transfer exceeded {timeout}s", request=resp.request)

    def send(self, request: HttpRequest, *, timeout: float, verify_ssl: bool) -> TransportResult:
        deadline = self._clock() + timeout
        try:
            with self._client_factory(
                timeout=httpx.Timeout(timeout),
                verify=verify_ssl,
                follow_redirects=False,
            ) as client:
                with client.stream(
                    request.method.value,
                    request.url,
                    headers=dict(request.headers),
                    content=request.body or None,
                ) as resp:
                    self._check_deadline(deadline, resp, timeout)
                    content = bytearray()
                    for chunk in resp.iter_bytes():
                        if not chunk:
                            continue
                        content.extend(chunk)
                        self._check_deadline(deadline, resp, timeout)

                return TransportResult(
                    ok=True,
                    status_code=resp.status_code,
                    header_block=_header_block(resp),
                    body=bytes(content),
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            category = categorize_exception(exc)
            logger.debug("%s request failed: %s (%s)", request.method.value, type(exc).__name__, category.value)
            return TransportResult(
                ok=False,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error_category=category,
            )


__all__ = ["HttpxTransport", "TransferTimeout"]
