# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable transports for tests and offline use."""

from __future__ import annotations

from ..errors import ErrorCategory
from .models import HttpMethod, HttpRequest, TransportResult
from .transport import HttpTransport


class StubTransport(HttpTransport):
    """
    Deterministic, programmable HttpTransport.

    Results are registered per `(method, path)`; the path is matched against the
    request URL with its query string removed, so signed query parameters do not
    need to be known in advance.
    """

    def __init__(self, results: dict[tuple[str, str], TransportResult] | None = None):
        self._results: dict[tuple[str, str], TransportResult] = dict(results or {})
        self.requests: list[HttpRequest] = []
        self.calls: list[dict[str, object]] = []

    def add(self, method: HttpMethod | str, url: str, result: TransportResult) -> None:
        self._results[(HttpMethod.coerce(method).value, url)] = result

    def add_json(self, method: HttpMethod | str, url: str, body: str, status_code: int = 200) -> None:
        """Register a JSON answer with a minimal header block."""
        header_block = f"HTTP/1.1 {status_code} \r\nContent-Type: application/json\r\n"
        self.add(method, url, TransportResult(ok=True, status_code=status_code, header_block=header_block, body=body.encode("utf-8")))

    def send(self, request: HttpRequest, *, timeout: float, verify_ssl: bool) -> TransportResult:
        self.requests.append(request)
        self.calls.append({"timeout": timeout, "verify_ssl": verify_ssl})
        key = (request.method.value, request.url.split("?", 1)[0])
        if key in self._results:
            return self._results[key]
        return TransportResult(
            ok=False,
            error_message="No stubbed response configured",
            error_type="LookupError",
            error_category=ErrorCategory.UNKNOWN_ERROR,
        )
