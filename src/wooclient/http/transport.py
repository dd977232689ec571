# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from typing import Protocol

from ..errors import ConfigurationError
from .models import HttpRequest, TransportResult


class HttpTransport(Protocol):
    """Executes one fully built request. Failures come back as `ok=False` results."""

    def send(self, request: HttpRequest, *, timeout: float, verify_ssl: bool) -> TransportResult: ...


def create_default_transport() -> HttpTransport:
    """Factory for the default httpx-backed transport."""
    try:
        from .httpx_transport import HttpxTransport
    except ImportError as exc:
        raise ConfigurationError("httpx is not installed; no HTTP transport is available") from exc

    return HttpxTransport()
