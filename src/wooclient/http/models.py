# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across wooclient."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from .headers import header_value, parse_header_block

if TYPE_CHECKING:
    from ..errors import ErrorCategory

Headers = Mapping[str, str]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def coerce(cls, value: HttpMethod | str) -> HttpMethod:
        """Accept an HttpMethod or a case-insensitive verb name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value!r}") from None


def _frozen_mapping(value: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True)
class Credentials:
    """API consumer credentials. The secret is kept out of reprs."""

    consumer_key: str
    consumer_secret: str = field(repr=False)


@dataclass(frozen=True)
class HttpRequest:
    """Fully built outbound request. Defaults describe an empty placeholder request."""

    url: str = ""
    method: HttpMethod = HttpMethod.GET
    parameters: Headers = field(default_factory=dict)
    headers: Headers = field(default_factory=dict, repr=False)
    body: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod.coerce(self.method))
        object.__setattr__(self, "parameters", _frozen_mapping(self.parameters))
        object.__setattr__(self, "headers", _frozen_mapping(self.headers))
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    @property
    def raw_headers(self) -> list[str]:
        """Headers rendered as `Key: Value` lines."""
        return [f"{key}: {value}" for key, value in self.headers.items()]

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class HttpResponse:
    """Received response. Defaults describe an empty placeholder response."""

    status_code: int = 0
    headers: Headers = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _frozen_mapping(self.headers))
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    @classmethod
    def from_raw(cls, status_code: int | None, header_block: str | bytes | None, body: bytes | str | None) -> HttpResponse:
        """Build a response from the transport's raw status, header block and body."""
        return cls(
            status_code=int(status_code or 0),
            headers=parse_header_block(header_block),
            body=body or b"",
        )

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)


@dataclass(frozen=True)
class TransportResult:
    """What an HttpTransport hands back: wire data on success, failure details otherwise."""

    ok: bool
    status_code: int | None = None
    header_block: str = ""
    body: bytes = b""
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory | None = None

    def to_response(self) -> HttpResponse:
        return HttpResponse.from_raw(self.status_code, self.header_block, self.body)


__all__ = [
    "Credentials",
    "Headers",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "TransportResult",
]
