# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request authentication.

Three mutually exclusive modes exist, picked only from the URL scheme and the
`query_string_auth` option:

- QUERY_STRING: https, credentials appended as `consumer_key`/`consumer_secret`
- BASIC: https, credentials sent as transport-level basic auth (see builder)
- OAUTH: plain http, 2-legged OAuth 1.0a signature over method, URL and parameters

The Signer itself performs no I/O. Nonce and clock are injectable so that a
signature can be reproduced exactly.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Union
from urllib.parse import quote

from .errors import ReservedParameterError
from .http.models import Credentials, HttpMethod
from .http.url import is_secure_url

OAUTH_VERSION = "1.0"
SIGNATURE_METHOD = "HMAC-SHA256"
OAUTH_PARAMETER_PREFIX = "oauth_"
QUERY_AUTH_PARAMETERS = frozenset({"consumer_key", "consumer_secret"})
# Legacy API versions sign with the bare secret, without the token separator.
LEGACY_SIGNING_VERSIONS = frozenset({"v1", "v2"})


class AuthMode(str, Enum):
    QUERY_STRING = "query_string"
    BASIC = "basic"
    OAUTH = "oauth"


def select_auth_mode(url: str, query_string_auth: bool) -> AuthMode:
    """Pick the single authentication mode for a destination URL."""
    if not is_secure_url(url):
        return AuthMode.OAUTH
    return AuthMode.QUERY_STRING if query_string_auth else AuthMode.BASIC


def percent_encode(value: object) -> str:
    """RFC 3986 encoding: everything except `A-Z a-z 0-9 - . _ ~` is escaped."""
    return quote(str(value), safe="~")


@dataclass(frozen=True)
class QueryStringAuth:
    mode: ClassVar[AuthMode] = AuthMode.QUERY_STRING
    extra_params: Mapping[str, str] = field(default_factory=dict, repr=False)

    def apply(self, parameters: Mapping[str, str]) -> dict[str, str]:
        """Caller parameters first, then the credentials."""
        merged = dict(parameters)
        merged.update(self.extra_params)
        return merged


@dataclass(frozen=True)
class OAuthAuth:
    mode: ClassVar[AuthMode] = AuthMode.OAUTH
    signed_parameters: Mapping[str, str] = field(default_factory=dict)

    def apply(self, parameters: Mapping[str, str]) -> dict[str, str]:  # noqa: ARG002
        """The signed set already contains the caller parameters."""
        return dict(self.signed_parameters)

    @property
    def signature(self) -> str:
        return self.signed_parameters.get("oauth_signature", "")


SignedAuth = Union[QueryStringAuth, OAuthAuth]


def generate_nonce() -> str:
    return secrets.token_hex(16)


def normalize_parameters(parameters: Mapping[str, object]) -> list[tuple[str, str]]:
    """Encode every pair and sort by encoded key, then encoded value."""
    return sorted((percent_encode(key), percent_encode(value)) for key, value in parameters.items())


def signature_base_string(method: HttpMethod | str, url: str, parameters: Mapping[str, object]) -> str:
    """`METHOD&enc(url)&enc(k1=v1&k2=v2...)` over the normalized parameters."""
    query = "&".join(f"{key}={value}" for key, value in normalize_parameters(parameters))
    verb = HttpMethod.coerce(method).value
    return f"{verb}&{percent_encode(url)}&{percent_encode(query)}"


def signing_key(consumer_secret: str, api_version: str) -> str:
    key = percent_encode(consumer_secret)
    if api_version in LEGACY_SIGNING_VERSIONS:
        return key
    return f"{key}&"


def compute_signature(base_string: str, key: str) -> str:
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def _check_reserved(parameters: Mapping[str, object], mode: AuthMode) -> None:
    if mode is AuthMode.QUERY_STRING:
        clashes = sorted(key for key in parameters if key in QUERY_AUTH_PARAMETERS)
    else:
        clashes = sorted(key for key in parameters if str(key).startswith(OAUTH_PARAMETER_PREFIX))
    if clashes:
        raise ReservedParameterError(
            f"Parameters reserved for {mode.value} authentication: {', '.join(clashes)}"
        )


class Signer:
    """Produces the authentication parameters for one request."""

    def __init__(
        self,
        *,
        nonce_factory: Callable[[], str] = generate_nonce,
        clock: Callable[[], float] = time.time,
    ):
        self._nonce_factory = nonce_factory
        self._clock = clock

    def sign(
        self,
        url: str,
        method: HttpMethod | str,
        parameters: Mapping[str, str] | None,
        credentials: Credentials,
        api_version: str,
        mode: AuthMode,
    ) -> SignedAuth:
        params = dict(parameters or {})
        if mode is AuthMode.QUERY_STRING:
            return self.query_string(params, credentials)
        if mode is AuthMode.OAUTH:
            return self.oauth(url, method, params, credentials, api_version)
        raise ValueError("Basic authentication is applied by the request builder, not the signer")

    def query_string(self, parameters: Mapping[str, str], credentials: Credentials) -> QueryStringAuth:
        _check_reserved(parameters, AuthMode.QUERY_STRING)
        return QueryStringAuth(
            extra_params=MappingProxyType(
                {
                    "consumer_key": credentials.consumer_key,
                    "consumer_secret": credentials.consumer_secret,
                }
            )
        )

    def oauth(
        self,
        url: str,
        method: HttpMethod | str,
        parameters: Mapping[str, str],
        credentials: Credentials,
        api_version: str,
    ) -> OAuthAuth:
        _check_reserved(parameters, AuthMode.OAUTH)
        signed: dict[str, str] = {str(key): str(value) for key, value in parameters.items()}
        signed.update(
            {
                "oauth_consumer_key": credentials.consumer_key,
                "oauth_nonce": self._nonce_factory(),
                "oauth_signature_method": SIGNATURE_METHOD,
                "oauth_timestamp": str(int(self._clock())),
                "oauth_version": OAUTH_VERSION,
            }
        )
        base_string = signature_base_string(method, url, signed)
        signed["oauth_signature"] = compute_signature(base_string, signing_key(credentials.consumer_secret, api_version))
        return OAuthAuth(signed_parameters=MappingProxyType(signed))


__all__ = [
    "AuthMode",
    "OAuthAuth",
    "QueryStringAuth",
    "SignedAuth",
    "Signer",
    "compute_signature",
    "generate_nonce",
    "percent_encode",
    "select_auth_mode",
    "signature_base_string",
    "signing_key",
]
