# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for wooclient."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from .errors import ConfigurationError
from .version import __version__

DEFAULT_API_VERSION = "v3"
DEFAULT_TIMEOUT = 15
DEFAULT_USER_AGENT = f"WooCommerce API Client-Python/{__version__}"

# Option names accepted by the original client's options array.
_MAPPING_KEYS = {
    "version": "api_version",
    "api_version": "api_version",
    "timeout": "timeout",
    "verify_ssl": "verify_ssl",
    "query_string_auth": "query_string_auth",
    "user_agent": "user_agent",
}


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip()
    return value or default


@dataclass(frozen=True)
class ClientOptions:
    """Per-client options. Immutable once built; validated by the constructors below."""

    api_version: str = DEFAULT_API_VERSION
    query_string_auth: bool = False
    verify_ssl: bool = True
    timeout: int = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> ClientOptions:
        """Create options from environment variables (evaluated at call time)."""
        options = cls(
            api_version=_str_env("WOOCLIENT_API_VERSION", cls.api_version),
            query_string_auth=_bool_env("WOOCLIENT_QUERY_STRING_AUTH", cls.query_string_auth),
            verify_ssl=_bool_env("WOOCLIENT_VERIFY_SSL", cls.verify_ssl),
            timeout=_int_env("WOOCLIENT_TIMEOUT", cls.timeout),
            user_agent=_str_env("WOOCLIENT_USER_AGENT", cls.user_agent),
        )
        options.validate()
        return options

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, base: ClientOptions | None = None) -> ClientOptions:
        """
        Build options from a plain mapping such as `{"version": "v3", "timeout": 30}`.

        Unknown keys and invalid values raise ConfigurationError. Keys that are not
        present keep the value from `base` (defaults when omitted).
        """
        changes: dict[str, Any] = {}
        for key, value in data.items():
            field_name = _MAPPING_KEYS.get(str(key))
            if field_name is None:
                raise ConfigurationError(f"Unknown client option: {key!r}")
            changes[field_name] = value
        options = replace(base or cls(), **changes)
        options.validate()
        return options

    def validate(self) -> None:
        if not isinstance(self.api_version, str) or not self.api_version.strip() or "/" in self.api_version:
            raise ConfigurationError(f"Invalid API version: {self.api_version!r}")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be a positive integer, got {self.timeout!r}")
        if not isinstance(self.verify_ssl, bool):
            raise ConfigurationError(f"verify_ssl must be a boolean, got {self.verify_ssl!r}")
        if not isinstance(self.query_string_auth, bool):
            raise ConfigurationError(f"query_string_auth must be a boolean, got {self.query_string_auth!r}")
        if not isinstance(self.user_agent, str) or not self.user_agent:
            raise ConfigurationError("user_agent must be a non-empty string")


def load_client_options() -> ClientOptions:
    """Load client options from environment with sensible defaults."""
    return ClientOptions.from_env()


__all__ = [
    "DEFAULT_API_VERSION",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "ClientOptions",
    "load_client_options",
]
