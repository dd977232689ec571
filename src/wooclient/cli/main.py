# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""wooclient CLI: issue one authenticated API call and print the decoded payload."""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import replace
from typing import Any

from ..client import WooClient
from ..config import ClientOptions, load_client_options
from ..errors import ApiError, RequestPreconditionError, TransportError, WooClientError, error_category_to_reason
from ..http.models import HttpMethod
from ..http.transport import HttpTransport
from ..log import setup_logging

EXIT_OK = 0
EXIT_API_FAILURE = 1
EXIT_USAGE = 2


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    return key, value


def _json_data(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"--data is not valid JSON: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Call a WooCommerce legacy REST API endpoint")
    parser.add_argument("url", help="Store URL, e.g. https://shop.example")
    parser.add_argument("method", type=str.upper, choices=[m.value for m in HttpMethod], help="HTTP verb")
    parser.add_argument("endpoint", help="Endpoint relative to the API root, e.g. products")
    parser.add_argument("--consumer-key", default=os.getenv("WOOCLIENT_CONSUMER_KEY"), help="Consumer key (env: WOOCLIENT_CONSUMER_KEY)")
    parser.add_argument(
        "--consumer-secret",
        default=os.getenv("WOOCLIENT_CONSUMER_SECRET"),
        help="Consumer secret (env: WOOCLIENT_CONSUMER_SECRET)",
    )
    parser.add_argument("--param", "-p", action="append", type=_key_value, default=[], metavar="KEY=VALUE", help="Query parameter (repeatable)")
    parser.add_argument("--data", "-d", type=_json_data, default=None, help="JSON request body")
    parser.add_argument("--api-version", default=None, help="API version segment (default: v3)")
    parser.add_argument("--timeout", type=int, default=None, help="Connect and transfer timeout in seconds")
    parser.add_argument("--query-string-auth", action="store_true", help="Send credentials as query parameters over https")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for staging/self-signed stores)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (env: WOOCLIENT_LOG_LEVEL)")
    return parser


def options_from_args(args: argparse.Namespace, base: ClientOptions | None = None) -> ClientOptions:
    options = base or load_client_options()
    changes: dict[str, Any] = {}
    if args.api_version:
        changes["api_version"] = args.api_version
    if args.timeout is not None:
        changes["timeout"] = args.timeout
    if args.query_string_auth:
        changes["query_string_auth"] = True
    if args.ignore_ssl_errors:
        changes["verify_ssl"] = False
    options = replace(options, **changes)
    options.validate()
    return options


def _describe_error(exc: WooClientError) -> str:
    if isinstance(exc, TransportError):
        reason = error_category_to_reason(exc.category)
        return f"{exc} ({reason})" if reason else str(exc)
    if isinstance(exc, ApiError):
        return f"{exc} (HTTP {exc.status_code})"
    return str(exc)


def main(argv: list[str] | None = None, *, transport: HttpTransport | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.consumer_key or not args.consumer_secret:
        print("error: consumer key and secret are required", file=sys.stderr)
        return EXIT_USAGE

    try:
        options = options_from_args(args)
        client = WooClient(args.url, args.consumer_key, args.consumer_secret, options, transport=transport)
        payload = client.request(args.endpoint, args.method, args.data, dict(args.param))
    except (RequestPreconditionError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except WooClientError as exc:
        print(f"error: {_describe_error(exc)}", file=sys.stderr)
        return EXIT_API_FAILURE

    json.dump(payload, sys.stdout, indent=2, sort_keys=True, ensure_ascii=False)
    sys.stdout.write("\n")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
