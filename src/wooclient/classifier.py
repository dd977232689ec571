# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Decode response bodies and separate successes from API errors."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import ApiError, ErrorShape, InvalidResponseBody
from .http.models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

SUCCESS_STATUS_CODES = frozenset({200, 201, 202})


def _scan_object_end(text: str, start: int) -> int | None:
    """Index just past the `}` closing the object opened at `start`, or None."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return None


def extract_json_object(text: str | None) -> str | None:
    """
    Return the first balanced top-level `{...}` substring of `text`.

    Leading and trailing noise (PHP notices, cache plugin markup) is ignored.
    Braces inside JSON string literals do not count. When an opening brace is
    never closed the scan resumes at the next one.
    """
    if not text:
        return None
    start = text.find("{")
    while start != -1:
        end = _scan_object_end(text, start)
        if end is not None:
            return text[start:end]
        start = text.find("{", start + 1)
    return None


def decode_body(body: bytes | str | None) -> dict[str, Any] | None:
    """Sanitize and decode a response body; None when no JSON object is recoverable."""
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8", errors="replace")
    snippet = extract_json_object(body)
    if snippet is None:
        return None
    try:
        decoded = json.loads(snippet)
    except (ValueError, RecursionError):
        return None
    return decoded if isinstance(decoded, dict) else None


@dataclass(frozen=True)
class ErrorDetail:
    message: str
    code: str
    shape: ErrorShape


def _message_and_code(candidate: Any) -> tuple[str, str] | None:
    if isinstance(candidate, Mapping) and "message" in candidate and "code" in candidate:
        return str(candidate["message"]), str(candidate["code"])
    return None


def parse_error_payload(payload: Mapping[str, Any]) -> ErrorDetail:
    """
    Decode the `errors` member of an error payload.

    Endpoints answer with either a list (`errors[0].message`) or a single object
    (`errors.message`). Anything else becomes the UNRECOGNIZED variant with empty
    message and code.
    """
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        found = _message_and_code(errors[0])
        if found is not None:
            return ErrorDetail(message=found[0], code=found[1], shape=ErrorShape.LIST)
    found = _message_and_code(errors)
    if found is not None:
        return ErrorDetail(message=found[0], code=found[1], shape=ErrorShape.SINGLE)
    return ErrorDetail(message="", code="", shape=ErrorShape.UNRECOGNIZED)


def classify_response(request: HttpRequest, response: HttpResponse) -> dict[str, Any]:
    """Return the decoded payload for a successful response, raise otherwise."""
    payload = decode_body(response.body)
    if payload is None:
        raise InvalidResponseBody("Invalid JSON returned", request=request, response=response)

    if response.status_code in SUCCESS_STATUS_CODES:
        return payload

    detail = parse_error_payload(payload)
    logger.debug("HTTP %s with %s error payload", response.status_code, detail.shape.value)
    raise ApiError(
        detail.message,
        detail.code,
        shape=detail.shape,
        request=request,
        response=response,
    )


__all__ = [
    "SUCCESS_STATUS_CODES",
    "ErrorDetail",
    "classify_response",
    "decode_body",
    "extract_json_object",
    "parse_error_payload",
]
