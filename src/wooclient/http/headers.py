# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header parsing and lookup utilities.

Response headers are kept exactly as received (original casing, wire order, last
write wins on duplicate names). Lookups that need RFC 9110 case-insensitivity go
through `header_value`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def parse_header_block(block: str | bytes | None) -> dict[str, str]:
    """
    Parse a raw header block into a mapping.

    The block is the unparsed header text as read from the wire: the status line
    first, then one `Key: Value` line per header. Status lines (including those of
    interim `1xx` responses) and blank lines are skipped, as are lines without a
    colon.
    """
    if not block:
        return {}
    if isinstance(block, (bytes, bytearray)):
        block = bytes(block).decode("iso-8859-1")

    headers: dict[str, str] = {}
    for raw_line in block.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith("HTTP/"):
            continue
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if not key:
            continue
        headers[key] = value.strip()
    return headers


def format_header_block(status_line: str, headers: Iterable[tuple[str, str]]) -> str:
    """Render a status line and header pairs back into a raw header block."""
    lines = [status_line.strip()]
    lines.extend(f"{key}: {value}" for key, value in headers)
    return "\r\n".join(lines) + "\r\n"


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Fast-paths the exact key before falling back to a full scan.
    """
    if not headers or not name:
        return default

    if name in headers:
        value = headers.get(name)
        return default if value is None else str(value).strip()

    lower = name.lower()
    found = default
    for key, value in headers.items():
        if str(key).lower() == lower:
            found = default if value is None else str(value).strip()
    return found


__all__ = ["format_header_block", "header_value", "parse_header_block"]
