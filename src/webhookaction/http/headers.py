# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header helpers.

HTTP header field names are case-insensitive (RFC 9110), but caller-supplied header
mappings are dispatched with the key casing the caller chose. Presence checks therefore
scan keys case-insensitively instead of normalizing the mapping.
"""

from __future__ import annotations

from collections.abc import Mapping


def find_header(headers: Mapping[str, object] | None, name: str) -> str | None:
    """Return the key under which `name` is stored, matching case-insensitively."""
    if not headers or not name:
        return None
    if name in headers:
        return name
    lower = name.lower()
    for key in headers:
        if key is None:
            continue
        if str(key).lower() == lower:
            return key
    return None


def has_header(headers: Mapping[str, object] | None, name: str) -> bool:
    return find_header(headers, name) is not None


def header_value(headers: Mapping[str, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    key = find_header(headers, name)
    if key is None:
        return default
    value = headers[key]  # type: ignore[index]
    return default if value is None else str(value).strip()


def set_default_header(headers: dict[str, str], name: str, value: str) -> bool:
    """Set `name` unless a header with that name already exists in any casing."""
    if has_header(headers, name):
        return False
    headers[name] = value
    return True


__all__ = ["find_header", "has_header", "header_value", "set_default_header"]
