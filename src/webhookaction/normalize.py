# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request normalization.

Headers, body and accepted status codes arrive either as JSON text or as decoded values.
Each is resolved once into its canonical form here; nothing downstream branches on the
original shape.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from .errors import AcceptedStatusCodesParseError, HeaderParseError
from .http.headers import set_default_header
from .models.params import WebhookParams
from .models.request import BODY_METHODS, InputKind, RawInput, RequestSpec

DEFAULT_CONTENT_TYPE = "application/json"


def normalize_headers(raw: Any) -> dict[str, str]:
    """Return a fresh header dict; the caller's mapping is never mutated."""
    value = RawInput.of(raw)
    if value.kind is InputKind.ABSENT:
        return {}
    if value.kind is InputKind.TEXT:
        try:
            decoded = json.loads(value.value)
        except ValueError as exc:
            raise HeaderParseError(str(exc)) from exc
        if not isinstance(decoded, Mapping):
            raise HeaderParseError(f"expected a JSON object, got {type(decoded).__name__}")
    elif isinstance(value.value, Mapping):
        decoded = value.value
    else:
        raise HeaderParseError(f"expected a mapping, got {type(value.value).__name__}")
    return {str(key): "" if item is None else str(item) for key, item in decoded.items()}


def serialize_body(raw: Any) -> str | None:
    value = RawInput.of(raw)
    if value.kind is InputKind.ABSENT:
        return None
    if value.kind is InputKind.TEXT:
        return value.value
    if isinstance(value.value, (bytes, bytearray)):
        return bytes(value.value).decode("utf-8", errors="replace")
    return json.dumps(value.value, separators=(",", ":"), ensure_ascii=False)


def _coerce_status_codes(decoded: Any) -> tuple[int, ...] | None:
    if isinstance(decoded, (str, bytes)) or not isinstance(decoded, Sequence):
        return None
    codes: list[int] = []
    for item in decoded:
        if isinstance(item, bool) or not isinstance(item, int):
            return None
        codes.append(item)
    return tuple(codes)


def normalize_accepted_status_codes(raw: Any) -> tuple[int, ...]:
    value = RawInput.of(raw)
    if value.kind is InputKind.ABSENT:
        return ()
    decoded = value.value
    if value.kind is InputKind.TEXT:
        try:
            decoded = json.loads(value.value)
        except ValueError as exc:
            raise AcceptedStatusCodesParseError(str(exc)) from exc
    codes = _coerce_status_codes(decoded)
    if codes is None:
        raise AcceptedStatusCodesParseError(f"expected a list of integers, got {decoded!r}")
    return codes


def build_request_spec(
    params: WebhookParams,
    url: str,
    *,
    user_agent: str | None = None,
) -> RequestSpec:
    """Assemble the canonical request; the body is dropped for methods that do not carry one."""
    method = str(params.method).strip().upper()
    headers = normalize_headers(params.request_headers)
    body = serialize_body(params.request_body) if method in BODY_METHODS else None
    accepted = normalize_accepted_status_codes(params.accepted_status_codes)

    if body is not None:
        set_default_header(headers, "Content-Type", DEFAULT_CONTENT_TYPE)
    if user_agent:
        set_default_header(headers, "User-Agent", user_agent)

    return RequestSpec(
        method=method,
        url=url,
        headers=headers,
        body=body,
        accepted_status_codes=accepted,
    )


__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "build_request_spec",
    "normalize_accepted_status_codes",
    "normalize_headers",
    "serialize_body",
]
