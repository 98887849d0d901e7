# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Invocation inputs as received from the hosting job framework."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

ENV_ADDRESS = "ADDRESS"


def _string_mapping(raw: Any) -> Mapping[str, str]:
    if not isinstance(raw, Mapping):
        return MappingProxyType({})
    out: dict[str, str] = {}
    for key, value in raw.items():
        if key is None or value is None:
            continue
        out[str(key)] = str(value)
    return MappingProxyType(out)


@dataclass(frozen=True)
class AuthContext:
    """Environment and secrets supplied for a single invocation."""

    environment: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    secrets: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> AuthContext:
        data = data or {}
        return cls(
            environment=_string_mapping(data.get("environment")),
            secrets=_string_mapping(data.get("secrets")),
        )

    def env(self, name: str) -> str | None:
        return self.environment.get(name) or None

    def secret(self, name: str) -> str | None:
        return self.secrets.get(name) or None

    def setting(self, name: str) -> str | None:
        """Read a non-secret setting from the environment, falling back to secrets."""
        return self.env(name) or self.secret(name)

    @property
    def base_address(self) -> str | None:
        return self.env(ENV_ADDRESS)


@dataclass
class WebhookParams:
    """
    Declarative request parameters.

    `request_body`, `request_headers` and `accepted_status_codes` keep whatever shape the
    framework delivered (string or structured); the normalizer resolves them.
    """

    method: str | None = None
    address: str | None = None
    address_suffix: str | None = None
    request_body: Any = None
    request_headers: Any = None
    accepted_status_codes: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> WebhookParams:
        data = data or {}
        return cls(
            method=data.get("method"),
            address=data.get("address"),
            address_suffix=data.get("addressSuffix"),
            request_body=data.get("requestBody"),
            request_headers=data.get("requestHeaders"),
            accepted_status_codes=data.get("acceptedStatusCodes"),
        )
