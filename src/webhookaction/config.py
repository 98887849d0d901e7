# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for the webhook action."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"WebhookAction/{__version__}"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP transport defaults."""

    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("WEBHOOKACTION_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_body_bytes = _int_env("WEBHOOKACTION_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=timeout,
            user_agent=os.getenv("WEBHOOKACTION_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("WEBHOOKACTION_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("WEBHOOKACTION_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


@dataclass
class ActionSettings:
    """
    Outcome policy for the action.

    `strict_status` switches non-success responses from a reported `success: false`
    into a failed invocation.
    """

    strict_status: bool = False

    @classmethod
    def from_env(cls) -> "ActionSettings":
        return cls(strict_status=_bool_env("WEBHOOKACTION_STRICT_STATUS", cls.strict_status))


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_action_settings() -> ActionSettings:
    return ActionSettings.from_env()
