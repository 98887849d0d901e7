# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target URL composition."""

from __future__ import annotations

from ..errors import NoURLSpecifiedError, SuffixWithoutBaseError


def join_url(base: str, suffix: str | None) -> str:
    """
    Join `base` and `suffix` with exactly one `/` at the seam.

    Example:
      https://api.example.com/ + /users -> https://api.example.com/users
    """
    if base.endswith("/"):
        base = base[:-1]
    if not suffix:
        return base
    return f"{base}/{suffix[1:] if suffix.startswith('/') else suffix}"


def compose_url(
    explicit_address: str | None,
    env_address: str | None = None,
    suffix: str | None = None,
) -> str:
    """Pick the explicit address, else the environment address, and append the optional suffix."""
    base = explicit_address or env_address
    if not base:
        if suffix:
            raise SuffixWithoutBaseError()
        raise NoURLSpecifiedError()
    return join_url(base, suffix)


__all__ = ["compose_url", "join_url"]
