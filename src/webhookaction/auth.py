# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Authorization header resolution.

Schemes are tried in a fixed order and the first one whose secrets are present wins:

1. bearer token
2. basic auth (username and password)
3. pre-issued OAuth2 authorization-code access token
4. OAuth2 client credentials (fetches a token over the network)

Adding a scheme means inserting one entry into `AUTH_SCHEMES` at the right position.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Callable
from dataclasses import dataclass

from .errors import NoAuthConfiguredError
from .http.client import HttpClient
from .models.params import AuthContext
from .oauth2 import SECRET_CLIENT_SECRET, ClientCredentialsConfig, fetch_client_credentials_token

logger = logging.getLogger(__name__)

SECRET_BEARER_TOKEN = "BEARER_AUTH_TOKEN"
SECRET_BASIC_USERNAME = "BASIC_USERNAME"
SECRET_BASIC_PASSWORD = "BASIC_PASSWORD"
SECRET_OAUTH2_ACCESS_TOKEN = "OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN"

BEARER_PREFIX = "Bearer "


def bearer(token: str) -> str:
    return token if token.startswith(BEARER_PREFIX) else f"{BEARER_PREFIX}{token}"


def basic(username: str, password: str) -> str:
    encoded = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return f"Basic {encoded}"


@dataclass(frozen=True)
class AuthScheme:
    name: str
    applies: Callable[[AuthContext], bool]
    header: Callable[[AuthContext, HttpClient], str]


def _client_credentials(context: AuthContext, client: HttpClient) -> str:
    config = ClientCredentialsConfig.from_context(context)
    return bearer(fetch_client_credentials_token(client, config))


AUTH_SCHEMES: tuple[AuthScheme, ...] = (
    AuthScheme(
        "bearer",
        lambda ctx: bool(ctx.secret(SECRET_BEARER_TOKEN)),
        lambda ctx, _client: bearer(ctx.secret(SECRET_BEARER_TOKEN) or ""),
    ),
    AuthScheme(
        "basic",
        lambda ctx: bool(ctx.secret(SECRET_BASIC_USERNAME) and ctx.secret(SECRET_BASIC_PASSWORD)),
        lambda ctx, _client: basic(ctx.secret(SECRET_BASIC_USERNAME) or "", ctx.secret(SECRET_BASIC_PASSWORD) or ""),
    ),
    AuthScheme(
        "oauth2_authorization_code",
        lambda ctx: bool(ctx.secret(SECRET_OAUTH2_ACCESS_TOKEN)),
        lambda ctx, _client: bearer(ctx.secret(SECRET_OAUTH2_ACCESS_TOKEN) or ""),
    ),
    AuthScheme(
        "oauth2_client_credentials",
        lambda ctx: bool(ctx.secret(SECRET_CLIENT_SECRET)),
        _client_credentials,
    ),
)


def select_scheme(context: AuthContext, schemes: tuple[AuthScheme, ...] = AUTH_SCHEMES) -> AuthScheme | None:
    for scheme in schemes:
        if scheme.applies(context):
            return scheme
    return None


def resolve_authorization(
    context: AuthContext,
    client: HttpClient,
    schemes: tuple[AuthScheme, ...] = AUTH_SCHEMES,
) -> str:
    """Return an `Authorization` header value or raise NoAuthConfiguredError."""
    scheme = select_scheme(context, schemes)
    if scheme is None:
        raise NoAuthConfiguredError()
    logger.debug("Using %s authorization", scheme.name)
    return scheme.header(context, client)


__all__ = [
    "AUTH_SCHEMES",
    "AuthScheme",
    "basic",
    "bearer",
    "resolve_authorization",
    "select_scheme",
]
