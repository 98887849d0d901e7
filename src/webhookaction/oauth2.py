# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
OAuth2 client-credentials token fetch.

Tokens are fetched on every invocation and never cached; each invocation is independent
of the previous one.
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from .errors import (
    ErrorCategory,
    MissingOAuth2ConfigError,
    OAuth2NoAccessTokenError,
    OAuth2TokenRequestError,
    TransportError,
)
from .http.client import HttpClient
from .http.models import HttpRequest, HttpResponse
from .models.params import AuthContext

logger = logging.getLogger(__name__)

SECRET_CLIENT_SECRET = "OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET"
ENV_TOKEN_URL = "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL"
ENV_CLIENT_ID = "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID"
ENV_SCOPE = "OAUTH2_CLIENT_CREDENTIALS_SCOPE"
ENV_AUDIENCE = "OAUTH2_CLIENT_CREDENTIALS_AUDIENCE"
ENV_AUTH_STYLE = "OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE"

AUTH_STYLE_IN_PARAMS = "inparams"


@dataclass(frozen=True)
class ClientCredentialsConfig:
    token_url: str
    client_id: str
    client_secret: str
    scope: str | None = None
    audience: str | None = None
    auth_style: str | None = None

    @property
    def credentials_in_params(self) -> bool:
        return (self.auth_style or "").replace("_", "").replace("-", "").lower() == AUTH_STYLE_IN_PARAMS

    @classmethod
    def from_context(cls, context: AuthContext) -> ClientCredentialsConfig:
        client_secret = context.secret(SECRET_CLIENT_SECRET) or ""
        token_url = context.setting(ENV_TOKEN_URL)
        client_id = context.setting(ENV_CLIENT_ID)
        missing = [name for name, value in ((ENV_TOKEN_URL, token_url), (ENV_CLIENT_ID, client_id)) if not value]
        if missing:
            raise MissingOAuth2ConfigError(missing)
        return cls(
            token_url=token_url or "",
            client_id=client_id or "",
            client_secret=client_secret,
            scope=context.setting(ENV_SCOPE),
            audience=context.setting(ENV_AUDIENCE),
            auth_style=context.setting(ENV_AUTH_STYLE),
        )


def build_token_request(config: ClientCredentialsConfig) -> HttpRequest:
    form = {"grant_type": "client_credentials"}
    if config.scope:
        form["scope"] = config.scope
    if config.audience:
        form["audience"] = config.audience

    headers = {
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": "application/json",
    }
    if config.credentials_in_params:
        form["client_id"] = config.client_id
        form["client_secret"] = config.client_secret
    else:
        raw = f"{config.client_id}:{config.client_secret}".encode()
        headers["Authorization"] = f"Basic {base64.b64encode(raw).decode('ascii')}"

    return HttpRequest(url=config.token_url, method="POST", headers=headers, body=urlencode(form))


def _error_detail(response: HttpResponse) -> str:
    """Prefer a structured JSON error body, else the raw text."""
    text = response.text or ""
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    return json.dumps(payload, separators=(",", ":"))


def fetch_client_credentials_token(client: HttpClient, config: ClientCredentialsConfig) -> str:
    """POST the client-credentials grant and return the raw access token."""
    logger.debug("Requesting OAuth2 client credentials token from %s", config.token_url)
    response = client.request(build_token_request(config))
    if not response.ok or response.status_code is None:
        category = response.meta.get("error_category", ErrorCategory.UNKNOWN_ERROR)
        raise TransportError(
            response.error_message or "no response from token endpoint",
            category=category,
            error_type=response.error_type,
        )

    if not 200 <= response.status_code < 300:
        raise OAuth2TokenRequestError(response.status_code, _error_detail(response))

    try:
        payload = json.loads(response.text or "")
    except ValueError:
        payload = None
    token = payload.get("access_token") if isinstance(payload, dict) else None
    if not token:
        raise OAuth2NoAccessTokenError()
    return str(token)


__all__ = [
    "ClientCredentialsConfig",
    "build_token_request",
    "fetch_client_credentials_token",
]
