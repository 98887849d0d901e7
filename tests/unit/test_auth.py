# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import base64
import json
from urllib.parse import parse_qs

import pytest

from webhookaction.auth import AUTH_SCHEMES, resolve_authorization, select_scheme
from webhookaction.errors import (
    ErrorKind,
    MissingOAuth2ConfigError,
    NoAuthConfiguredError,
    OAuth2NoAccessTokenError,
    OAuth2TokenRequestError,
    TransportError,
)
from webhookaction.http import HttpResponse, StubHttpClient
from webhookaction.models import AuthContext

TOKEN_URL = "https://auth.example.com/oauth/token"


def _context(secrets=None, environment=None):
    return AuthContext.from_mapping({"secrets": secrets or {}, "environment": environment or {}})


def _client_credentials_context(**env):
    environment = {
        "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL": TOKEN_URL,
        "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID": "client-id",
    }
    environment.update(env)
    return _context({"OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET": "client-secret"}, environment)


def test_scheme_order_is_fixed():
    assert [scheme.name for scheme in AUTH_SCHEMES] == [
        "bearer",
        "basic",
        "oauth2_authorization_code",
        "oauth2_client_credentials",
    ]


def test_bearer_token_is_prefixed():
    client = StubHttpClient()
    assert resolve_authorization(_context({"BEARER_AUTH_TOKEN": "secret-token"}), client) == "Bearer secret-token"


def test_bearer_token_already_prefixed_is_used_verbatim():
    client = StubHttpClient()
    header = resolve_authorization(_context({"BEARER_AUTH_TOKEN": "Bearer abc"}), client)
    assert header == "Bearer abc"


def test_basic_auth_encodes_credentials():
    header = resolve_authorization(_context({"BASIC_USERNAME": "user", "BASIC_PASSWORD": "pass"}), StubHttpClient())
    assert header == "Basic " + base64.b64encode(b"user:pass").decode()


def test_basic_auth_requires_both_secrets():
    with pytest.raises(NoAuthConfiguredError):
        resolve_authorization(_context({"BASIC_USERNAME": "user"}), StubHttpClient())


def test_bearer_wins_over_basic():
    context = _context({"BEARER_AUTH_TOKEN": "tok", "BASIC_USERNAME": "user", "BASIC_PASSWORD": "pass"})
    assert select_scheme(context).name == "bearer"
    assert resolve_authorization(context, StubHttpClient()) == "Bearer tok"


def test_pre_issued_oauth2_token():
    context = _context({"OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN": "access"})
    assert resolve_authorization(context, StubHttpClient()) == "Bearer access"


def test_higher_precedence_scheme_skips_token_fetch():
    client = StubHttpClient()
    context = _context(
        {"OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN": "access", "OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET": "s"},
        {"OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL": TOKEN_URL, "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID": "id"},
    )
    assert resolve_authorization(context, client) == "Bearer access"
    assert client.requests == []


def test_no_auth_configured():
    with pytest.raises(NoAuthConfiguredError) as excinfo:
        resolve_authorization(_context(), StubHttpClient())
    assert excinfo.value.kind is ErrorKind.NO_AUTH_CONFIGURED


def test_client_credentials_uses_basic_header_by_default():
    client = StubHttpClient({TOKEN_URL: HttpResponse(ok=True, status_code=200, text='{"access_token":"fetched"}')})
    header = resolve_authorization(_client_credentials_context(OAUTH2_CLIENT_CREDENTIALS_SCOPE="read write"), client)

    assert header == "Bearer fetched"
    request = client.requests[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.headers["Authorization"] == "Basic " + base64.b64encode(b"client-id:client-secret").decode()
    form = parse_qs(request.body)
    assert form == {"grant_type": ["client_credentials"], "scope": ["read write"]}


def test_client_credentials_in_params_style():
    client = StubHttpClient({TOKEN_URL: HttpResponse(ok=True, status_code=200, text='{"access_token":"fetched"}')})
    context = _client_credentials_context(
        OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE="InParams",
        OAUTH2_CLIENT_CREDENTIALS_AUDIENCE="https://api.example.com",
    )
    resolve_authorization(context, client)

    request = client.requests[0]
    assert "Authorization" not in request.headers
    form = parse_qs(request.body)
    assert form["client_id"] == ["client-id"]
    assert form["client_secret"] == ["client-secret"]
    assert form["audience"] == ["https://api.example.com"]


def test_client_credentials_settings_fall_back_to_secrets():
    client = StubHttpClient({TOKEN_URL: HttpResponse(ok=True, status_code=200, text='{"access_token":"t"}')})
    context = _context(
        {
            "OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET": "s",
            "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL": TOKEN_URL,
            "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID": "id",
        }
    )
    assert resolve_authorization(context, client) == "Bearer t"


def test_client_credentials_fetches_a_fresh_token_every_time():
    tokens = iter(["first", "second"])

    def responder(_request):
        return HttpResponse(ok=True, status_code=200, text=json.dumps({"access_token": next(tokens)}))

    client = StubHttpClient({TOKEN_URL: responder})
    context = _client_credentials_context()
    assert resolve_authorization(context, client) == "Bearer first"
    assert resolve_authorization(context, client) == "Bearer second"
    assert len(client.requests) == 2


def test_client_credentials_missing_config():
    context = _context({"OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET": "s"})
    with pytest.raises(MissingOAuth2ConfigError) as excinfo:
        resolve_authorization(context, StubHttpClient())
    assert "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL" in str(excinfo.value)
    assert "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID" in str(excinfo.value)
    assert "is required" in str(excinfo.value)


def test_client_credentials_token_error_prefers_json_body():
    client = StubHttpClient(
        {TOKEN_URL: HttpResponse(ok=True, status_code=401, text='{"error": "invalid_client"}')}
    )
    with pytest.raises(OAuth2TokenRequestError) as excinfo:
        resolve_authorization(_client_credentials_context(), client)
    assert excinfo.value.status_code == 401
    assert '{"error":"invalid_client"}' in str(excinfo.value)


def test_client_credentials_token_error_keeps_raw_text():
    client = StubHttpClient({TOKEN_URL: HttpResponse(ok=True, status_code=500, text="upstream down")})
    with pytest.raises(OAuth2TokenRequestError) as excinfo:
        resolve_authorization(_client_credentials_context(), client)
    assert "upstream down" in str(excinfo.value)


def test_client_credentials_without_access_token():
    client = StubHttpClient({TOKEN_URL: HttpResponse(ok=True, status_code=200, text='{"token_type":"bearer"}')})
    with pytest.raises(OAuth2NoAccessTokenError):
        resolve_authorization(_client_credentials_context(), client)


def test_client_credentials_transport_failure():
    client = StubHttpClient({TOKEN_URL: HttpResponse(ok=False, error_message="Connection refused")})
    with pytest.raises(TransportError) as excinfo:
        resolve_authorization(_client_credentials_context(), client)
    assert str(excinfo.value) == "fetch failed: Connection refused"
