# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Framework-facing webhook action: invoke, error and halt handlers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from contextlib import suppress
from typing import Any

from .auth import resolve_authorization
from .classifier import classify_error
from .classifier import halt as halt_outcome
from .config import ActionSettings, HttpSettings, load_action_settings, load_http_settings
from .errors import MethodRequiredError, NoAuthConfiguredError, RemoteRequestFailedError
from .executor import execute
from .http.client import HttpClient, create_default_http_client
from .http.headers import has_header
from .http.url import compose_url
from .models.params import AuthContext, WebhookParams
from .models.request import RequestSpec
from .models.result import STATUS_SUCCESS, ActionOutcome, WebhookResult, utc_timestamp
from .normalize import build_request_spec

logger = logging.getLogger(__name__)


def _coerce_params(params: WebhookParams | Mapping[str, Any] | None) -> WebhookParams:
    if isinstance(params, WebhookParams):
        return params
    return WebhookParams.from_mapping(params)


def _coerce_context(context: AuthContext | Mapping[str, Any] | None) -> AuthContext:
    if isinstance(context, AuthContext):
        return context
    return AuthContext.from_mapping(context)


def _coerce_error(raw: Any) -> BaseException:
    if isinstance(raw, BaseException):
        return raw
    if isinstance(raw, Mapping):
        return RuntimeError(str(raw.get("message") or ""))
    return RuntimeError(str(raw or ""))


class WebhookAction:
    """
    Single-request webhook invoker.

    Each `invoke` call is independent: the URL, headers and credentials are resolved from
    the call's own params and context, and OAuth2 tokens are fetched fresh every time.
    Without an injected client, every run opens its own default client and closes it once
    the response is read, so no connection outlives an invocation. An injected client is
    owned by the caller and only released by `close()`.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        http_settings: HttpSettings | None = None,
        settings: ActionSettings | None = None,
    ):
        self.http_settings = http_settings or load_http_settings()
        self.settings = settings or load_action_settings()
        self.http_client = http_client

    def build_request(self, params: WebhookParams, context: AuthContext, client: HttpClient) -> RequestSpec:
        """Validate inputs and assemble the outbound request, including authorization."""
        if not params.method or not str(params.method).strip():
            raise MethodRequiredError()

        url = compose_url(params.address, context.base_address, params.address_suffix)
        spec = build_request_spec(params, url, user_agent=self.http_settings.user_agent)

        if not has_header(spec.headers, "Authorization"):
            try:
                spec.headers["Authorization"] = resolve_authorization(context, client)
            except NoAuthConfiguredError:
                logger.debug("No authorization configured; sending request unauthenticated")
        return spec

    def run(
        self,
        params: WebhookParams | Mapping[str, Any] | None,
        context: AuthContext | Mapping[str, Any] | None = None,
    ) -> WebhookResult:
        client = self.http_client if self.http_client is not None else create_default_http_client(self.http_settings)
        try:
            spec = self.build_request(_coerce_params(params), _coerce_context(context), client)
            execution = execute(client, spec, allow_redirects=self.http_settings.allow_redirects)
            executed_at = utc_timestamp()
        finally:
            if client is not self.http_client:
                client.close()

        if not execution.success and self.settings.strict_status:
            raise RemoteRequestFailedError(execution.status_code, execution.body)
        return WebhookResult.from_execution(execution, executed_at)

    def invoke(
        self,
        params: WebhookParams | Mapping[str, Any] | None,
        context: AuthContext | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        result = self.run(params, context)
        return ActionOutcome(status=STATUS_SUCCESS, data=result).to_dict()

    def error(self, params: Mapping[str, Any] | None, context: Any = None) -> dict[str, Any]:  # noqa: ARG002
        """Return `{"status": "retry_requested"}` or re-raise the error as fatal."""
        raw = (params or {}).get("error")
        return classify_error(_coerce_error(raw)).to_dict()

    def halt(self, params: Any = None, context: Any = None) -> dict[str, Any]:  # noqa: ARG002
        return halt_outcome().to_dict()

    def close(self) -> None:
        with suppress(Exception):
            if self.http_client is not None:
                self.http_client.close()

    def __enter__(self) -> WebhookAction:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def invoke(
    params: WebhookParams | Mapping[str, Any] | None,
    context: AuthContext | Mapping[str, Any] | None = None,
    *,
    http_client: HttpClient | None = None,
) -> dict[str, Any]:
    """Run one invocation with a fresh action; an injected client is left open for its owner."""
    return WebhookAction(http_client).invoke(params, context)


def error(params: Mapping[str, Any] | None, context: Any = None) -> dict[str, Any]:  # noqa: ARG001
    return classify_error(_coerce_error((params or {}).get("error"))).to_dict()


def halt(params: Any = None, context: Any = None) -> dict[str, Any]:  # noqa: ARG001
    return halt_outcome().to_dict()


__all__ = ["WebhookAction", "error", "halt", "invoke"]
