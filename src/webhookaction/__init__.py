# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Webhook action package entrypoint.

Provides a single configurable HTTP request invoker for job-execution frameworks:
URL composition, authorization resolution (bearer, basic, OAuth2), request
normalization, one outbound request, and retry-versus-fatal error classification.
HTTP behavior is abstracted behind an injectable client interface.
"""

from .action import WebhookAction, error, halt, invoke
from .classifier import Verdict, classify_error, verdict_for
from .config import ActionSettings, HttpSettings, load_action_settings, load_http_settings
from .errors import ErrorCategory, ErrorKind, WebhookError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import AuthContext, RequestSpec, WebhookParams, WebhookResult
from .version import __version__

__all__ = [
    "ActionSettings",
    "AuthContext",
    "ErrorCategory",
    "ErrorKind",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "RequestSpec",
    "StubHttpClient",
    "Verdict",
    "WebhookAction",
    "WebhookError",
    "WebhookParams",
    "WebhookResult",
    "classify_error",
    "create_default_http_client",
    "error",
    "halt",
    "invoke",
    "load_action_settings",
    "load_http_settings",
    "setup_logging",
    "verdict_for",
    "__version__",
]
