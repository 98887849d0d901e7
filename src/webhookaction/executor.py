# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Issue the single outbound request and compute the success flag."""

from __future__ import annotations

import logging

from .errors import ErrorCategory, TransportError
from .http.client import HttpClient
from .http.models import HttpRequest
from .models.request import RequestSpec
from .models.result import ExecutionResult

logger = logging.getLogger(__name__)


def to_http_request(spec: RequestSpec, *, allow_redirects: bool = True) -> HttpRequest:
    return HttpRequest(
        url=spec.url,
        method=spec.method,
        headers=dict(spec.headers),
        body=spec.body if spec.carries_body else None,
        allow_redirects=allow_redirects,
    )


def execute(client: HttpClient, spec: RequestSpec, *, allow_redirects: bool = True) -> ExecutionResult:
    """
    Send `spec` exactly once.

    Non-2xx responses are not errors here; only a missing response raises TransportError.
    """
    logger.debug("Dispatching %s %s", spec.method, spec.url)
    response = client.request(to_http_request(spec, allow_redirects=allow_redirects))

    if not response.ok or response.status_code is None:
        category = response.meta.get("error_category", ErrorCategory.UNKNOWN_ERROR)
        raise TransportError(
            response.error_message or "no response received",
            category=category,
            error_type=response.error_type,
        )

    success = spec.is_success(response.status_code)
    logger.debug("%s %s returned %s (success=%s)", spec.method, spec.url, response.status_code, success)
    return ExecutionResult(
        status_code=response.status_code,
        body=response.text or "",
        success=success,
    )


__all__ = ["execute", "to_http_request"]
