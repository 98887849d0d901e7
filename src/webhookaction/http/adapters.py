# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse

Responder = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Responses are keyed by URL; a value may be a fixed HttpResponse or a callable that
    receives the request. Every request is recorded in `requests`.
    """

    def __init__(self, responses: dict[str, HttpResponse | Responder] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | Responder) -> None:
        self._responses[url] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        response = self._responses.get(request.url)
        if response is None:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")
        if callable(response):
            return response(request)
        return response

    def close(self) -> None:
        self.closed = True
